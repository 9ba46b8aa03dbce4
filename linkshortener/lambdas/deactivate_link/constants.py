# Log events
LINK_DEACTIVATED = 'LINK_DEACTIVATED'

# Error codes
MISSING_LINK_ID = 'MISSING_LINK_ID'
