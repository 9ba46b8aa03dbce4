# Log events
LINK_DELETED = 'LINK_DELETED'

# Error codes
MISSING_LINK_ID = 'MISSING_LINK_ID'
