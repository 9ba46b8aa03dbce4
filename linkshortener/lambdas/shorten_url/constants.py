# Log events
LINK_CREATED = 'LINK_CREATED'

# Error codes
MISSING_ORIGINAL_URL = 'MISSING_ORIGINAL_URL'
INVALID_EXPIRES_AT = 'INVALID_EXPIRES_AT'
