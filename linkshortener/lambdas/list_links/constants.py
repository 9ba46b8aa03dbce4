# Error codes
MISSING_USER_ID = 'MISSING_USER_ID'
