# Log events
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'

# Error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
