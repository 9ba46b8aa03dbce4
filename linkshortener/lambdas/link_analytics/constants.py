# Error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
