# messages.py

# Templates are filled with str.format; {field} is the display name except in SUGGEST_VERIFY_VALUE.
REQUIRED_TEMPLATE = "{field} is required"
MIN_LENGTH_TEMPLATE = "{field} must be at least {length} characters"
MAX_LENGTH_TEMPLATE = "{field} must not exceed {length} characters"
LENGTH_BETWEEN_TEMPLATE = "{field} must be between {min_length} and {max_length} characters"
MIN_VALUE_TEMPLATE = "{field} must be at least {value}"
UNUSUALLY_HIGH_TEMPLATE = "{field} seems unusually high"
EXAMPLE_SUGGESTION_TEMPLATE = "Example: {example} ({hint})"

INVALID_CONTACT = "Contact format may be invalid"
INVALID_DATE = "Invalid date format (use YYYY-MM-DD)"
PAST_DATE = "Date must be in the future"
INVALID_DATE_ORDER = "Requested ship date must be after cargo ready date"
INVALID_CONTAINER = "Invalid container number (format: 4 letters + 7 digits)"
INVALID_BOOKING_CHARACTERS = "Booking number must contain only letters and numbers"
INVALID_PORT = "Invalid port code (use 5-letter UN/LOCODE)"
SAME_PORTS = "Port of loading and discharge are the same"

SUGGEST_DATE_FORMAT = "Use format: YYYY-MM-DD"
SUGGEST_VERIFY = "Verify this is correct"
SUGGEST_VERIFY_DATE = "Verify the date is correct"
SUGGEST_VERIFY_VALUE = "Verify the {field} value"
SUGGEST_CONTACT = "Should be phone number or email"

# --- Auto-fix reasons ---
REASON_UPPERCASE_NO_SPACES = "Converted to uppercase and removed spaces"
REASON_PORT_CODE = "Converted to uppercase UN/LOCODE format"
REASON_DATE_FORMAT = "Standardized to YYYY-MM-DD format"
REASON_TRIMMED = "Removed leading/trailing whitespace"
REASON_PHONE_FORMAT = "Standardized phone number format"
