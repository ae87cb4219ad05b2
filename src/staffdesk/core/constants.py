"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_DAYS = 7
DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100
# OFFSET bound MySQL accepts (signed BIGINT)
MAX_OFFSET = 2**63 - 1
MAX_UPLOAD_BYTES = 100 * 1024

NAME_MIN_LEN = 4
NAME_MAX_LEN = 33
PROFILE_TEXT_MAX_LEN = 52
IDENTITY_NUMBER_MIN_LEN = 3
IDENTITY_NUMBER_MAX_LEN = 33
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 32
EMAIL_MAX_LEN = 255
URI_MAX_LEN = 255

ALLOWED_IMAGE_TYPES = {
    "JPEG": ("image/jpeg", "jpg"),
    "PNG": ("image/png", "png"),
}
