"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_SECONDS = 60 * 60
DEFAULT_MAX_PHOTO_BYTES = 5 * 1024 * 1024
DEFAULT_PHOTO_URL = "https://cdn-icons-png.flaticon.com/512/149/149071.png"
DEFAULT_PORT = 3000

TOKEN_ALGORITHM = "HS256"

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."
INVALID_CREDENTIALS_MESSAGE = "Invalid employee number or password!"
