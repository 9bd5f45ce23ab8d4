"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_USER_NAME_LENGTH = 100
MAX_ROLE_NAME_LENGTH = 100
MAX_PERMISSION_NAME_LENGTH = 100
MAX_VEHICLE_NAME_LENGTH = 255
MAX_STATUS_LENGTH = 50

# Password requirements
MIN_PASSWORD_LENGTH = 1
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Token settings
ACCESS_TOKEN_JTI_LENGTH = 32
PERMISSION_CLAIM = "permission"
NAME_CLAIM = "name"

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
