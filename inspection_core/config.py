"""
Configuration for the inspection contract core.

All limits, patterns, and fixed labels in one place.
Change here, not in contract modules.
"""

import os

# --- Uploads ---

MAX_FILE_SIZE_MB: float = 5.0
ALLOWED_FORMATS: set[str] = {"JPEG", "PNG"}
ALLOWED_MIME_TYPES: set[str] = {"image/jpeg", "image/jpg", "image/png"}
ALLOWED_EXTENSIONS: set[str] = {".jpg", ".jpeg", ".png"}

# --- Photo Metadata ---

LABEL_MAX_LENGTH: int = 255
CATEGORY_MAX_LENGTH: int = 255

# Exact label of the front-view photo required on archived inspections
FRONT_VIEW_LABEL: str = "Tampak Depan"

# --- Accounts ---

PIN_LENGTH: int = 6
PASSWORD_MIN_LENGTH: int = 8
USERNAME_MIN_LENGTH: int = 3
USERNAME_MAX_LENGTH: int = 20
USERNAME_PATTERN: str = r"^[a-zA-Z0-9_]+$"
PASSWORD_PATTERN: str = r"^(?=.*[A-Za-z])(?=.*\d).+$"
EMAIL_PATTERN: str = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

WHATSAPP_PATTERN: str = r"^\+62\d+$"
WHATSAPP_MIN_LENGTH: int = 12
WHATSAPP_MAX_LENGTH: int = 16

# --- Review ---

BULK_APPROVE_MAX: int = 20

# --- Logging ---

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
