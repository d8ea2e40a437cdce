"""
Domain models for the inspection contract core.

Enums, persisted-record shapes, validation results, and exceptions in one
place. Imported by every contract module. Single source of truth for the
types shared across contexts.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- Domain Enums ---
# Owned by the persistence schema; mirrored here so contracts can check
# membership. Inherit str so Pydantic serializes the plain value.

class InspectionStatus(str, Enum):
    NEED_REVIEW = "NEED_REVIEW"
    APPROVED = "APPROVED"
    ARCHIVING = "ARCHIVING"
    ARCHIVED = "ARCHIVED"
    FAIL_ARCHIVE = "FAIL_ARCHIVE"
    DEACTIVATED = "DEACTIVATED"


class PhotoType(str, Enum):
    FIXED = "FIXED"
    DYNAMIC = "DYNAMIC"
    DOCUMENT = "DOCUMENT"


class Role(str, Enum):
    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    REVIEWER = "REVIEWER"
    INSPECTOR = "INSPECTOR"
    CUSTOMER = "CUSTOMER"
    DEVELOPER = "DEVELOPER"


class UploadMode(str, Enum):
    """How a photo upload request carries its metadata."""
    SINGLE = "single"
    BATCH_DYNAMIC = "batchDynamic"
    BATCH_FIXED = "batchFixed"
    BATCH_DOCUMENT = "batchDocument"


class TargetPeriod(str, Enum):
    YEAR = "YEAR"
    MONTH = "MONTH"
    WEEK = "WEEK"
    DAY = "DAY"


class TimePeriod(str, Enum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    ALL_TIME = "all_time"


# --- Contract Base ---

class Contract(BaseModel):
    """
    Base for inbound request contracts.

    Fields carry their wire name as alias; errors are reported under the
    wire name, Python code uses the attribute name. Payloads are read by
    wire name only: an attribute name in its place counts as missing.
    """
    model_config = ConfigDict(populate_by_name=False)


# --- Validation Context ---

class FieldError(BaseModel):
    """One violated rule on one field."""
    field: str
    rule: str
    message: str


class ValidationResult(BaseModel):
    """Result of checking one uploaded image file."""
    is_valid: bool
    error_message: str | None = None

    filename: str | None = None
    format: str | None = None
    size_bytes: int | None = Field(None, ge=0)
    resolution: tuple[int, int] | None = None


class UploadedFile(BaseModel):
    """One binary part of a multipart upload, as handed over by the web layer."""
    filename: str
    content_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


# --- Persisted Records (read side) ---

class PhotoRecord(BaseModel):
    id: str
    type: PhotoType | None = None
    path: str
    label: str | None = None
    original_label: str | None = None
    need_attention: bool | None = None
    category: str | None = None
    is_mandatory: bool | None = None
    created_at: datetime


class InspectionRecord(BaseModel):
    id: str
    pretty_id: str | None = None
    vehicle_plate_number: str | None = None
    inspection_date: datetime | None = None
    vehicle_data: dict[str, Any] | None = None
    status: InspectionStatus = InspectionStatus.NEED_REVIEW
    photos: list[PhotoRecord] = []
    created_at: datetime | None = None


class UserRecord(BaseModel):
    id: str
    email: str | None = None
    username: str | None = None
    name: str | None = None
    role: Role
    wallet_address: str | None = None
    whatsapp_number: str | None = None
    inspection_branch_city_id: str | None = None
    created_at: datetime
    updated_at: datetime


# --- Exceptions ---

class ContractError(Exception):
    """Request violates its contract. Recoverable: client corrects and resubmits."""
    code = "BAD_REQUEST"


class FieldValidationError(ContractError):
    """One or more fields failed their rules. Carries every failure."""
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        fields = ", ".join(sorted({e.field for e in errors}))
        super().__init__(f"Validation failed for: {fields}")


class MalformedMetadataError(ContractError):
    """Photo metadata text is not a serialized array."""
    code = "INVALID_METADATA"


class PhotoCountMismatchError(ContractError):
    """Metadata entries and uploaded files do not line up one to one."""
    code = "PHOTO_COUNT_MISMATCH"

    def __init__(self, metadata_count: int, file_count: int):
        self.metadata_count = metadata_count
        self.file_count = file_count
        super().__init__(
            f"Metadata count ({metadata_count}) does not match photo count ({file_count})."
        )


class InvalidUploadError(ContractError):
    """Uploaded binary file is missing, too large, or not an accepted image."""
    code = "INVALID_FILE"


class DataConsistencyError(Exception):
    """Persisted data breaks an invariant the caller was required to guarantee."""
    pass
