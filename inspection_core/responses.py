"""
Response shaping - persisted records into API-facing shapes.

Pure mappers: pick, rename and default fields, never compute. Response
models serialize with camelCase wire names via `dump`.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from inspection_core.config import FRONT_VIEW_LABEL
from inspection_core.models import (
    DataConsistencyError,
    InspectionRecord,
    InspectionStatus,
    PhotoRecord,
    PhotoType,
    Role,
    UserRecord,
)


class Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def dump(response: Response) -> dict[str, Any]:
    """Wire form of a response model."""
    return response.model_dump(mode="json", by_alias=True)


# --- Photos ---

class PhotoResponse(Response):
    id: str
    path: str
    label: str
    original_label: str | None = None
    need_attention: bool = False
    created_at: datetime


class TypedPhotoResponse(PhotoResponse):
    """Photo shape for listings that mix fixed, dynamic and document photos."""
    type: PhotoType | None = None


class PhotoDetail(Response):
    path: str
    label: str


def shape_photo(record: PhotoRecord, include_type: bool = False) -> PhotoResponse:
    fields = {
        "id": record.id,
        "path": record.path,
        "label": record.label or "",
        "original_label": record.original_label,
        "need_attention": bool(record.need_attention),
        "created_at": record.created_at,
    }
    if include_type:
        return TypedPhotoResponse(type=record.type, **fields)
    return PhotoResponse(**fields)


def shape_photo_detail(record: PhotoRecord) -> PhotoDetail:
    return PhotoDetail(path=record.path, label=record.label or "")


# --- Inspections ---

class LatestArchivedInspection(Response):
    photo: PhotoDetail
    vehicle_plate_number: str
    brand: str | None = Field(None, alias="merekKendaraan")
    vehicle_type: str | None = Field(None, alias="tipeKendaraan")


class InspectionSummaryResponse(Response):
    id: str
    pretty_id: str | None = Field(None, alias="pretty_id")
    vehicle_plate_number: str | None = None
    inspection_date: datetime | None = None
    status: InspectionStatus
    brand: str | None = Field(None, alias="merekKendaraan")
    vehicle_type: str | None = Field(None, alias="tipeKendaraan")
    created_at: datetime | None = None


def _vehicle_value(record: InspectionRecord, key: str) -> str | None:
    # Empty strings in the stored vehicle data read as absent
    return (record.vehicle_data or {}).get(key) or None


def shape_latest_archived(record: InspectionRecord) -> LatestArchivedInspection:
    """
    Shapes one archived inspection for the public landing page.

    The caller must pass only inspections that carry a front-view photo.

    Raises:
        DataConsistencyError: If no photo is labeled exactly "Tampak Depan".
    """
    front = next((p for p in record.photos if p.label == FRONT_VIEW_LABEL), None)
    if front is None:
        raise DataConsistencyError(
            f'Inspection {record.id} has no "{FRONT_VIEW_LABEL}" photo.'
        )

    return LatestArchivedInspection(
        photo=shape_photo_detail(front),
        vehicle_plate_number=record.vehicle_plate_number or "",
        brand=_vehicle_value(record, "merekKendaraan"),
        vehicle_type=_vehicle_value(record, "tipeKendaraan"),
    )


def shape_inspection_summary(record: InspectionRecord) -> InspectionSummaryResponse:
    return InspectionSummaryResponse(
        id=record.id,
        pretty_id=record.pretty_id,
        vehicle_plate_number=record.vehicle_plate_number,
        inspection_date=record.inspection_date,
        status=record.status,
        brand=_vehicle_value(record, "merekKendaraan"),
        vehicle_type=_vehicle_value(record, "tipeKendaraan"),
        created_at=record.created_at,
    )


# --- Users ---

class UserResponse(Response):
    """Public user shape. Credentials and linked-account ids never leave the service."""
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


class InspectorResponse(UserResponse):
    # Plaintext PIN, only returned when it is generated
    pin: str


def _user_fields(record: UserRecord) -> dict[str, Any]:
    return record.model_dump(include=set(UserResponse.model_fields))


def shape_user(record: UserRecord) -> UserResponse:
    return UserResponse(**_user_fields(record))


def shape_inspector(record: UserRecord, pin: str) -> InspectorResponse:
    return InspectorResponse(pin=pin, **_user_fields(record))
