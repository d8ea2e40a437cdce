"""
Photo metadata contract.

A photo upload carries its metadata as one JSON text field next to N binary
file parts. Entry i of the metadata array describes file i of the upload.
This module parses that text, checks each entry against the schema of the
upload mode, and pairs entries with files. Labels are kept exactly as sent:
never trimmed, never case-normalized.
"""

import json
import logging
from typing import Annotated, Any

from pydantic import BaseModel, Field, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError

from inspection_core.config import CATEGORY_MAX_LENGTH, LABEL_MAX_LENGTH
from inspection_core.models import (
    Contract,
    FieldError,
    FieldValidationError,
    MalformedMetadataError,
    PhotoCountMismatchError,
    PhotoType,
    UploadedFile,
    UploadMode,
)
from inspection_core.rules import Boolean, BooleanString, Label, collect_errors, max_length, validate_payload
from inspection_core.validator import ensure_valid_uploads

logger = logging.getLogger(__name__)

PhotoLabel = Annotated[Label, max_length(LABEL_MAX_LENGTH)]
Category = Annotated[str, max_length(CATEGORY_MAX_LENGTH)]


class PhotoMetadataEntry(BaseModel):
    """Normalized metadata for one uploaded photo."""
    label: str
    original_label: str | None = None
    need_attention: bool = False
    category: str | None = None
    is_mandatory: bool = False


class PhotoUpload(BaseModel):
    """One metadata entry paired with the file it describes."""
    photo_type: PhotoType
    entry: PhotoMetadataEntry
    file: UploadedFile


# --- Per-mode metadata schemas ---

class DynamicPhotoMetadata(Contract):
    """Entry of a single or batchDynamic upload."""
    label: PhotoLabel
    need_attention: Boolean = Field(False, alias="needAttention")
    category: Category | None = None
    is_mandatory: Boolean = Field(False, alias="isMandatory")

    def to_entry(self) -> PhotoMetadataEntry:
        return PhotoMetadataEntry(
            label=self.label,
            need_attention=self.need_attention,
            category=self.category,
            is_mandatory=self.is_mandatory,
        )


class FixedPhotoMetadata(Contract):
    """Entry of a batchFixed upload: only the predefined label."""
    original_label: PhotoLabel = Field(alias="originalLabel")

    def to_entry(self) -> PhotoMetadataEntry:
        return PhotoMetadataEntry(label=self.original_label, original_label=self.original_label)


class DocumentPhotoMetadata(Contract):
    """Entry of a batchDocument upload: only the custom label."""
    label: PhotoLabel

    def to_entry(self) -> PhotoMetadataEntry:
        return PhotoMetadataEntry(label=self.label)


_METADATA_SCHEMAS: dict[UploadMode, type[Contract]] = {
    UploadMode.SINGLE: DynamicPhotoMetadata,
    UploadMode.BATCH_DYNAMIC: DynamicPhotoMetadata,
    UploadMode.BATCH_FIXED: FixedPhotoMetadata,
    UploadMode.BATCH_DOCUMENT: DocumentPhotoMetadata,
}

_ADAPTERS: dict[UploadMode, TypeAdapter] = {
    mode: TypeAdapter(list[schema]) for mode, schema in _METADATA_SCHEMAS.items()
}

PHOTO_TYPES: dict[UploadMode, PhotoType] = {
    UploadMode.SINGLE: PhotoType.DYNAMIC,
    UploadMode.BATCH_DYNAMIC: PhotoType.DYNAMIC,
    UploadMode.BATCH_FIXED: PhotoType.FIXED,
    UploadMode.BATCH_DOCUMENT: PhotoType.DOCUMENT,
}


# --- Single-photo form contracts ---

class AddPhotoForm(Contract):
    """Form fields of a single dynamic photo upload."""
    label: PhotoLabel
    need_attention: BooleanString = Field(False, alias="needAttention")

    def to_entry(self) -> PhotoMetadataEntry:
        return PhotoMetadataEntry(label=self.label, need_attention=self.need_attention)


class AddFixedPhotoForm(Contract):
    original_label: PhotoLabel = Field(alias="originalLabel")

    def to_entry(self) -> PhotoMetadataEntry:
        return PhotoMetadataEntry(label=self.original_label, original_label=self.original_label)


class AddDocumentPhotoForm(Contract):
    label: PhotoLabel

    def to_entry(self) -> PhotoMetadataEntry:
        return PhotoMetadataEntry(label=self.label)


class UpdatePhotoForm(Contract):
    label: PhotoLabel | None = None
    need_attention: BooleanString | None = Field(None, alias="needAttention")

    @model_validator(mode="after")
    def require_one_field(self):
        """At least one field must be provided."""
        if self.label is None and self.need_attention is None:
            raise ValueError("Provide 'label' or 'needAttention' to update")
        return self


_SINGLE_FORMS: dict[PhotoType, type[Contract]] = {
    PhotoType.DYNAMIC: AddPhotoForm,
    PhotoType.FIXED: AddFixedPhotoForm,
    PhotoType.DOCUMENT: AddDocumentPhotoForm,
}


# --- Public API ---

def _resolve(enum_cls, value: Any, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise FieldValidationError(
            [FieldError(field=field, rule="enum", message=f"must be one of: {allowed}")]
        )


def resolve_mode(mode: UploadMode | str) -> UploadMode:
    return _resolve(UploadMode, mode, "mode")


def parse_metadata(raw: Any, mode: UploadMode | str) -> list[PhotoMetadataEntry]:
    """
    Parses the serialized metadata array of one upload.

    Parsing happens before any per-entry check: text that is not a JSON
    array is rejected as a whole.

    Raises:
        MalformedMetadataError: Missing text, invalid JSON, or not an array.
        FieldValidationError: Empty array, or entries breaking the mode schema.
    """
    mode = resolve_mode(mode)

    if not isinstance(raw, str) or raw == "":
        raise MalformedMetadataError("Missing metadata JSON string.")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedMetadataError(f"Invalid metadata format: {e.msg}") from e

    if not isinstance(data, list):
        raise MalformedMetadataError("Invalid metadata format: Metadata is not a valid JSON array.")

    if not data:
        raise FieldValidationError(
            [FieldError(field="metadata", rule="min_items", message="must contain at least one entry")]
        )

    if mode is UploadMode.SINGLE and len(data) != 1:
        raise FieldValidationError(
            [FieldError(field="metadata", rule="max_items", message="single upload takes exactly one entry")]
        )

    try:
        items = _ADAPTERS[mode].validate_python(data)
    except PydanticValidationError as e:
        raise FieldValidationError(collect_errors(e, prefix="metadata")) from e

    return [item.to_entry() for item in items]


def reconcile(
    entries: list[PhotoMetadataEntry],
    files: list[UploadedFile] | None,
    photo_type: PhotoType,
) -> list[PhotoUpload]:
    """
    Pairs entry i with file i.

    Raises:
        PhotoCountMismatchError: If the counts differ, whatever the entries hold.
    """
    files = files or []
    if len(entries) != len(files):
        raise PhotoCountMismatchError(len(entries), len(files))

    return [
        PhotoUpload(photo_type=photo_type, entry=entry, file=upload)
        for entry, upload in zip(entries, files)
    ]


def prepare_photo_batch(
    mode: UploadMode | str,
    metadata: Any,
    files: list[UploadedFile] | None,
) -> list[PhotoUpload]:
    """
    Full contract for a metadata-carrying upload: parse, check entries,
    reconcile with files, then check the files themselves.

    Returns ordered PhotoUpload pairs ready for the storage collaborator.
    """
    mode = resolve_mode(mode)
    entries = parse_metadata(metadata, mode)
    uploads = reconcile(entries, files, PHOTO_TYPES[mode])
    ensure_valid_uploads(files)

    logger.info("Prepared %d %s photo(s)", len(uploads), mode.value)
    return uploads


def prepare_single_photo(
    photo_type: PhotoType | str,
    form: Any,
    file: UploadedFile | None,
) -> PhotoUpload:
    """Contract for a single-photo upload whose metadata arrives as plain form fields."""
    photo_type = _resolve(PhotoType, photo_type, "type")
    fields = validate_payload(_SINGLE_FORMS[photo_type], form)
    ensure_valid_uploads([file] if file is not None else [])

    return PhotoUpload(photo_type=photo_type, entry=fields.to_entry(), file=file)
