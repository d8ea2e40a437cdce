"""
Upload validation - size, declared type, and actual image content.

All checks on the binary photo parts of an upload in a single module.
Runs before any photo record is prepared, so a bad file rejects the
whole request.
"""

import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from inspection_core.models import InvalidUploadError, UploadedFile, ValidationResult
from inspection_core.config import (
    MAX_FILE_SIZE_MB,
    ALLOWED_FORMATS,
    ALLOWED_MIME_TYPES,
    ALLOWED_EXTENSIONS,
)


def validate_upload(upload: UploadedFile) -> ValidationResult:
    """
    Validates one uploaded photo.

    Performs all checks in order:
    1. File size
    2. Declared MIME type and extension
    3. Content decodes as an allowed image format

    Returns ValidationResult with is_valid=False for rejections.
    """
    size_bytes = upload.size_bytes
    size_mb = size_bytes / (1024 * 1024)

    if size_mb > MAX_FILE_SIZE_MB:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f'File "{upload.filename}" exceeds the size limit of {MAX_FILE_SIZE_MB:g} MB.'
            ),
            filename=upload.filename,
            size_bytes=size_bytes,
        )

    extension = Path(upload.filename).suffix.lower()
    if upload.content_type.lower() not in ALLOWED_MIME_TYPES or extension not in ALLOWED_EXTENSIONS:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f'File "{upload.filename}" has an invalid type. Only JPG, JPEG, and PNG are allowed.'
            ),
            filename=upload.filename,
            size_bytes=size_bytes,
        )

    try:
        img = Image.open(io.BytesIO(upload.content))
        img.verify()
        img = Image.open(io.BytesIO(upload.content))
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return ValidationResult(
            is_valid=False,
            error_message=f'File content of "{upload.filename}" is not a readable image.',
            filename=upload.filename,
            size_bytes=size_bytes,
        )

    if img.format not in ALLOWED_FORMATS:
        return ValidationResult(
            is_valid=False,
            error_message=f'File content of "{upload.filename}" does not match its extension.',
            filename=upload.filename,
            format=img.format,
            size_bytes=size_bytes,
        )

    return ValidationResult(
        is_valid=True,
        filename=upload.filename,
        format=img.format,
        size_bytes=size_bytes,
        resolution=img.size,
    )


def ensure_valid_uploads(files: list[UploadedFile] | None) -> list[ValidationResult]:
    """
    Validates every uploaded file, stopping at the first rejection.

    Raises:
        InvalidUploadError: If no file was uploaded or any file is rejected.
    """
    if not files:
        raise InvalidUploadError("At least one file must be uploaded.")

    results: list[ValidationResult] = []
    for upload in files:
        result = validate_upload(upload)
        if not result.is_valid:
            raise InvalidUploadError(result.error_message)
        results.append(result)
    return results
