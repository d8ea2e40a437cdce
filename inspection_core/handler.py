"""
Contract boundary - runs one contract per request and formats the outcome.

The web layer hands over an already-parsed payload (JSON body, form fields,
file parts) and gets back a response dict with statusCode, headers and a
JSON body. Contract violations become 400 responses listing what failed.

No contract logic lives here beyond status mapping and response formatting.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from inspection_core.accounts import (
    ChangePasswordRequest,
    CreateAdminRequest,
    CreateInspectorRequest,
    LinkGoogleRequest,
    LinkWalletRequest,
    LoginInspectorRequest,
    LoginUserRequest,
    LoginWalletRequest,
    RegisterUserRequest,
    UpdateInspectorRequest,
    UpdateUserRequest,
    UpdateUserRoleRequest,
)
from inspection_core.dashboard import DashboardStatsQuery, SetInspectionTargetRequest
from inspection_core.inspection import (
    BulkApproveRequest,
    ConfirmMintRequest,
    MintRequest,
    normalize_submission,
)
from inspection_core.models import (
    Contract,
    ContractError,
    DataConsistencyError,
    FieldError,
    FieldValidationError,
    InspectionRecord,
    PhotoType,
    UploadedFile,
    UploadMode,
)
from inspection_core.photos import PhotoUpload, UpdatePhotoForm, prepare_photo_batch, prepare_single_photo
from inspection_core.responses import dump, shape_latest_archived
from inspection_core.rules import validate_payload

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Access-Control-Allow-Origin": "*"}


# Request contracts reachable through handle_request, by wire name
CONTRACTS: dict[str, type[Contract]] = {
    "changePassword": ChangePasswordRequest,
    "loginUser": LoginUserRequest,
    "loginWallet": LoginWalletRequest,
    "linkWallet": LinkWalletRequest,
    "linkGoogle": LinkGoogleRequest,
    "loginInspector": LoginInspectorRequest,
    "registerUser": RegisterUserRequest,
    "createAdmin": CreateAdminRequest,
    "createInspector": CreateInspectorRequest,
    "updateInspector": UpdateInspectorRequest,
    "updateUser": UpdateUserRequest,
    "updateUserRole": UpdateUserRoleRequest,
    "bulkApprove": BulkApproveRequest,
    "confirmMint": ConfirmMintRequest,
    "mint": MintRequest,
    "dashboardStats": DashboardStatsQuery,
    "setInspectionTarget": SetInspectionTargetRequest,
    "updatePhoto": UpdatePhotoForm,
}


# --- Entry Points ---

def handle_request(contract_name: str, payload: Any) -> dict:
    """
    Validates payload against the named request contract.

    Returns the normalized request (wire names) on success. Never raises:
    all errors are converted to responses.
    """
    contract = CONTRACTS.get(contract_name)
    if contract is None:
        return _error_response(404, "CONTRACT_NOT_FOUND", f"Unknown contract: {contract_name}")

    try:
        request = validate_payload(contract, payload)
        return _success_response(200, request.model_dump(mode="json", by_alias=True))

    except ContractError as e:
        return _rejection_response(e, contract_name)

    except Exception:
        logger.exception("Unexpected error in contract %s", contract_name)
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def handle_inspection_submission(payload: Any) -> dict:
    """Inspection creation: validated, normalized submission ready for persistence."""
    try:
        return _success_response(201, normalize_submission(payload))

    except ContractError as e:
        return _rejection_response(e, "inspectionSubmission")

    except Exception:
        logger.exception("Unexpected error in inspection submission")
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def handle_photo_upload(
    mode: UploadMode | str,
    metadata: Any,
    files: list[UploadedFile] | None,
) -> dict:
    """Batch (or metadata-carrying single) photo upload."""
    try:
        uploads = prepare_photo_batch(mode, metadata, files)
        return _success_response(201, {"photos": [_upload_summary(u) for u in uploads]})

    except ContractError as e:
        return _rejection_response(e, f"photoUpload:{mode}")

    except Exception:
        logger.exception("Unexpected error in photo upload")
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def handle_single_photo(
    photo_type: PhotoType | str,
    form: Any,
    file: UploadedFile | None,
) -> dict:
    """Single photo upload with metadata as plain form fields."""
    try:
        upload = prepare_single_photo(photo_type, form, file)
        return _success_response(201, _upload_summary(upload))

    except ContractError as e:
        return _rejection_response(e, f"singlePhoto:{photo_type}")

    except Exception:
        logger.exception("Unexpected error in single photo upload")
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def handle_latest_archived(records: list[InspectionRecord]) -> dict:
    """
    Latest archived inspections for the public landing page.

    A record without its front-view photo is a fault upstream, not a bad
    request: the whole response fails with 500.
    """
    try:
        return _success_response(200, [dump(shape_latest_archived(r)) for r in records])

    except DataConsistencyError as e:
        logger.error("Data consistency fault: %s", e)
        return _error_response(500, "DATA_CONSISTENCY_ERROR", str(e))

    except Exception:
        logger.exception("Unexpected error shaping archived inspections")
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


# --- Helpers ---

def _upload_summary(upload: PhotoUpload) -> dict:
    entry = upload.entry
    return {
        "type": upload.photo_type.value,
        "label": entry.label,
        "originalLabel": entry.original_label,
        "needAttention": entry.need_attention,
        "category": entry.category,
        "isMandatory": entry.is_mandatory,
        "filename": upload.file.filename,
    }


def _rejection_response(error: ContractError, operation: str) -> dict:
    logger.warning("Rejected %s (%s): %s", operation, error.code, error)

    errors = error.errors if isinstance(error, FieldValidationError) else None
    return _error_response(400, error.code, str(error), errors=errors)


# --- Response Helpers ---

def _success_response(status_code: int, data: dict | list) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(data),
    }


def _error_response(
    status_code: int,
    code: str,
    message: str,
    errors: list[FieldError] | None = None,
) -> dict:
    error_body: dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if errors is not None:
        error_body["error"]["details"] = [e.model_dump() for e in errors]

    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(error_body),
    }
