"""
Inspection submission contract.

Validates and normalizes one inspection creation request before it reaches
persistence: vehicle data, feature checklist, summary scores with repair
estimates, and identity details. Also holds the review and minting request
contracts that act on an existing inspection.
"""

import logging
from datetime import datetime
from typing import Annotated, Any

from pydantic import Field, HttpUrl

from inspection_core.config import BULK_APPROVE_MAX
from inspection_core.models import Contract
from inspection_core.rules import (
    Boolean,
    EmptyListIfNone,
    JsonObject,
    NonEmptyStr,
    NoteList,
    Numeric,
    Uuid,
    validate_payload,
)

logger = logging.getLogger(__name__)


class RepairEstimateItem(Contract):
    """One line of the repair estimate: part name and price."""
    part_name: NonEmptyStr = Field(alias="namaPart")
    price: Numeric = Field(alias="harga")


class VehicleData(Contract):
    brand: NonEmptyStr = Field(alias="merekKendaraan")
    vehicle_type: NonEmptyStr = Field(alias="tipeKendaraan")
    year: Numeric = Field(alias="tahun")
    transmission: NonEmptyStr = Field(alias="transmisi")
    color: NonEmptyStr = Field(alias="warnaKendaraan")
    odometer: NonEmptyStr
    ownership: NonEmptyStr = Field(alias="kepemilikan")
    plate_number: NonEmptyStr = Field(alias="platNomor")
    tax_one_year: datetime = Field(alias="pajak1Tahun")
    tax_five_year: datetime = Field(alias="pajak5Tahun")
    tax_cost: Numeric = Field(alias="biayaPajak")


class FeatureChecklist(Contract):
    """The "Fitur" section: one score per equipment item."""
    airbag: Numeric
    audio_system: Numeric = Field(alias="sistemAudio")
    power_window: Numeric = Field(alias="powerWindow")
    air_conditioning: Numeric = Field(alias="sistemAC")
    abs_brakes: Numeric = Field(alias="remAbs")
    central_lock: Numeric = Field(alias="centralLock")
    electric_mirror: Numeric = Field(alias="electricMirror")
    interior1: Numeric | None = None
    interior2: Numeric | None = None
    interior3: Numeric | None = None
    notes: NoteList = Field(default_factory=list, alias="catatan")


class InspectionSummary(Contract):
    interior_score: Numeric = Field(alias="interiorScore")
    interior_notes: NoteList = Field(default_factory=list, alias="interiorNotes")
    exterior_score: Numeric = Field(alias="eksteriorScore")
    exterior_notes: NoteList = Field(default_factory=list, alias="eksteriorNotes")
    undercarriage_score: Numeric = Field(alias="kakiKakiScore")
    undercarriage_notes: NoteList = Field(default_factory=list, alias="kakiKakiNotes")
    engine_score: Numeric = Field(alias="mesinScore")
    engine_notes: NoteList = Field(default_factory=list, alias="mesinNotes")
    overall_score: Numeric = Field(alias="penilaianKeseluruhanScore")
    overall_notes: NoteList = Field(default_factory=list, alias="deskripsiKeseluruhan")

    collision_indicated: Boolean = Field(alias="indikasiTabrakan")
    flood_indicated: Boolean = Field(alias="indikasiBanjir")
    odometer_reset_indicated: Boolean = Field(alias="indikasiOdometerReset")

    tire_position: NonEmptyStr = Field(alias="posisiBan")
    tire_brand: NonEmptyStr = Field(alias="merkban")
    rim_type: NonEmptyStr = Field(alias="tipeVelg")
    tire_thickness: NonEmptyStr = Field(alias="ketebalanBan")

    # Omitted, null and [] all normalize to []
    repair_estimates: Annotated[list[RepairEstimateItem] | None, EmptyListIfNone] = Field(
        default_factory=list, alias="estimasiPerbaikan"
    )


class IdentityDetails(Contract):
    inspector_id: Uuid = Field(alias="namaInspektor")
    customer_name: str = Field(alias="namaCustomer")
    branch_city_id: Uuid = Field(alias="cabangInspeksi")


class InspectionSubmission(Contract):
    """
    One inspector-authored report prior to persistence.

    Structured sections may arrive as objects (JSON body) or as JSON text
    (multipart form fields); text is decoded before the section is checked.
    The free-form sections are kept verbatim.
    """
    vehicle_plate_number: str | None = Field(None, alias="vehiclePlateNumber")
    inspection_date: datetime = Field(alias="inspectionDate")
    overall_rating: str | None = Field(None, alias="overallRating")

    identity: Annotated[IdentityDetails, JsonObject] = Field(alias="identityDetails")
    vehicle_data: Annotated[VehicleData, JsonObject] = Field(alias="vehicleData")
    feature_checklist: Annotated[FeatureChecklist, JsonObject] = Field(alias="fitur")
    summary: Annotated[InspectionSummary, JsonObject] = Field(alias="inspectionSummary")

    equipment_checklist: Annotated[dict[str, Any] | None, JsonObject] = Field(
        None, alias="equipmentChecklist"
    )
    detailed_assessment: Annotated[dict[str, Any] | None, JsonObject] = Field(
        None, alias="detailedAssessment"
    )
    body_paint_thickness: Annotated[dict[str, Any] | None, JsonObject] = Field(
        None, alias="bodyPaintThickness"
    )


def validate_submission(payload: Any) -> InspectionSubmission:
    """
    Validates one inspection creation request.

    Raises:
        FieldValidationError: Listing every violated field across all sections.
    """
    submission = validate_payload(InspectionSubmission, payload)
    logger.debug(
        "Validated inspection submission for plate %s",
        submission.vehicle_data.plate_number,
    )
    return submission


def normalize_submission(payload: Any) -> dict[str, Any]:
    """Validated submission as the JSON-ready dict handed to persistence."""
    return validate_submission(payload).model_dump(mode="json", by_alias=True)


# --- Review / Minting ---

class BulkApproveRequest(Contract):
    inspection_ids: list[NonEmptyStr] = Field(
        alias="inspectionIds", min_length=1, max_length=BULK_APPROVE_MAX
    )


class ConfirmMintRequest(Contract):
    tx_hash: NonEmptyStr = Field(alias="txHash")
    nft_asset_id: NonEmptyStr = Field(alias="nftAssetId")


class MintRequest(Contract):
    """Data recorded on chain for an approved inspection."""
    inspection_id: NonEmptyStr = Field(alias="inspectionId")
    vehicle_number: NonEmptyStr = Field(alias="vehicleNumber")
    inspection_date: NonEmptyStr = Field(alias="inspectionDate")
    inspector_id: NonEmptyStr = Field(alias="inspectorId")
    mileage: Numeric
    status: NonEmptyStr
    pdf_url: HttpUrl = Field(alias="pdfUrl")
    pdf_hash: NonEmptyStr = Field(alias="pdfHash")
    nft_display_name: str | None = Field(None, alias="nftDisplayName")
