"""Shared fixtures: a complete inspection submission and in-memory image uploads."""

import copy
import io

import pytest
from PIL import Image

from inspection_core.models import UploadedFile


INSPECTOR_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"
BRANCH_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"

SUBMISSION = {
    "vehiclePlateNumber": "AB 1234 XY",
    "inspectionDate": "2025-07-20T09:30:00Z",
    "overallRating": "B+",
    "identityDetails": {
        "namaInspektor": INSPECTOR_ID,
        "namaCustomer": "Budi Santoso",
        "cabangInspeksi": BRANCH_ID,
    },
    "vehicleData": {
        "merekKendaraan": "Toyota",
        "tipeKendaraan": "Avanza",
        "tahun": 2019,
        "transmisi": "Manual",
        "warnaKendaraan": "Hitam",
        "odometer": "45000",
        "kepemilikan": "Tangan Pertama",
        "platNomor": "AB 1234 XY",
        "pajak1Tahun": "2025-08-01T00:00:00Z",
        "pajak5Tahun": "2029-08-01T00:00:00Z",
        "biayaPajak": 2500000,
    },
    "fitur": {
        "airbag": 8,
        "sistemAudio": 7,
        "powerWindow": 9,
        "sistemAC": 8,
        "remAbs": 9,
        "centralLock": 8,
        "electricMirror": 7,
        "catatan": ["AC kurang dingin"],
    },
    "inspectionSummary": {
        "interiorScore": 8,
        "interiorNotes": ["Jok bersih"],
        "eksteriorScore": 7,
        "eksteriorNotes": [],
        "kakiKakiScore": 8,
        "kakiKakiNotes": [],
        "mesinScore": 9,
        "mesinNotes": ["Mesin halus"],
        "penilaianKeseluruhanScore": 8,
        "deskripsiKeseluruhan": ["Kondisi baik"],
        "indikasiTabrakan": False,
        "indikasiBanjir": False,
        "indikasiOdometerReset": False,
        "posisiBan": "Depan",
        "merkban": "Bridgestone",
        "tipeVelg": "Alloy",
        "ketebalanBan": "80%",
        "estimasiPerbaikan": [{"namaPart": "Bumper depan", "harga": 1500000}],
    },
}


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def submission():
    """Valid inspection creation payload, safe to mutate per test"""
    return copy.deepcopy(SUBMISSION)


@pytest.fixture
def jpeg_bytes():
    img = Image.new("RGB", (64, 48), color="red")
    buf = io.BytesIO()
    img.save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    img = Image.new("RGB", (32, 32), color="blue")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_upload(jpeg_bytes):
    """Factory for UploadedFile; defaults to a valid JPEG part"""
    def _make(filename="photo.jpg", content_type="image/jpeg", content=None):
        return UploadedFile(
            filename=filename,
            content_type=content_type,
            content=jpeg_bytes if content is None else content,
        )
    return _make
