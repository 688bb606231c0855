"""
Tests for document upload and document type inference.
"""

from pathlib import Path

import pytest
from httpx import AsyncClient

from app.core.config import get_settings
from app.domain.enums import DocumentType
from app.services.storage_service import infer_document_type

settings = get_settings()


@pytest.mark.asyncio
async def test_upload_document(client: AsyncClient):
    response = await client.post(
        "/api/bookings/upload-document",
        files={"document": ("Aadhar_front.JPG", b"\xff\xd8\xff fake jpeg", "image/jpeg")},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["document_type"] == "Aadhar Card"
    assert data["document_url"].startswith(f"{settings.UPLOAD_BASE_URL}/documents/")
    assert data["document_url"].endswith(".jpg")

    stored = Path(settings.UPLOAD_DIR) / "documents" / data["document_url"].rsplit("/", 1)[-1]
    assert stored.read_bytes() == b"\xff\xd8\xff fake jpeg"


@pytest.mark.asyncio
async def test_upload_into_folder(client: AsyncClient):
    response = await client.post(
        "/api/bookings/upload-document",
        files={"document": ("marksheet.pdf", b"%PDF-1.4", "application/pdf")},
        data={"folder": "student-awards"},
    )
    assert response.status_code == 201
    assert "/student-awards/" in response.json()["document_url"]


@pytest.mark.asyncio
async def test_upload_bad_folder(client: AsyncClient):
    response = await client.post(
        "/api/bookings/upload-document",
        files={"document": ("id.pdf", b"%PDF-1.4", "application/pdf")},
        data={"folder": "../etc"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_disallowed_extension(client: AsyncClient):
    response = await client.post(
        "/api/bookings/upload-document",
        files={"document": ("setup.exe", b"MZ", "application/octet-stream")},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_empty_file(client: AsyncClient):
    response = await client.post(
        "/api/bookings/upload-document",
        files={"document": ("pan.png", b"", "image/png")},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_too_large(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)
    response = await client.post(
        "/api/bookings/upload-document",
        files={"document": ("pan.png", b"x" * 17, "image/png")},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_missing_file(client: AsyncClient):
    response = await client.post("/api/bookings/upload-document", data={"folder": "documents"})
    assert response.status_code == 422


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("aadhaar-card.pdf", DocumentType.AADHAR_CARD),
        ("PAN.jpg", DocumentType.PAN_CARD),
        ("wedding_invitation.png", DocumentType.EVENT_INVITATION),
        ("scan.pdf", DocumentType.OTHER),
    ],
)
def test_infer_document_type(filename, expected):
    assert infer_document_type(filename) == expected
