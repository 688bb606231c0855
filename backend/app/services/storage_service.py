"""
Document storage for booking uploads (ID proofs, invitations, marksheets).

Files land on local disk under UPLOAD_DIR/<folder>/ with a timestamped
unique name and are served from UPLOAD_BASE_URL.
"""

import re
import time
import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.core.exceptions import UploadRejected
from app.core.logging import get_logger
from app.core.metrics import record_upload
from app.domain.enums import DocumentType

logger = get_logger(__name__)
settings = get_settings()

# First match wins; checked against the lower-cased original filename.
_DOCUMENT_HINTS = [
    (("aadhar", "aadhaar"), DocumentType.AADHAR_CARD),
    (("pan",), DocumentType.PAN_CARD),
    (("passport",), DocumentType.PASSPORT),
    (("invitation", "announcement"), DocumentType.EVENT_INVITATION),
    (("letterhead", "organization"), DocumentType.ORGANIZATION_LETTERHEAD),
    (("birth",), DocumentType.BIRTH_CERTIFICATE),
    (("marriage",), DocumentType.MARRIAGE_CERTIFICATE),
]

_FOLDER_PATTERN = re.compile(r"^[a-z0-9-]+$")


def infer_document_type(filename: str) -> DocumentType:
    name = (filename or "").lower()
    for hints, doc_type in _DOCUMENT_HINTS:
        if any(hint in name for hint in hints):
            return doc_type
    return DocumentType.OTHER


def _unique_name(extension: str) -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}{extension}"


def _write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


async def save_upload(upload: UploadFile, folder: str = "documents") -> tuple[str, DocumentType]:
    """Validate and store an upload. Returns (public URL, inferred document type)."""
    if not _FOLDER_PATTERN.match(folder):
        raise UploadRejected(f"Invalid upload folder: {folder}")

    filename = upload.filename or ""
    extension = Path(filename).suffix.lower()
    if extension not in settings.ALLOWED_UPLOAD_EXTENSIONS:
        record_upload(stored=False)
        raise UploadRejected("Only image and PDF files are allowed")

    content = await upload.read()
    if not content:
        record_upload(stored=False)
        raise UploadRejected("No file uploaded")
    if len(content) > settings.MAX_UPLOAD_BYTES:
        record_upload(stored=False)
        raise UploadRejected(f"File exceeds the {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit")

    stored_name = _unique_name(extension)
    target = Path(settings.UPLOAD_DIR) / folder / stored_name
    await run_in_threadpool(_write, target, content)

    url = f"{settings.UPLOAD_BASE_URL.rstrip('/')}/{folder}/{stored_name}"
    doc_type = infer_document_type(filename)

    logger.info(
        "document_uploaded",
        original_name=filename,
        stored_as=str(target),
        size=len(content),
        document_type=doc_type.value,
    )
    record_upload(stored=True)
    return url, doc_type
