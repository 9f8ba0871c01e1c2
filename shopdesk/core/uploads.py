# shopdesk/core/uploads.py

import logging
import re
import time
from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from shopdesk.core.config import settings

logger = logging.getLogger(__name__)

SPREADSHEET_TYPES = {
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
SPREADSHEET_EXTENSIONS = {".xlsx", ".xls"}

GENERIC_FILE_TYPES = SPREADSHEET_TYPES | {
    "text/csv",
    "application/pdf",
    "image/png",
    "image/jpeg",
}
GENERIC_FILE_EXTENSIONS = SPREADSHEET_EXTENSIONS | {".csv", ".pdf", ".png", ".jpg", ".jpeg"}

# Clients that cannot tell the type send one of these
UNTYPED_CONTENT_TYPES = {None, "", "application/octet-stream"}

CHUNK_SIZE = 1024 * 1024


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize_filename(filename: str | None) -> str:
    name = Path(filename or "").name
    name = re.sub(r"[^a-zA-Z0-9_.-]", "", name)
    return name.lstrip(".") or "upload"


def resolve_upload(filename: str) -> Path | None:
    """Path of a stored upload, or None when it is missing or outside the upload dir."""
    base = upload_dir().resolve()
    candidate = (base / filename).resolve()

    if candidate.parent != base or not candidate.is_file():
        return None

    return candidate


def save_upload(
    file: UploadFile,
    prefix: str = "",
    allowed_types: set[str] = SPREADSHEET_TYPES,
    allowed_extensions: set[str] = SPREADSHEET_EXTENSIONS,
) -> Path:
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file was uploaded",
        )

    safe_name = sanitize_filename(file.filename)
    extension = Path(safe_name).suffix.lower()

    type_allowed = (
        file.content_type in UNTYPED_CONTENT_TYPES
        or file.content_type in allowed_types
    )

    if extension not in allowed_extensions or not type_allowed:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"File type not allowed: {file.content_type}",
        )

    timestamp = int(time.time() * 1000)
    destination = upload_dir() / f"{prefix}{timestamp}_{safe_name}"

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    written = 0

    with destination.open("wb") as out:
        while True:
            chunk = file.file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                out.close()
                destination.unlink(missing_ok=True)
                raise HTTPException(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    detail=f"File exceeds {settings.MAX_UPLOAD_SIZE_MB}MB",
                )
            out.write(chunk)

    logger.info(f"Stored upload {destination.name} ({written} bytes)")
    return destination


def discard_upload(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning(f"Could not delete temporary upload {path}: {exc}")
