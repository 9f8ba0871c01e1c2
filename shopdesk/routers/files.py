# shopdesk/routers/files.py

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse

from shopdesk.core.rate_limiter import limiter
from shopdesk.core.uploads import (
    GENERIC_FILE_EXTENSIONS,
    GENERIC_FILE_TYPES,
    resolve_upload,
    save_upload,
    upload_dir,
)
from shopdesk.schemas.upload import FileListResponse, FileUploadResponse

router = APIRouter(
    prefix="/files",
    tags=["Files"],
)


@router.get("", response_model=FileListResponse)
def list_files():
    files = sorted(path.name for path in upload_dir().iterdir() if path.is_file())
    return {"files": files}


@router.get("/download/{filename}")
def download_file(filename: str):
    path = resolve_upload(filename)

    if path is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found",
        )

    return FileResponse(path, filename=path.name)


@router.post("/upload", response_model=FileUploadResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("20/minute")
def upload_file(
    request: Request,
    file: UploadFile = File(...),
):
    path = save_upload(
        file,
        allowed_types=GENERIC_FILE_TYPES,
        allowed_extensions=GENERIC_FILE_EXTENSIONS,
    )

    return {"message": "File uploaded", "filename": path.name}
