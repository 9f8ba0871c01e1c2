# schemas/upload.py

from pydantic import BaseModel
from typing import List


class OrderImportResponse(BaseModel):
    message: str
    total: int
    success: int
    error_count: int
    errors: List[str] = []


class CustomerImportResponse(BaseModel):
    message: str
    total: int
    updated: int
    added: int
    errors: int
    error_details: List[str] = []


class TableStructureResponse(BaseModel):
    success: bool
    message: str
    columns: List[str] = []
    columns_added: int = 0


class FileListResponse(BaseModel):
    files: List[str]


class FileUploadResponse(BaseModel):
    message: str
    filename: str
