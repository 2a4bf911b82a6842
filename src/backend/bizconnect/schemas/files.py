"""
Schemas for file uploads.
"""

from bizconnect.schemas.common import BaseSchema


class UploadResponse(BaseSchema):
    success: bool = True
    file_name: str
    original_name: str
    path: str
    size: int
