"""Stored file schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class _FileResponse(BaseModel):
    id: str
    file_name: str
    file_size: int
    file_type: str
    file_url: str  # data:<type>;base64,<payload>
    folder_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicFileResponse(_FileResponse):
    uploaded_by: Optional[str] = None


class UserFileResponse(_FileResponse):
    user_id: str


class FileMoveRequest(BaseModel):
    """Target folder; ``None`` moves the file to the root."""
    folder_id: Optional[str] = None
