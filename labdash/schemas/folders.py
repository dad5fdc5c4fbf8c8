"""Folder schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class FolderCreate(BaseModel):
    name: str
    parent_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be empty")
        if "/" in v:
            raise ValueError("Folder name cannot contain '/'")
        return v


class PublicFolderResponse(BaseModel):
    id: str
    name: str
    parent_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserFolderResponse(BaseModel):
    id: str
    user_id: str
    name: str
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
