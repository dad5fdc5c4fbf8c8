"""Project schemas."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

ProjectStatus = Literal["planning", "in_progress", "completed", "on_hold"]
ProjectPriority = Literal["low", "medium", "high", "urgent"]


def _clean_members(v):
    # Accept the form's comma-separated string as well as a list.
    if v is None:
        return None
    if isinstance(v, str):
        v = v.split(",")
    members = [m.strip() for m in v if m and m.strip()]
    return members or None


class ProjectBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: ProjectStatus = "planning"
    progress: int = Field(0, ge=0, le=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = Field(None, ge=0)
    manager: Optional[str] = None
    team_members: Optional[List[str]] = None
    priority: ProjectPriority = "medium"

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("team_members", mode="before")
    @classmethod
    def split_members(cls, v):
        return _clean_members(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectCreate(ProjectBase):
    """New project. Without ``sort_order`` it is appended to the end of the list."""
    sort_order: Optional[int] = Field(None, ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "5G beamforming testbed",
                    "status": "in_progress",
                    "progress": 40,
                    "start_date": "2026-03-01",
                    "end_date": "2026-11-30",
                    "budget": 120000000,
                    "manager": "Dr. Kim",
                    "team_members": ["Lee", "Park"],
                    "priority": "high",
                }
            ]
        }
    }


class ProjectUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = Field(None, ge=0)
    manager: Optional[str] = None
    team_members: Optional[List[str]] = None
    priority: Optional[ProjectPriority] = None
    sort_order: Optional[int] = Field(None, ge=0)

    # Omitted means unchanged; these columns cannot be cleared.
    @field_validator("title", "status", "progress", "priority", "sort_order", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("team_members", mode="before")
    @classmethod
    def split_members(cls, v):
        return _clean_members(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectResponse(ProjectBase):
    id: str
    sort_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    # Stored rows are trusted; only inputs get the date-order check.
    @model_validator(mode="after")
    def check_dates(self):
        return self


class ProjectOrderItem(BaseModel):
    id: str
    sort_order: int = Field(..., ge=0)


class ProjectOrderRequest(BaseModel):
    """Full positional order after a drag-and-drop."""
    items: List[ProjectOrderItem]
