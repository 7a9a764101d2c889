"""Alert schemas for API request/response."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Keeps (page - 1) * pageSize well inside a 64-bit SQL integer
MAX_PAGE = 1_000_000


class AlertCreate(BaseModel):
    """Alert ingestion schema (posted by the stream worker)."""

    camera_id: str = Field(..., alias="cameraId", min_length=1)
    description: str = Field(..., min_length=1, max_length=1000)
    snapshot_url: str | None = Field(None, alias="snapshotUrl", max_length=1024)
    metadata: dict[str, Any] | None = None
    detected_at: datetime | None = Field(None, alias="detectedAt")

    model_config = {"populate_by_name": True}


class AlertCamera(BaseModel):
    """Parent camera fields shown next to an alert."""

    name: str
    location: str


class AlertResponse(BaseModel):
    """Alert response schema."""

    id: int
    camera_id: str = Field(..., alias="cameraId")
    detected_at: datetime = Field(..., alias="detectedAt")
    description: str
    snapshot_url: str | None = Field(None, alias="snapshotUrl")
    metadata: dict[str, Any] | None = None
    camera: AlertCamera | None = None

    model_config = {"populate_by_name": True}


class AlertQueryParams(BaseModel):
    """Alert query parameters schema."""

    camera_id: str | None = Field(None, alias="cameraId")
    page: int = Field(1, ge=1, le=MAX_PAGE)
    page_size: int = Field(20, alias="pageSize", ge=1, le=100)

    model_config = {"populate_by_name": True}

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
