"""Camera schemas for API request/response validation."""

from datetime import datetime
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator


def validate_uri(value: str) -> str:
    """Require an absolute URI: a scheme plus a host or path, no whitespace."""
    if any(ch.isspace() for ch in value):
        raise ValueError("must be a valid uri")
    parts = urlsplit(value)
    if not parts.scheme or not (parts.netloc or parts.path):
        raise ValueError("must be a valid uri")
    return value


class CameraBase(BaseModel):
    """Base camera schema with common fields."""

    name: str = Field(..., min_length=1, max_length=100, description="Camera display name")
    rtsp_url: str = Field(
        ...,
        alias="rtspUrl",
        max_length=1024,
        description="Source stream URL (e.g. rtsp://host/path)",
    )
    location: str = Field(..., min_length=1, max_length=200, description="Camera location")

    model_config = {"populate_by_name": True}

    @field_validator("rtsp_url")
    @classmethod
    def check_rtsp_url(cls, v: str) -> str:
        return validate_uri(v)


class CameraCreate(CameraBase):
    """Schema for creating a new camera."""

    enabled: bool | None = None


class CameraUpdate(CameraBase):
    """Schema for updating a camera.

    ``enabled`` is accepted for compatibility with the create body but is
    owned by the stream start/stop operations and ignored here.
    """

    enabled: bool | None = None


class CameraResponse(BaseModel):
    """Schema for camera API response."""

    id: str
    name: str
    rtsp_url: str = Field(..., alias="rtspUrl")
    location: str
    enabled: bool
    user_id: str = Field(..., alias="userId")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    # Gateway WHEP endpoint (generated dynamically)
    webrtc_url: str | None = Field(None, alias="webrtcUrl")

    model_config = {"populate_by_name": True, "from_attributes": True}


class CameraDeleteResponse(BaseModel):
    success: bool = True


class StreamStartResponse(BaseModel):
    started: bool = True
    camera: CameraResponse


class StreamStopResponse(BaseModel):
    stopped: bool = True
    camera: CameraResponse


class CameraStreamStatus(BaseModel):
    """Worker-reported status for one camera; ``status`` is null when the
    worker has no running stream for it."""

    camera_id: str
    status: dict[str, Any] | None = None
