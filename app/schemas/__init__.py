"""Pydantic schemas for API request/response validation."""

from app.schemas.alert import AlertCamera, AlertCreate, AlertQueryParams, AlertResponse
from app.schemas.auth import RegisterResponse, Token, UserLogin, UserPublic, UserRegister
from app.schemas.camera import (
    CameraCreate,
    CameraDeleteResponse,
    CameraResponse,
    CameraStreamStatus,
    CameraUpdate,
    StreamStartResponse,
    StreamStopResponse,
)

__all__ = [
    # Alert
    "AlertCamera",
    "AlertCreate",
    "AlertQueryParams",
    "AlertResponse",
    # Auth
    "RegisterResponse",
    "Token",
    "UserLogin",
    "UserPublic",
    "UserRegister",
    # Camera
    "CameraCreate",
    "CameraDeleteResponse",
    "CameraResponse",
    "CameraStreamStatus",
    "CameraUpdate",
    "StreamStartResponse",
    "StreamStopResponse",
]
