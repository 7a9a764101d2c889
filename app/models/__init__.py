"""Database models."""

from app.models.alert import Alert
from app.models.camera import Camera
from app.models.user import User

__all__ = [
    "Alert",
    "Camera",
    "User",
]
