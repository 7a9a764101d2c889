"""Service layer for business logic."""

from app.services.alert_service import AlertService
from app.services.auth_service import AuthService
from app.services.camera_service import CameraService
from app.services.stream_service import StreamService
from app.services.user_service import UserService
from app.services.viewer_service import ViewerService

__all__ = [
    "AlertService",
    "AuthService",
    "CameraService",
    "StreamService",
    "UserService",
    "ViewerService",
]
