"""
Model registry.

Import all models here to ensure they are registered with SQLAlchemy metadata
before ``Base.metadata.create_all`` runs.
"""

from app.db.base import Base
from app.models.alert import Alert
from app.models.camera import Camera
from app.models.user import User

__all__ = [
    "Base",
    "Alert",
    "Camera",
    "User",
]
