"""Camera model for IP camera management."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC at microsecond resolution; list order depends on it
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Camera(Base):
    """Camera database model - stores camera configurations owned by a user."""

    __tablename__ = "cameras"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Camera display name
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Source stream URL (usually RTSP)
    rtsp_url: Mapped[str] = mapped_column(String(1024), nullable=False)

    location: Mapped[str] = mapped_column(String(200), nullable=False)

    # True while the worker has acknowledged a running stream
    enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Owner
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=_utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        onupdate=func.now(),
        nullable=True,
    )

    user: Mapped["User"] = relationship(back_populates="cameras")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Camera(id={self.id}, name={self.name})>"
