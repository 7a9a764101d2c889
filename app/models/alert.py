"""Alert model for storing detection alerts."""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Alert(Base):
    """Alert database model - stores detections posted by the stream worker."""

    __tablename__ = "alerts"

    # SQLite requires INTEGER (not BIGINT) for autoincrement
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    camera_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("cameras.id"),
        index=True,
        nullable=False,
    )

    detected_at: Mapped[datetime] = mapped_column(DateTime, index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    snapshot_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Free-form detector payload (stored as JSON string). "metadata" is
    # reserved on declarative classes, hence the attribute name.
    metadata_json: Mapped[str | None] = mapped_column("metadata", Text, nullable=True)

    camera: Mapped["Camera"] = relationship(lazy="joined")  # noqa: F821

    __table_args__ = (
        Index("ix_alerts_camera_id_detected_at", "camera_id", "detected_at"),
    )

    def get_metadata(self) -> dict[str, Any] | None:
        """Deserialize metadata JSON."""
        if not self.metadata_json:
            return None
        try:
            return json.loads(self.metadata_json)
        except json.JSONDecodeError:
            return None

    def set_metadata(self, metadata: dict[str, Any] | None) -> None:
        """Serialize metadata to JSON."""
        self.metadata_json = json.dumps(metadata) if metadata is not None else None
