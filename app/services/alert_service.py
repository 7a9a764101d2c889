"""Alert service for detection alert ingestion and listing."""

from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CameraNotFound
from app.models.alert import Alert
from app.models.camera import Camera
from app.schemas.alert import AlertCamera, AlertCreate, AlertQueryParams, AlertResponse
from app.services.base_service import BaseService
from app.workers.alert_notifier import AlertNotifier


class AlertService(BaseService[Alert]):
    """Alert service for detection alert operations."""

    def __init__(self, db: AsyncSession, notifier: AlertNotifier | None = None):
        super().__init__(db, Alert)
        self.notifier = notifier

    async def get_alerts(
        self,
        user_id: str,
        params: AlertQueryParams,
    ) -> list[AlertResponse]:
        """Get a page of the user's alerts, newest first."""
        query = (
            select(Alert)
            .join(Camera, Alert.camera_id == Camera.id)
            .where(Camera.user_id == user_id)
        )

        if params.camera_id:
            query = query.where(Alert.camera_id == params.camera_id)

        query = (
            query.order_by(desc(Alert.detected_at), desc(Alert.id))
            .offset(params.offset)
            .limit(params.page_size)
        )

        result = await self.db.execute(query)
        alerts = result.scalars().unique().all()
        return [self._to_response(a) for a in alerts]

    async def create_alert(self, data: AlertCreate) -> AlertResponse:
        """Store an alert posted by the worker and notify the camera owner."""
        camera = await self.db.get(Camera, data.camera_id)
        if not camera:
            raise CameraNotFound()

        detected_at = data.detected_at or datetime.now(timezone.utc)
        if detected_at.tzinfo is not None:
            # Stored as naive UTC
            detected_at = detected_at.astimezone(timezone.utc).replace(tzinfo=None)

        alert = Alert(
            camera_id=camera.id,
            detected_at=detected_at,
            description=data.description,
            snapshot_url=data.snapshot_url,
        )
        alert.set_metadata(data.metadata)
        alert = await self.create(alert)

        response = self._to_response(alert, camera)
        logger.info(f"Alert {alert.id} stored for camera {camera.id}")

        if self.notifier is not None:
            self.notifier.enqueue(
                camera.user_id,
                response.model_dump(mode="json", by_alias=True),
            )

        return response

    def _to_response(self, alert: Alert, camera: Camera | None = None) -> AlertResponse:
        """Convert Alert model to response schema."""
        camera = camera or alert.camera
        return AlertResponse(
            id=alert.id,
            camera_id=alert.camera_id,
            detected_at=alert.detected_at,
            description=alert.description,
            snapshot_url=alert.snapshot_url,
            metadata=alert.get_metadata(),
            camera=AlertCamera(name=camera.name, location=camera.location) if camera else None,
        )
