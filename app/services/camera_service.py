"""Camera service: owner-scoped camera registry."""

import uuid

from loguru import logger
from sqlalchemy import delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients import WorkerClient, WorkerError, get_gateway_client
from app.core.exceptions import CameraNotFound
from app.models.alert import Alert
from app.models.camera import Camera
from app.schemas.camera import CameraCreate, CameraResponse, CameraUpdate
from app.services.base_service import BaseService


def camera_to_response(camera: Camera) -> CameraResponse:
    """Convert Camera model to response schema with its WHEP URL."""
    return CameraResponse(
        id=camera.id,
        name=camera.name,
        rtsp_url=camera.rtsp_url,
        location=camera.location,
        enabled=camera.enabled,
        user_id=camera.user_id,
        created_at=camera.created_at,
        updated_at=camera.updated_at,
        webrtc_url=get_gateway_client().whep_url(camera.id),
    )


class CameraService(BaseService[Camera]):
    """Camera registry. Every operation is scoped to the owning user."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Camera)

    async def list_cameras(
        self,
        user_id: str,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Camera]:
        """Get cameras owned by a user, newest first."""
        return await self.find(
            Camera.user_id == user_id,
            order_by=[desc(Camera.created_at), desc(Camera.id)],
            offset=skip,
            limit=limit,
        )

    async def get_owned(self, camera_id: str, user_id: str) -> Camera:
        """Get a camera owned by user_id; missing and foreign look the same."""
        camera = await self.find_one(Camera.id == camera_id, Camera.user_id == user_id)
        if not camera:
            raise CameraNotFound()
        return camera

    async def create_camera(self, user_id: str, data: CameraCreate) -> Camera:
        """Register a new camera for a user."""
        camera = Camera(
            id=str(uuid.uuid4()),
            name=data.name,
            rtsp_url=data.rtsp_url,
            location=data.location,
            enabled=bool(data.enabled),
            user_id=user_id,
        )
        return await self.create(camera)

    async def update_camera(
        self,
        camera_id: str,
        user_id: str,
        data: CameraUpdate,
    ) -> Camera:
        """Replace a camera's name, source URL and location."""
        camera = await self.get_owned(camera_id, user_id)
        camera.name = data.name
        camera.rtsp_url = data.rtsp_url
        camera.location = data.location
        return await self.update(camera)

    async def set_enabled(self, camera: Camera, enabled: bool) -> Camera:
        """Record the worker-acknowledged stream state."""
        camera.enabled = enabled
        return await self.update(camera)

    async def delete_camera(
        self,
        camera_id: str,
        user_id: str,
        worker_client: WorkerClient | None = None,
    ) -> None:
        """Delete a camera and its alerts.

        A running stream gets a best-effort stop first; a worker failure is
        logged and does not block the delete.
        """
        camera = await self.get_owned(camera_id, user_id)

        if camera.enabled and worker_client is not None:
            try:
                await worker_client.stop_stream(camera.id)
            except WorkerError as e:
                logger.warning(
                    f"Worker stop failed while deleting camera {camera.id}, "
                    f"continuing anyway: {e.message}"
                )

        await self.db.execute(delete(Alert).where(Alert.camera_id == camera.id))
        await self.delete(camera)
