"""Stream service: start/stop/status through the stream worker."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients import WorkerClient, WorkerError
from app.core.exceptions import StreamStartFailed, StreamStatusFailed, StreamStopFailed
from app.models.camera import Camera
from app.schemas.camera import CameraStreamStatus
from app.services.camera_service import CameraService


class StreamService:
    """
    Keeps a camera's ``enabled`` flag in line with the worker's stream state.

    The worker is called first and the registry is only written after the
    worker acknowledged. A worker failure leaves the registry untouched. A
    registry failure after a worker success is not compensated: the worker
    keeps the stream and the flag stays stale until the next status poll.
    """

    def __init__(self, db: AsyncSession, worker_client: WorkerClient):
        self.db = db
        self.worker = worker_client
        self.camera_service = CameraService(db)

    async def start(self, camera_id: str, user_id: str) -> Camera:
        """Start the camera's stream on the worker and mark it enabled."""
        camera = await self.camera_service.get_owned(camera_id, user_id)

        try:
            await self.worker.start_stream(
                camera_id=camera.id,
                name=camera.name,
                rtsp_url=camera.rtsp_url,
                location=camera.location,
            )
        except WorkerError as e:
            raise StreamStartFailed(e.message) from e

        try:
            return await self.camera_service.set_enabled(camera, True)
        except Exception:
            logger.error(
                f"Worker started camera {camera_id} but the registry write failed; "
                "worker and registry now disagree"
            )
            raise

    async def stop(self, camera_id: str, user_id: str) -> Camera:
        """Stop the camera's stream on the worker and mark it disabled."""
        camera = await self.camera_service.get_owned(camera_id, user_id)

        try:
            await self.worker.stop_stream(camera.id)
        except WorkerError as e:
            raise StreamStopFailed(e.message) from e

        try:
            return await self.camera_service.set_enabled(camera, False)
        except Exception:
            logger.error(
                f"Worker stopped camera {camera_id} but the registry write failed; "
                "worker and registry now disagree"
            )
            raise

    async def status(self, camera_id: str, user_id: str) -> CameraStreamStatus:
        """Fetch the worker's current status entry for the camera (no caching)."""
        camera = await self.camera_service.get_owned(camera_id, user_id)

        try:
            entry = await self.worker.get_stream_status(camera.id)
        except WorkerError as e:
            raise StreamStatusFailed(e.message) from e

        return CameraStreamStatus(camera_id=camera.id, status=entry)
