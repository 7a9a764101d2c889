"""Viewer service: WHEP offer/answer relay to the media gateway."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients import GatewayClient, GatewayError, WhepAnswer
from app.core.exceptions import InvalidInput, ViewerNegotiationFailed
from app.services.camera_service import CameraService


class ViewerService:
    """Relays a browser's receive-only SDP offer for one of its cameras."""

    def __init__(self, db: AsyncSession, gateway_client: GatewayClient):
        self.camera_service = CameraService(db)
        self.gateway = gateway_client

    async def negotiate(self, camera_id: str, user_id: str, offer_sdp: str) -> WhepAnswer:
        """Forward the offer to the gateway and return its answer."""
        camera = await self.camera_service.get_owned(camera_id, user_id)

        if not offer_sdp.strip():
            raise InvalidInput("SDP offer is required", field="sdp")

        try:
            answer = await self.gateway.negotiate(camera.id, offer_sdp)
        except GatewayError as e:
            raise ViewerNegotiationFailed(e.message) from e

        logger.info(f"Viewer session negotiated for camera {camera.id}")
        return answer
