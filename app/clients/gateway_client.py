"""HTTP client for the media gateway WHEP endpoint."""

from dataclasses import dataclass

import httpx
from loguru import logger

from app.clients.worker_client import upstream_message
from app.core.config import get_settings

settings = get_settings()

SDP_CONTENT_TYPE = "application/sdp"


class GatewayError(Exception):
    """Gateway unreachable or rejected the offer."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class WhepAnswer:
    """SDP answer returned by the gateway."""

    sdp: str
    location: str | None = None


class GatewayClient:
    """Async client for WHEP offer/answer exchange against the gateway."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url or settings.media_gateway_url
        self._timeout = timeout or settings.gateway_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def whep_url(self, camera_id: str) -> str:
        """Gateway WHEP URL for a camera."""
        return f"{self._base_url}/{camera_id}/whep"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def negotiate(self, camera_id: str, offer_sdp: str) -> WhepAnswer:
        """Submit an SDP offer and return the gateway's answer."""
        url = self.whep_url(camera_id)
        try:
            response = await self._get_client().post(
                url,
                content=offer_sdp.encode("utf-8"),
                headers={"Content-Type": SDP_CONTENT_TYPE},
            )
        except httpx.RequestError as e:
            logger.error(f"Gateway connection error for camera {camera_id}: {e}")
            raise GatewayError(f"Gateway unreachable: {e}") from e

        if response.is_error:
            message = upstream_message(response)
            logger.error(
                f"Gateway rejected offer for camera {camera_id}: "
                f"{response.status_code} - {message}"
            )
            raise GatewayError(message, status_code=response.status_code)

        return WhepAnswer(sdp=response.text, location=response.headers.get("Location"))
