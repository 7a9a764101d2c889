"""HTTP client for the stream worker.

The worker owns the actual RTSP connections and publishes media to the
gateway. It exposes:

- ``POST /stream/start``      body ``{id, name, rtsp_url, location, enabled}``
- ``POST /stream/stop/{id}``
- ``GET  /stream/status``     map of camera id -> ``{fps, frame_count, uptime, ...}``
- ``GET  /health``
"""

from typing import Any

import httpx
from loguru import logger

from app.core.config import get_settings

settings = get_settings()


class WorkerError(Exception):
    """Worker unreachable, timed out or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def upstream_message(response: httpx.Response) -> str:
    """Pull a human readable error out of an upstream response."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            if data.get(key):
                return str(data[key])

    text = response.text.strip()
    return text or f"HTTP {response.status_code}"


class WorkerClient:
    """Async client for the stream worker REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url or settings.worker_url
        self._timeout = timeout or settings.worker_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Worker timeout on {method} {path}: {e}")
            raise WorkerError(f"Worker request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"Worker connection error on {method} {path}: {e}")
            raise WorkerError(f"Worker unreachable: {e}") from e

        if response.is_error:
            message = upstream_message(response)
            logger.error(
                f"Worker rejected {method} {path}: {response.status_code} - {message}"
            )
            raise WorkerError(message, status_code=response.status_code)

        return response

    async def start_stream(
        self,
        camera_id: str,
        name: str,
        rtsp_url: str,
        location: str,
    ) -> dict[str, Any]:
        """Ask the worker to open and publish a camera stream."""
        response = await self._request(
            "POST",
            "/stream/start",
            json={
                "id": camera_id,
                "name": name,
                "rtsp_url": rtsp_url,
                "location": location,
                "enabled": True,
            },
        )
        logger.info(f"Worker started stream for camera {camera_id}")
        return _json_or_empty(response)

    async def stop_stream(self, camera_id: str) -> dict[str, Any]:
        """Ask the worker to stop a camera stream."""
        response = await self._request("POST", f"/stream/stop/{camera_id}")
        logger.info(f"Worker stopped stream for camera {camera_id}")
        return _json_or_empty(response)

    async def get_status(self) -> dict[str, Any]:
        """Get the status map of every stream the worker is running."""
        response = await self._request("GET", "/stream/status")
        data = _json_or_empty(response)
        if not isinstance(data, dict):
            raise WorkerError("Worker returned an unexpected status payload")
        return data

    async def get_stream_status(self, camera_id: str) -> dict[str, Any] | None:
        """Get the status entry for one camera, None if the worker has none."""
        status_map = await self.get_status()
        entry = status_map.get(camera_id)
        return entry if isinstance(entry, dict) else None

    async def health_check(self) -> bool:
        """Return True if the worker answers its health endpoint."""
        try:
            await self._request("GET", "/health")
            return True
        except WorkerError:
            return False


def _json_or_empty(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}
