"""Tests for stream start/stop/status through the worker."""

import pytest
from httpx import AsyncClient

from app.models.camera import Camera
from tests.conftest import WorkerStub


async def _enabled(client: AsyncClient, headers: dict, camera_id: str) -> bool:
    response = await client.get(f"/api/cameras/{camera_id}", headers=headers)
    return response.json()["enabled"]


@pytest.mark.asyncio
async def test_start_status_stop_cycle(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """enabled goes false -> true -> false and status mirrors the worker."""
    assert await _enabled(client, auth_headers, "cam-001") is False

    response = await client.post("/api/cameras/cam-001/start", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["started"] is True
    assert data["camera"]["id"] == "cam-001"
    assert data["camera"]["enabled"] is True
    assert await _enabled(client, auth_headers, "cam-001") is True

    response = await client.get("/api/cameras/cam-001/status", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "camera_id": "cam-001",
        "status": worker_stub.streams["cam-001"],
    }

    response = await client.post("/api/cameras/cam-001/stop", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["stopped"] is True
    assert data["camera"]["enabled"] is False
    assert await _enabled(client, auth_headers, "cam-001") is False

    response = await client.get("/api/cameras/cam-001/status", headers=auth_headers)
    assert response.json() == {"camera_id": "cam-001", "status": None}


@pytest.mark.asyncio
async def test_start_sends_camera_to_worker(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """The worker receives the camera's id, name, source URL and location."""
    await client.post("/api/cameras/cam-001/start", headers=auth_headers)

    assert worker_stub.start_bodies == [
        {
            "id": "cam-001",
            "name": "Main Entrance",
            "rtsp_url": "rtsp://192.168.1.100:554/stream1",
            "location": "Lobby",
            "enabled": True,
        }
    ]


@pytest.mark.asyncio
async def test_start_worker_error_leaves_camera_disabled(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """A worker error fails the start with its message and changes nothing."""
    worker_stub.fail_status = 400
    worker_stub.fail_body = {"error": "maximum number of streams reached (4)"}

    response = await client.post("/api/cameras/cam-001/start", headers=auth_headers)

    assert response.status_code == 500
    data = response.json()
    assert "maximum number of streams reached (4)" in data["error"]
    assert data["upstream"] == "maximum number of streams reached (4)"
    assert await _enabled(client, auth_headers, "cam-001") is False


@pytest.mark.asyncio
async def test_start_worker_unreachable(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """A network failure is reported and the camera stays disabled."""
    worker_stub.unreachable = True

    response = await client.post("/api/cameras/cam-001/start", headers=auth_headers)

    assert response.status_code == 500
    assert "Worker unreachable" in response.json()["error"]
    assert await _enabled(client, auth_headers, "cam-001") is False


@pytest.mark.asyncio
async def test_start_worker_plain_text_error(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """Non-JSON error bodies are passed through as text."""
    worker_stub.fail_status = 502
    worker_stub.fail_body = "bad gateway"

    response = await client.post("/api/cameras/cam-001/start", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["upstream"] == "bad gateway"


@pytest.mark.asyncio
async def test_stop_worker_error_keeps_camera_running(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """A failed stop is surfaced and the camera stays enabled."""
    await client.post("/api/cameras/cam-001/start", headers=auth_headers)
    worker_stub.fail_status = 500
    worker_stub.fail_body = {"error": "ffmpeg did not exit"}

    response = await client.post("/api/cameras/cam-001/stop", headers=auth_headers)

    assert response.status_code == 500
    assert "ffmpeg did not exit" in response.json()["error"]
    worker_stub.fail_status = None
    assert await _enabled(client, auth_headers, "cam-001") is True


@pytest.mark.asyncio
async def test_stop_not_running_reports_worker_error(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
):
    """Stopping a stream the worker does not know is a worker failure."""
    response = await client.post("/api/cameras/cam-002/stop", headers=auth_headers)

    assert response.status_code == 500
    assert "stream for camera cam-002 not found" in response.json()["error"]


@pytest.mark.asyncio
async def test_status_worker_error(
    client: AsyncClient,
    auth_headers: dict,
    sample_cameras: list[Camera],
    worker_stub: WorkerStub,
):
    """Status fails when the worker cannot be asked."""
    worker_stub.unreachable = True

    response = await client.get("/api/cameras/cam-001/status", headers=auth_headers)

    assert response.status_code == 500


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["start", "stop"])
async def test_stream_control_foreign_camera(
    client: AsyncClient,
    auth_headers: dict,
    other_camera: Camera,
    worker_stub: WorkerStub,
    action: str,
):
    """Another user's camera is 404 and the worker is never called."""
    response = await client.post(
        f"/api/cameras/{other_camera.id}/{action}",
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert worker_stub.requests == []


@pytest.mark.asyncio
async def test_status_missing_camera(
    client: AsyncClient, auth_headers: dict, worker_stub: WorkerStub
):
    response = await client.get("/api/cameras/nope/status", headers=auth_headers)

    assert response.status_code == 404
    assert worker_stub.requests == []
