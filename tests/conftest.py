"""Pytest configuration and fixtures."""

import json
import os
import tempfile
from datetime import datetime, timedelta
from typing import AsyncGenerator

# Cheap hashing and a fixed secret for tests; must be set before app imports
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")
# Database used only by tests that run the real application lifespan
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{tempfile.mkdtemp()}/surveillance-test.db",
)

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.clients import GatewayClient, WorkerClient, set_gateway_client
from app.core.deps import get_db, get_gateway, get_notifier, get_worker
from app.core.security import create_access_token
from app.db.base import Base
from app.db import models_registry  # noqa: F401 - Import to register models
from app.main import app
from app.models.alert import Alert
from app.models.camera import Camera
from app.models.user import User
from app.services.user_service import UserService
from app.workers.alert_notifier import AlertNotifier

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

WORKER_URL = "http://worker.test"
GATEWAY_URL = "http://gateway.test"


class WorkerStub:
    """In-memory stand-in for the stream worker HTTP API."""

    def __init__(self):
        self.streams: dict[str, dict] = {}
        self.requests: list[tuple[str, str]] = []
        self.start_bodies: list[dict] = []
        self.fail_status: int | None = None
        self.fail_body: dict | str = {"error": "worker failure"}
        self.unreachable = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))

        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if self.fail_status is not None:
            if isinstance(self.fail_body, dict):
                return httpx.Response(self.fail_status, json=self.fail_body)
            return httpx.Response(self.fail_status, text=self.fail_body)

        if request.method == "POST" and path == "/stream/start":
            camera = json.loads(request.content)
            self.start_bodies.append(camera)
            if camera["id"] in self.streams:
                return httpx.Response(
                    400,
                    json={"error": f"stream for camera {camera['id']} already exists"},
                )
            self.streams[camera["id"]] = {
                "camera_id": camera["id"],
                "camera_name": camera["name"],
                "is_running": True,
                "frame_count": 120,
                "fps": 24.5,
                "uptime": 4.9,
            }
            return httpx.Response(200, json={"message": "Stream started successfully"})

        if request.method == "POST" and path.startswith("/stream/stop/"):
            camera_id = path.rsplit("/", 1)[-1]
            if camera_id not in self.streams:
                return httpx.Response(
                    400,
                    json={"error": f"stream for camera {camera_id} not found"},
                )
            del self.streams[camera_id]
            return httpx.Response(200, json={"message": "Stream stopped successfully"})

        if request.method == "GET" and path == "/stream/status":
            return httpx.Response(200, json=self.streams)

        if request.method == "GET" and path == "/health":
            return httpx.Response(200, json={"status": "healthy"})

        return httpx.Response(404, text="404 page not found")

    def calls_to(self, method: str, path: str) -> int:
        return sum(1 for m, p in self.requests if m == method and p == path)


class GatewayStub:
    """Stand-in for the media gateway WHEP endpoint."""

    answer = "v=0\r\no=- 1 1 IN IP4 127.0.0.1\r\ns=-\r\nt=0 0\r\n"

    def __init__(self):
        self.offers: list[tuple[str, str, str | None]] = []
        self.fail_status: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.offers.append(
            (request.url.path, request.content.decode(), request.headers.get("content-type"))
        )
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, text="stream not found")
        return httpx.Response(
            201,
            text=self.answer,
            headers={
                "Content-Type": "application/sdp",
                "Location": f"{request.url.path}/session/abc",
            },
        )


class RecordingNotifier(AlertNotifier):
    """Notifier that records what would be pushed."""

    def __init__(self):
        super().__init__()
        self.sent: list[tuple[str, dict]] = []

    def enqueue(self, user_id, alert):
        self.sent.append((user_id, alert))


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def worker_stub() -> WorkerStub:
    return WorkerStub()


@pytest.fixture
def gateway_stub() -> GatewayStub:
    return GatewayStub()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest_asyncio.fixture(scope="function")
async def worker_client(worker_stub: WorkerStub) -> AsyncGenerator[WorkerClient, None]:
    client = WorkerClient(
        base_url=WORKER_URL,
        transport=httpx.MockTransport(worker_stub.handler),
    )
    yield client
    await client.close()


@pytest_asyncio.fixture(scope="function")
async def gateway_client(gateway_stub: GatewayStub) -> AsyncGenerator[GatewayClient, None]:
    client = GatewayClient(
        base_url=GATEWAY_URL,
        transport=httpx.MockTransport(gateway_stub.handler),
    )
    yield client
    await client.close()


@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession,
    worker_client: WorkerClient,
    gateway_client: GatewayClient,
    notifier: RecordingNotifier,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_worker] = lambda: worker_client
    app.dependency_overrides[get_gateway] = lambda: gateway_client
    app.dependency_overrides[get_notifier] = lambda: notifier
    set_gateway_client(gateway_client)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    set_gateway_client(None)


@pytest_asyncio.fixture(scope="function")
async def test_user(db_session: AsyncSession) -> User:
    """Create test user."""
    return await UserService(db_session).create_user("testuser", "testpassword")


@pytest_asyncio.fixture(scope="function")
async def other_user(db_session: AsyncSession) -> User:
    """Create a second user owning nothing of test_user's."""
    return await UserService(db_session).create_user("otheruser", "otherpassword")


def make_auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": user.id, "username": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Create authorization headers."""
    return make_auth_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return make_auth_headers(other_user)


@pytest_asyncio.fixture(scope="function")
async def sample_cameras(db_session: AsyncSession, test_user: User) -> list[Camera]:
    """Create sample cameras owned by test_user."""
    cameras = [
        Camera(
            id="cam-001",
            name="Main Entrance",
            rtsp_url="rtsp://192.168.1.100:554/stream1",
            location="Lobby",
            enabled=False,
            user_id=test_user.id,
        ),
        Camera(
            id="cam-002",
            name="Parking Lot",
            rtsp_url="rtsp://192.168.1.101:554/stream1",
            location="Outside",
            enabled=False,
            user_id=test_user.id,
        ),
    ]

    for camera in cameras:
        db_session.add(camera)
    await db_session.commit()

    return cameras


@pytest_asyncio.fixture(scope="function")
async def other_camera(db_session: AsyncSession, other_user: User) -> Camera:
    """Create a camera owned by other_user."""
    camera = Camera(
        id="cam-other",
        name="Neighbour",
        rtsp_url="rtsp://10.0.0.5/live",
        location="Next door",
        enabled=False,
        user_id=other_user.id,
    )
    db_session.add(camera)
    await db_session.commit()
    return camera


@pytest_asyncio.fixture(scope="function")
async def sample_alerts(db_session: AsyncSession, sample_cameras: list[Camera]) -> list[Alert]:
    """Create five alerts on cam-001, one minute apart, oldest first."""
    base = datetime(2024, 5, 1, 12, 0, 0)
    alerts = []

    for i in range(5):
        alert = Alert(
            camera_id=sample_cameras[0].id,
            detected_at=base + timedelta(minutes=i),
            description=f"Face detected #{i}",
            snapshot_url=f"/snapshots/cam-001_{i}.jpg",
        )
        alert.set_metadata({"face_count": i + 1})
        alerts.append(alert)
        db_session.add(alert)

    await db_session.commit()
    return alerts
