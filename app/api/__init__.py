"""API router initialization."""

from fastapi import APIRouter, Depends

from app.api.routes.alerts import router as alerts_router
from app.api.routes.auth import router as auth_router
from app.api.routes.cameras import router as cameras_router
from app.api.routes.ws import router as ws_router
from app.core.deps import get_auth_context

# Everything under /api requires a bearer token; the guard runs before any
# other dependency so unauthenticated calls never open a database session.
api_router = APIRouter(dependencies=[Depends(get_auth_context)])
api_router.include_router(cameras_router, prefix="/cameras", tags=["Cameras"])
api_router.include_router(alerts_router, prefix="/alerts", tags=["Alerts"])

router = APIRouter()
router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(api_router, prefix="/api")
router.include_router(ws_router, prefix="/ws", tags=["Notifications"])
