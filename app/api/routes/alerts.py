"""Alert API endpoints."""

from fastapi import APIRouter, Query

from app.core.deps import CurrentUser, DBSession, Notifier
from app.schemas.alert import MAX_PAGE, AlertCreate, AlertQueryParams, AlertResponse
from app.services.alert_service import AlertService

router = APIRouter()


@router.get("", response_model=list[AlertResponse])
async def get_alerts(
    db: DBSession,
    current_user: CurrentUser,
    camera_id: str | None = Query(None, alias="cameraId"),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    page_size: int = Query(20, alias="pageSize", ge=1, le=100),
) -> list[AlertResponse]:
    """
    List alerts from the caller's cameras, newest first.

    - **cameraId**: Only alerts of this camera
    - **page**: Page number (1-based)
    - **pageSize**: Items per page (1-100)
    """
    params = AlertQueryParams(camera_id=camera_id, page=page, page_size=page_size)

    alert_service = AlertService(db)
    return await alert_service.get_alerts(current_user.user_id, params)


@router.post("", response_model=AlertResponse)
async def create_alert(
    data: AlertCreate,
    db: DBSession,
    current_user: CurrentUser,
    notifier: Notifier,
) -> AlertResponse:
    """
    Store a detection alert (posted by the stream worker).

    The camera's owner is notified over the alert WebSocket.
    """
    alert_service = AlertService(db, notifier)
    return await alert_service.create_alert(data)
