"""Alert notification WebSocket endpoint."""

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from app.core.deps import auth_context_from_token
from app.workers.alert_notifier import alert_notifier

router = APIRouter()


@router.websocket("/alerts")
async def alerts_socket(
    websocket: WebSocket,
    token: str | None = Query(None),
) -> None:
    """
    Push new alerts for the caller's cameras.

    Browsers cannot set headers on the upgrade request, so the bearer token
    is passed as the ``token`` query parameter. Messages have the shape
    ``{"type": "alert", "alert": {...}}``.
    """
    context = auth_context_from_token(token)
    if not context:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    alert_notifier.connect(context.user_id, websocket)
    try:
        while True:
            # Client messages are ignored; reading detects disconnects
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        alert_notifier.disconnect(context.user_id, websocket)
