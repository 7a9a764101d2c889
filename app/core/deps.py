"""FastAPI dependencies for dependency injection."""

from dataclasses import dataclass
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients import GatewayClient, WorkerClient, get_gateway_client, get_worker_client
from app.core.exceptions import Unauthorized
from app.core.security import decode_access_token
from app.db.session import async_session_maker
from app.workers.alert_notifier import AlertNotifier, alert_notifier

# Security scheme
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the authenticated caller for the current request."""

    user_id: str
    username: str | None = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


def auth_context_from_token(token: str | None) -> AuthContext | None:
    """Verify a bearer token and build the caller's context."""
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return AuthContext(user_id=user_id, username=payload.get("username"))


async def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthContext:
    """Require a valid bearer token, raise 401 otherwise.

    Only the token is checked; the datastore is not consulted.
    """
    if not credentials:
        raise Unauthorized("Missing token")

    context = auth_context_from_token(credentials.credentials)
    if not context:
        raise Unauthorized("Invalid token")
    return context


def get_worker() -> WorkerClient:
    """Get the stream worker client."""
    return get_worker_client()


def get_gateway() -> GatewayClient:
    """Get the media gateway client."""
    return get_gateway_client()


def get_notifier() -> AlertNotifier:
    """Get the alert notifier."""
    return alert_notifier


# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[AuthContext, Depends(get_auth_context)]
Worker = Annotated[WorkerClient, Depends(get_worker)]
Gateway = Annotated[GatewayClient, Depends(get_gateway)]
Notifier = Annotated[AlertNotifier, Depends(get_notifier)]
