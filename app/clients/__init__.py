"""Clients for the external stream worker and media gateway."""

from app.clients.gateway_client import GatewayClient, GatewayError, WhepAnswer
from app.clients.worker_client import WorkerClient, WorkerError

# Global client instances (set by main.py on startup)
_worker_client: WorkerClient | None = None
_gateway_client: GatewayClient | None = None


def get_worker_client() -> WorkerClient:
    """Get the global worker client, creating it on first use."""
    global _worker_client
    if _worker_client is None:
        _worker_client = WorkerClient()
    return _worker_client


def set_worker_client(client: WorkerClient | None) -> None:
    """Set the global worker client instance."""
    global _worker_client
    _worker_client = client


def get_gateway_client() -> GatewayClient:
    """Get the global gateway client, creating it on first use."""
    global _gateway_client
    if _gateway_client is None:
        _gateway_client = GatewayClient()
    return _gateway_client


def set_gateway_client(client: GatewayClient | None) -> None:
    """Set the global gateway client instance."""
    global _gateway_client
    _gateway_client = client


__all__ = [
    "GatewayClient",
    "GatewayError",
    "WhepAnswer",
    "WorkerClient",
    "WorkerError",
    "get_gateway_client",
    "get_worker_client",
    "set_gateway_client",
    "set_worker_client",
]
