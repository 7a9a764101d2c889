"""Alert notifier pushing new alerts to connected WebSocket clients."""

import asyncio
from typing import Any

from fastapi import WebSocket
from loguru import logger


class AlertNotifier:
    """Fan out alert notifications to each user's open WebSocket connections.

    Producers call :meth:`enqueue`; :meth:`run` drains the queue in the
    background so request handlers never wait on slow sockets.
    """

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()
        self._connections: dict[str, set[WebSocket]] = {}
        self._running = False

    def connect(self, user_id: str, websocket: WebSocket) -> None:
        """Track an accepted connection for a user."""
        self._connections.setdefault(user_id, set()).add(websocket)
        logger.info(
            f"Alert socket opened for user {user_id} "
            f"({self.connection_count} total)"
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        """Forget a connection."""
        sockets = self._connections.get(user_id)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._connections[user_id]
        logger.info(
            f"Alert socket closed for user {user_id} "
            f"({self.connection_count} total)"
        )

    @property
    def connection_count(self) -> int:
        return sum(len(s) for s in self._connections.values())

    def enqueue(self, user_id: str, alert: dict[str, Any]) -> None:
        """Queue an alert for delivery to a user's connections."""
        self._queue.put_nowait((user_id, {"type": "alert", "alert": alert}))

    async def dispatch(self, user_id: str, message: dict[str, Any]) -> int:
        """Send a message to every connection of a user.

        Returns the number of connections reached. Connections that fail are
        dropped.
        """
        sockets = list(self._connections.get(user_id, ()))
        if not sockets:
            logger.debug(f"No alert sockets for user {user_id}")
            return 0

        sent = 0
        for websocket in sockets:
            try:
                await websocket.send_json(message)
                sent += 1
            except Exception as e:
                logger.warning(f"Dropping alert socket for user {user_id}: {e}")
                self.disconnect(user_id, websocket)

        logger.debug(f"Alert sent to {sent}/{len(sockets)} sockets for user {user_id}")
        return sent

    async def run(self) -> None:
        """Run the notifier (blocking)."""
        self._running = True
        logger.info("Alert notifier started")

        try:
            while self._running:
                try:
                    user_id, message = await asyncio.wait_for(
                        self._queue.get(),
                        timeout=1.0,
                    )
                    await self.dispatch(user_id, message)
                except asyncio.TimeoutError:
                    continue
                except Exception as e:
                    logger.error(f"Error dispatching alert: {e}")
                    await asyncio.sleep(1.0)
        except asyncio.CancelledError:
            pass
        finally:
            self._running = False
            # The queue is bound to this loop; the next run may be on another
            self._queue = asyncio.Queue()
            logger.info("Alert notifier stopped")

    def stop(self) -> None:
        """Ask the run loop to exit."""
        self._running = False


# Singleton instance
alert_notifier = AlertNotifier()
