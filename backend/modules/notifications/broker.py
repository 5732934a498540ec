"""
Real-time notification fan-out.

The broker keeps a registry of live socket connections keyed by a
monotonically increasing connection id. ``publish`` never awaits a socket:
it drops a frame into each matching connection's bounded outbox, and a
per-connection sender task drains the outbox with a bounded send timeout.
That gives FIFO delivery per connection and keeps one stalled client from
delaying everyone else.

All methods must be called from the event loop that owns the sockets.
Broadcast iterates over a snapshot of the registry, so connects and
disconnects that interleave with a publish never mutate the collection
being iterated.
"""

import asyncio
from dataclasses import dataclass, field
import itertools
import logging
from typing import Any, Optional, Protocol

from .models import Notification, NotificationEvent

logger = logging.getLogger(__name__)

# Close codes sent when the server drops a connection
CLOSE_GOING_AWAY = 1001
CLOSE_POLICY_VIOLATION = 1008
CLOSE_INTERNAL_ERROR = 1011


class FrameSocket(Protocol):
    """The part of a WebSocket the broker needs."""

    async def send_json(self, data: Any) -> None:
        ...

    async def close(self, code: int = 1000) -> None:
        ...


@dataclass
class Connection:
    """A live socket registered with the broker."""

    connection_id: int
    socket: FrameSocket
    outbox: asyncio.Queue
    associated_user_id: Optional[int] = None
    sender: Optional[asyncio.Task] = field(default=None, repr=False)

    def accepts(self, notification: Notification) -> bool:
        if notification.user_id is None:
            return True
        return self.associated_user_id == notification.user_id


class NotificationBroker:
    """
    Best-effort delivery of notifications to currently connected clients.

    Nothing is queued for users without a live connection and nothing is
    retried. A connection whose send fails or times out, or whose outbox
    overflows, is removed and its socket closed.
    """

    def __init__(self, send_timeout: float = 5.0, queue_size: int = 100):
        self._send_timeout = send_timeout
        self._queue_size = queue_size
        self._connections: dict[int, Connection] = {}
        self._ids = itertools.count(1)
        self._closing: set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def get(self, connection_id: int) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def connections_for(self, user_id: int) -> list[Connection]:
        return [
            c for c in list(self._connections.values())
            if c.associated_user_id == user_id
        ]

    def connect(self, socket: FrameSocket, user_id: Optional[int] = None) -> Connection:
        """Register a socket and start its sender task."""
        connection = Connection(
            connection_id=next(self._ids),
            socket=socket,
            outbox=asyncio.Queue(maxsize=self._queue_size),
            associated_user_id=user_id,
        )
        self._connections[connection.connection_id] = connection
        connection.sender = asyncio.create_task(
            self._drain(connection),
            name=f"notification-sender-{connection.connection_id}",
        )
        logger.info(
            f"Connection {connection.connection_id} opened "
            f"({self.connection_count} live)"
        )
        return connection

    def identify(self, connection_id: int, user_id: int) -> bool:
        """Attach a user to a live connection. False if it is already gone."""
        connection = self._connections.get(connection_id)
        if connection is None:
            return False
        connection.associated_user_id = user_id
        logger.debug(f"Connection {connection_id} identified as user {user_id}")
        return True

    def publish(self, notification: Notification) -> int:
        """
        Queue a notification for every matching live connection.

        Targeted notifications go only to connections of that user;
        broadcasts go to all. Returns the number of connections the frame
        was queued for. Never raises because of a bad connection.
        """
        frame = NotificationEvent(notification=notification).to_frame()
        queued = 0

        for connection in list(self._connections.values()):
            if not connection.accepts(notification):
                continue
            try:
                connection.outbox.put_nowait(frame)
                queued += 1
            except asyncio.QueueFull:
                logger.warning(
                    f"Connection {connection.connection_id} outbox full, disconnecting"
                )
                self._evict(connection.connection_id, CLOSE_POLICY_VIOLATION)

        if queued == 0 and notification.user_id is not None:
            logger.debug(
                f"Notification {notification.id} dropped: user "
                f"{notification.user_id} has no live connection"
            )
        return queued

    async def disconnect(self, connection_id: int, close_code: Optional[int] = None) -> bool:
        """
        Remove a connection and stop its sender.

        With ``close_code`` the socket is also closed from the server side.
        Idempotent: returns False when the connection was already removed.
        """
        connection = self._discard(connection_id)
        if connection is None:
            return False

        sender = connection.sender
        if sender is not None and sender is not asyncio.current_task():
            await asyncio.wait([sender])
        if close_code is not None:
            await self._close(connection, close_code)
        return True

    async def shutdown(self) -> None:
        """Disconnect and close every live connection."""
        for connection_id in list(self._connections):
            await self.disconnect(connection_id, close_code=CLOSE_GOING_AWAY)
        if self._closing:
            await asyncio.wait(list(self._closing))
        logger.info("Notification broker stopped")

    def _discard(self, connection_id: int) -> Optional[Connection]:
        # Single removal point: pop() hands the entry to exactly one caller
        connection = self._connections.pop(connection_id, None)
        if connection is None:
            return None
        if connection.sender is not None and connection.sender is not asyncio.current_task():
            connection.sender.cancel()
        logger.info(
            f"Connection {connection_id} closed ({self.connection_count} live)"
        )
        return connection

    def _evict(self, connection_id: int, close_code: int) -> None:
        """Remove a misbehaving connection and close its socket in the background."""
        connection = self._discard(connection_id)
        if connection is None:
            return
        task = asyncio.create_task(
            self._close(connection, close_code),
            name=f"notification-close-{connection_id}",
        )
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    async def _close(self, connection: Connection, code: int) -> None:
        try:
            await asyncio.wait_for(
                connection.socket.close(code=code),
                timeout=self._send_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Closing connection {connection.connection_id} timed out")
        except Exception as e:
            # Peer already gone; nothing left to close
            logger.debug(f"Closing connection {connection.connection_id} failed: {e!r}")

    async def _drain(self, connection: Connection) -> None:
        while True:
            frame = await connection.outbox.get()
            try:
                await asyncio.wait_for(
                    connection.socket.send_json(frame),
                    timeout=self._send_timeout,
                )
            except asyncio.TimeoutError:
                logger.warning(
                    f"Send to connection {connection.connection_id} timed out"
                )
                self._evict(connection.connection_id, CLOSE_POLICY_VIOLATION)
                return
            except Exception as e:
                # Socket already closed or broken; contained to this connection
                logger.info(
                    f"Send to connection {connection.connection_id} failed: {e!r}"
                )
                self._evict(connection.connection_id, CLOSE_INTERNAL_ERROR)
                return
