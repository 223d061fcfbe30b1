"""Fan-out of change signals to connected realtime observers."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Protocol, Union

from core import get_logger, ChangeCategory, RealtimeMessageType

logger = get_logger(__name__)


class ObserverHandle(Protocol):
    """Send-capable handle for one realtime connection."""

    @property
    def is_open(self) -> bool: ...

    def send(self, message: Dict[str, Any]) -> None: ...


class ChangeNotifier:
    """Registry of realtime observers keyed by connection id.

    Delivery is best effort and at most once: closed handles and handles
    whose ``send`` raises are skipped, and the remaining observers still get
    the message. Clients react to a change tag by re-fetching the list they
    display, so a lost signal heals on the next one.
    """

    def __init__(self) -> None:
        self._observers: Dict[str, ObserverHandle] = {}
        self._lock = threading.Lock()

    def register(self, connection_id: str, handle: ObserverHandle) -> None:
        with self._lock:
            self._observers[connection_id] = handle
        logger.debug(f"Observer {connection_id} registered ({len(self)} connected)")

    def unregister(self, connection_id: str) -> None:
        with self._lock:
            self._observers.pop(connection_id, None)
        logger.debug(f"Observer {connection_id} removed ({len(self)} connected)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self._observers

    def _deliver(self, connection_id: str, handle: ObserverHandle, message: Dict[str, Any]) -> bool:
        try:
            if not handle.is_open:
                logger.debug(f"Skipping closed observer {connection_id}")
                return False
            handle.send(message)
            return True
        except Exception as e:
            logger.debug(f"Send to observer {connection_id} failed: {e}")
            return False

    def _fan_out(self, message: Dict[str, Any], exclude: Optional[str] = None) -> int:
        with self._lock:
            targets = list(self._observers.items())
        delivered = 0
        for connection_id, handle in targets:
            if connection_id == exclude:
                continue
            if self._deliver(connection_id, handle, message):
                delivered += 1
        return delivered

    def broadcast(self, category: Union[ChangeCategory, str]) -> int:
        """Send ``{"type": <category>}`` to every open observer.

        Returns:
            Number of observers the message was handed to
        """
        tag = ChangeCategory(category).value
        delivered = self._fan_out({"type": tag})
        logger.debug(f"Broadcast {tag} to {delivered} observers")
        return delivered

    def relay(self, sender_id: str, payload: Any) -> int:
        """Forward client-sent data to every other open observer."""
        return self._fan_out(
            {"type": RealtimeMessageType.MESSAGE.value, "payload": payload},
            exclude=sender_id,
        )

    def send_to(self, connection_id: str, message: Dict[str, Any]) -> bool:
        with self._lock:
            handle = self._observers.get(connection_id)
        if handle is None:
            return False
        return self._deliver(connection_id, handle, message)
