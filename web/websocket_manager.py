"""WebSocket channel that pushes state-change signals to the admin page."""

from __future__ import annotations

from typing import Any, Dict

from flask import request
from flask_socketio import SocketIO

from core import get_logger, RealtimeDefaults, RealtimeMessageType
from services.notifier import ChangeNotifier
from utils.performance import PerformanceMonitor

logger = get_logger(__name__)


class SocketIOHandle:
    """Observer handle for one Socket.IO connection."""

    def __init__(self, socketio: SocketIO, sid: str, namespace: str = RealtimeDefaults.NAMESPACE) -> None:
        self.socketio = socketio
        self.sid = sid
        self.namespace = namespace

    @property
    def is_open(self) -> bool:
        server = self.socketio.server
        if server is None:
            return False
        return server.manager.is_connected(self.sid, self.namespace)

    def send(self, message: Dict[str, Any]) -> None:
        self.socketio.emit(RealtimeDefaults.EVENT, message, to=self.sid, namespace=self.namespace)


class WebSocketManager:
    """Binds Socket.IO connection events to the :class:`ChangeNotifier`.

    Each connection is registered as an observer on connect and removed on
    disconnect. Data a client sends is relayed to the other connections.
    """

    def __init__(self, socketio: SocketIO, notifier: ChangeNotifier) -> None:
        """
        Args:
            socketio: Flask-SocketIO instance bound to the app
            notifier: Registry the connections are added to
        """
        self.socketio = socketio
        self.notifier = notifier
        self.monitor = PerformanceMonitor()
        self._register_handlers()

    def _register_handlers(self) -> None:
        namespace = RealtimeDefaults.NAMESPACE

        @self.socketio.on('connect', namespace=namespace)
        def handle_connect(auth=None):
            sid = request.sid
            self.notifier.register(sid, SocketIOHandle(self.socketio, sid, namespace))
            self.monitor.record_realtime_connections(len(self.notifier))
            self.notifier.send_to(sid, {
                'type': RealtimeMessageType.CONNECTED.value,
                'message': RealtimeDefaults.GREETING,
            })
            logger.info(f"Realtime client connected (session: {sid})")

        @self.socketio.on('disconnect', namespace=namespace)
        def handle_disconnect(*args):
            sid = request.sid
            self.notifier.unregister(sid)
            self.monitor.record_realtime_connections(len(self.notifier))
            logger.info(f"Realtime client disconnected (session: {sid})")

        @self.socketio.on(RealtimeDefaults.EVENT, namespace=namespace)
        def handle_message(data):
            self.notifier.relay(request.sid, data)


def init_websocket_manager(socketio: SocketIO, notifier: ChangeNotifier) -> WebSocketManager:
    return WebSocketManager(socketio, notifier)
