"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


class StampCard:
    """Loyalty card limits."""
    MAX_STAMPS = 10


class ChangeCategory(str, Enum):
    """Tags pushed over the realtime channel when stored state changes."""
    CLIENTS_CHANGED = "clientsChanged"
    PRIZES_CHANGED = "prizesChanged"


class RealtimeMessageType(str, Enum):
    """Envelope types for messages that are not change signals."""
    CONNECTED = "connected"
    MESSAGE = "message"


class RealtimeDefaults:
    """Realtime channel configuration."""
    NAMESPACE = "/"
    EVENT = "message"
    GREETING = "Realtime connection established"


class PushDefaults:
    """Web push delivery defaults."""
    TTL = 86400  # seconds
    GREETING = "Hola"
    CONTENT_ENCODING = "aes128gcm"


class StorageDefaults:
    """JSON document layout."""
    INDENT = 2
    ENCODING = "utf-8"
