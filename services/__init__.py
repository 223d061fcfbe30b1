"""Services package."""

from .notifier import ChangeNotifier, ObserverHandle
from .push import PushReport, PushService
from .vapid import VapidKeys, load_or_create_vapid_keys
from .async_runner import run_sync

__all__ = [
    "ChangeNotifier",
    "ObserverHandle",
    "PushReport",
    "PushService",
    "VapidKeys",
    "load_or_create_vapid_keys",
    "run_sync",
]
