"""Database package public API."""

from .models import AdminCredentials, AppState, Prize, User
from .json_store import PersistentStore
from .menu_store import MenuStore
from .repositories import IdGenerator, StampResult, StateRepository

__all__ = [
    "AdminCredentials",
    "AppState",
    "Prize",
    "User",
    "PersistentStore",
    "MenuStore",
    "IdGenerator",
    "StampResult",
    "StateRepository",
]
