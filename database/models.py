"""In-memory models for the loyalty-card state document.

The whole application state is one JSON document::

    {
      "users":  [{"id", "name", "phone", "subscription", "stamps", "prize"}],
      "prizes": [{"id", "name", "redeemed"}],
      "admin":  {"username", "password"}
    }

Documents written by the first release of the service used Spanish keys
(``usuarios``, ``nombre``, ``sellos`` ...). Those are still read; saving
rewrites them with the keys above.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core import get_logger

logger = get_logger(__name__)

PushSubscription = Dict[str, Any]


def _field(data: Dict[str, Any], key: str, legacy_key: str, default: Any = None) -> Any:
    if key in data:
        return data[key]
    return data.get(legacy_key, default)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _is_count(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require(data: Any, *keys: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    for key in keys:
        if data.get(key) in (None, ""):
            raise KeyError(key)
    return data


def subscription_endpoint(subscription: Optional[PushSubscription]) -> Optional[str]:
    """Return the push endpoint of a subscription, or None when unusable."""
    if not isinstance(subscription, dict):
        return None
    endpoint = subscription.get("endpoint")
    return endpoint or None


@dataclass(slots=True)
class User:
    id: str
    name: str
    phone: str = ""
    subscription: Optional[PushSubscription] = None
    stamps: int = 0
    prize: Optional[str] = None

    @property
    def endpoint(self) -> Optional[str]:
        return subscription_endpoint(self.subscription)

    @property
    def is_active(self) -> bool:
        """True when the user holds a subscription push can be sent to."""
        return self.endpoint is not None

    def summary(self) -> Dict[str, Any]:
        """Public view used by the client list."""
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "stamps": self.stamps,
            "prize": self.prize,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "subscription": self.subscription,
            "stamps": self.stamps,
            "prize": self.prize,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Build a user, keeping every stored value that is usable as is.

        Raises:
            KeyError: if the record has no id
        """
        data = _require(data, "id")
        stamps = _field(data, "stamps", "sellos")
        # Users registered by name alone were stored without a stamp count
        if not _is_count(stamps):
            stamps = 0
        subscription = data.get("subscription")
        if not isinstance(subscription, dict):
            subscription = None
        prize = _field(data, "prize", "premio")
        if prize is not None and not isinstance(prize, str):
            prize = str(prize)
        return cls(
            id=_text(data["id"]),
            name=_text(_field(data, "name", "nombre")),
            phone=_text(_field(data, "phone", "telefono")),
            subscription=subscription,
            stamps=stamps,
            prize=prize,
        )


@dataclass(slots=True)
class Prize:
    id: str
    name: str
    redeemed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "redeemed": self.redeemed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Prize":
        data = _require(data, "id")
        return cls(
            id=_text(data["id"]),
            name=_text(_field(data, "name", "nombre")),
            redeemed=bool(_field(data, "redeemed", "canjeado", False)),
        )


@dataclass(slots=True)
class AdminCredentials:
    """The single admin login. Stored in plain text alongside the state."""
    username: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "password": self.password}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminCredentials":
        data = _require(data, "password")
        username = _text(_field(data, "username", "usuario"))
        if not username:
            raise KeyError("username")
        return cls(username=username, password=_text(data["password"]))


@dataclass(slots=True)
class AppState:
    admin: AdminCredentials
    users: List[User] = field(default_factory=list)
    prizes: List[Prize] = field(default_factory=list)

    @classmethod
    def default(cls, admin: AdminCredentials) -> "AppState":
        return cls(admin=AdminCredentials(admin.username, admin.password))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "users": [user.to_dict() for user in self.users],
            "prizes": [prize.to_dict() for prize in self.prizes],
            "admin": self.admin.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_admin: AdminCredentials) -> "AppState":
        """Build state from a parsed document.

        A missing or malformed admin entry is replaced by ``default_admin``.
        User and prize records that cannot be read are skipped with a warning;
        the rest of the document is kept.

        Raises:
            TypeError: if the document is not a JSON object
        """
        if not isinstance(data, dict):
            raise TypeError("State document must be a JSON object")

        try:
            admin = AdminCredentials.from_dict(data["admin"])
        except (KeyError, TypeError) as e:
            logger.warning(f"State document has no usable admin entry ({e!r}), using the configured one")
            admin = AdminCredentials(default_admin.username, default_admin.password)

        return cls(
            admin=admin,
            users=_records(_field(data, "users", "usuarios"), User.from_dict, "user"),
            prizes=_records(_field(data, "prizes", "premios"), Prize.from_dict, "prize"),
        )


def _records(items: Any, build, kind: str) -> list:
    if not isinstance(items, list):
        if items is not None:
            logger.warning(f"Ignoring {kind} list of type {type(items).__name__}")
        return []
    records = []
    for index, item in enumerate(items):
        try:
            records.append(build(item))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping unreadable {kind} record #{index}: {e!r}")
    return records
