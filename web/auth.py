"""Admin login and bearer tokens for the admin page.

The token is base64 of ``{"username", "issuedAt"}``. It is NOT signed: anyone
who knows the admin username can forge one. It only lets the admin page
remember a successful login and must not guard anything sensitive.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import time
from typing import Any, Dict, Optional

from core import get_logger
from database.models import AdminCredentials

logger = get_logger(__name__)


def issue_token(username: str, issued_at: Optional[int] = None) -> str:
    """Encode a login token for ``username``.

    Args:
        username: Admin username
        issued_at: Milliseconds since the epoch; defaults to now
    """
    if issued_at is None:
        issued_at = int(time.time() * 1000)
    payload = json.dumps({"username": username, "issuedAt": issued_at})
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_token(token: Any) -> Optional[Dict[str, Any]]:
    """Decode a token, returning None for anything that is not one."""
    if not isinstance(token, str) or not token:
        return None
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
        payload = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


def validate_token(credentials: AdminCredentials, token: Any) -> bool:
    payload = decode_token(token)
    return payload is not None and payload.get("username") == credentials.username


def validate_credentials(credentials: AdminCredentials, username: Any, password: Any) -> bool:
    """Check a login attempt against the stored admin credential.

    Args:
        credentials: Admin credentials to validate against
        username: Username provided by user
        password: Password provided by user

    Returns:
        True if credentials are valid, False otherwise
    """
    if not isinstance(username, str) or not isinstance(password, str):
        return False
    valid = hmac.compare_digest(username.encode(), credentials.username.encode()) and hmac.compare_digest(
        password.encode(), credentials.password.encode()
    )
    logger.info("Admin login for '%s': %s", username, "accepted" if valid else "rejected")
    return valid
