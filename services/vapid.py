"""VAPID key pair used to sign web push requests."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from cryptography.hazmat.primitives import serialization
from py_vapid import Vapid
from py_vapid.utils import b64urlencode

from core import get_logger
from core.exceptions import ConfigurationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class VapidKeys:
    private_key_path: str
    public_key: str  # urlsafe base64 uncompressed point, the browser's applicationServerKey


def public_key_of(vapid: Vapid) -> str:
    raw = vapid.public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return b64urlencode(raw)


def load_or_create_vapid_keys(path: Union[str, Path]) -> VapidKeys:
    """Load the VAPID private key, generating and saving one on first start.

    Raises:
        ConfigurationError: if an existing key file cannot be used
    """
    key_path = Path(path)
    if key_path.exists():
        try:
            vapid = Vapid.from_file(str(key_path))
        except Exception as e:
            raise ConfigurationError(f"Unusable VAPID key {key_path}: {e}") from e
    else:
        logger.info(f"Generating VAPID keys at {key_path}")
        key_path.parent.mkdir(parents=True, exist_ok=True)
        vapid = Vapid()
        vapid.generate_keys()
        vapid.save_key(str(key_path))

    keys = VapidKeys(private_key_path=str(key_path), public_key=public_key_of(vapid))
    logger.info(f"VAPID public key for clients: {keys.public_key}")
    return keys
