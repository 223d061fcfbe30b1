"""Flat-file persistence for the application state document."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Union

from core import get_logger, StorageDefaults
from core.exceptions import StorageError
from database.models import AdminCredentials, AppState

logger = get_logger(__name__)


def read_json(path: Path) -> Any:
    """Read and parse a JSON document.

    Raises:
        FileNotFoundError: if the document does not exist
        StorageError: if the document cannot be read or parsed
    """
    try:
        raw = path.read_text(encoding=StorageDefaults.ENCODING)
    except FileNotFoundError:
        raise
    except OSError as e:
        raise StorageError(f"Could not read {path}: {e}") from e
    try:
        return json.loads(raw)
    except ValueError as e:
        raise StorageError(f"{path} is not valid JSON: {e}") from e


def write_json(path: Path, data: Any) -> None:
    """Serialize ``data`` and replace ``path`` with it.

    The document is written to a sibling temporary file first and moved into
    place, so a reader never sees a half-written file. Concurrent writers are
    last-writer-wins.

    Raises:
        StorageError: if the document cannot be written
    """
    tmp = path.with_name(f"{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding=StorageDefaults.ENCODING) as f:
            json.dump(data, f, ensure_ascii=False, indent=StorageDefaults.INDENT)
        os.replace(tmp, path)
    except (OSError, TypeError, ValueError) as e:
        raise StorageError(f"Could not write {path}: {e}") from e


class PersistentStore:
    """Loads and saves the whole :class:`AppState` as one JSON document."""

    def __init__(self, path: Union[str, Path], default_admin: AdminCredentials) -> None:
        self.path = Path(path)
        self.default_admin = default_admin

    def load(self) -> AppState:
        """Read the state document.

        A missing or unparsable document yields a default state with no users,
        no prizes and the configured admin credential. A document that parses
        keeps every record it can; see :meth:`AppState.from_dict`.
        """
        try:
            state = AppState.from_dict(read_json(self.path), self.default_admin)
        except FileNotFoundError:
            logger.info(f"No state document at {self.path}, starting empty")
            return AppState.default(self.default_admin)
        except (StorageError, TypeError) as e:
            logger.warning(f"Ignoring unreadable state document {self.path}: {e}")
            return AppState.default(self.default_admin)

        logger.info(
            f"Loaded state from {self.path}: "
            f"{len(state.users)} users, {len(state.prizes)} prizes"
        )
        return state

    def save(self, state: AppState) -> bool:
        """Overwrite the document with ``state``.

        Failures are logged and reported through the return value only; the
        caller keeps using its in-memory state.

        Returns:
            True if the document was written
        """
        try:
            write_json(self.path, state.to_dict())
        except StorageError as e:
            logger.error(f"Failed to save state: {e.message}", exc_info=True)
            return False
        return True
