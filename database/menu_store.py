"""Menu document storage, kept apart from the application state."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

from core import get_logger
from core.exceptions import StorageError
from database.json_store import read_json, write_json
from utils.validators import validate_menu

logger = get_logger(__name__)


def empty_menu() -> Dict[str, Any]:
    return {"categories": [], "products": []}


class MenuStore:
    """Reads and replaces the menu JSON document.

    Unlike the state document, menu storage errors reach the caller.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        """Return the menu, creating an empty one on first use.

        Raises:
            StorageError: if the stored menu cannot be parsed
        """
        try:
            return read_json(self.path)
        except FileNotFoundError:
            menu = empty_menu()
            try:
                write_json(self.path, menu)
            except StorageError as e:
                logger.warning(f"Could not create empty menu: {e.message}")
            return menu
        except StorageError as e:
            logger.error(f"Menu document unreadable: {e.message}")
            raise StorageError("Menu document is corrupt") from e

    def save(self, data: Any) -> Dict[str, Any]:
        """Validate and store a new menu.

        Raises:
            ValidationError: if the menu is malformed
            StorageError: if it cannot be written
        """
        menu = validate_menu(data)
        try:
            write_json(self.path, menu)
        except StorageError as e:
            logger.error(f"Failed to save menu: {e.message}")
            raise StorageError("Could not save the menu") from e
        logger.info(f"Menu saved: {len(menu['categories'])} categories, {len(menu['products'])} products")
        return menu
