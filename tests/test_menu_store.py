"""Tests for the menu document store."""

import pytest

from core.exceptions import StorageError, ValidationError
from database import MenuStore

MENU = {
    "categories": ["Coffee", "Cakes"],
    "products": [
        {"name": "Latte", "category": "Coffee", "price": 3.5},
        {"name": "Brownie", "category": "Cakes", "price": 2},
    ],
}


def test_first_read_creates_empty_menu(tmp_path):
    store = MenuStore(tmp_path / "menu_data.json")
    assert store.load() == {"categories": [], "products": []}
    assert store.path.exists()


def test_save_and_load(tmp_path):
    store = MenuStore(tmp_path / "menu_data.json")
    store.save(MENU)
    assert store.load() == MENU


def test_corrupt_menu_raises(tmp_path):
    path = tmp_path / "menu_data.json"
    path.write_text("[oops", encoding="utf-8")
    with pytest.raises(StorageError):
        MenuStore(path).load()


@pytest.mark.parametrize("menu", [
    None,
    {"categories": [], "products": {}},
    {"categories": "Coffee", "products": []},
    {"categories": [], "products": [{"name": "Latte", "category": "Coffee"}]},
    {"categories": [], "products": [{"name": "Latte", "category": "Coffee", "price": "3"}]},
    {"categories": [], "products": [{"name": "Latte", "category": "Coffee", "price": True}]},
    {"categories": [], "products": [{"name": "", "category": "Coffee", "price": 3}]},
])
def test_invalid_menus_are_rejected(tmp_path, menu):
    store = MenuStore(tmp_path / "menu_data.json")
    with pytest.raises(ValidationError):
        store.save(menu)
    assert not store.path.exists()
