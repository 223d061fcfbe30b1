"""Tests for the flat-file state store."""

import json

from database import AppState, PersistentStore, Prize, StateRepository, User
from tests.conftest import CountingStore


def test_missing_document_gives_default_state(store, admin):
    state = store.load()
    assert state.users == []
    assert state.prizes == []
    assert state.admin == admin


def test_corrupt_document_gives_default_state(state_path, admin):
    state_path.write_text("{not json", encoding="utf-8")
    state = PersistentStore(state_path, default_admin=admin).load()
    assert state.users == [] and state.prizes == []
    assert state.admin.username == "REBL"


def test_document_without_admin_keeps_its_users(state_path, admin):
    state_path.write_text(json.dumps({
        "users": [{"id": "1", "name": "Ana", "phone": "555", "stamps": 4}],
        "prizes": [],
    }), encoding="utf-8")
    state = PersistentStore(state_path, default_admin=admin).load()
    assert state.admin == admin
    assert [user.name for user in state.users] == ["Ana"]
    assert state.users[0].stamps == 4


def test_unreadable_records_are_skipped_and_the_rest_survive_a_save(state_path, admin):
    state_path.write_text(json.dumps({
        "users": [
            {"id": "1", "name": "Ana", "stamps": 7},
            {"name": "No id"},
            "not a record",
        ],
        "prizes": [{"id": "2", "name": "Coffee", "redeemed": False}, {"name": "Tea"}],
        "admin": {"username": "boss", "password": "secret"},
    }), encoding="utf-8")
    store = PersistentStore(state_path, default_admin=admin)
    repository = StateRepository(store)

    repository.create_prize("Cake")

    saved = json.loads(state_path.read_text(encoding="utf-8"))
    assert [user["name"] for user in saved["users"]] == ["Ana"]
    assert saved["users"][0]["stamps"] == 7
    assert [prize["name"] for prize in saved["prizes"]] == ["Coffee", "Cake"]
    assert saved["admin"] == {"username": "boss", "password": "secret"}


def test_document_with_spanish_keys_is_read(state_path, admin):
    state_path.write_text(json.dumps({
        "usuarios": [{
            "id": "1700000000000",
            "nombre": "Ana",
            "telefono": "555",
            "subscription": {"endpoint": "https://push.example/a", "keys": {}},
            "sellos": 9,
            "premio": "1700000000001",
        }],
        "premios": [{"id": "1700000000001", "nombre": "Coffee", "canjeado": True}],
        "admin": {"usuario": "REBL", "password": "Corp"},
    }), encoding="utf-8")
    state = PersistentStore(state_path, default_admin=admin).load()

    user = state.users[0]
    assert (user.name, user.phone, user.stamps, user.prize) == ("Ana", "555", 9, "1700000000001")
    assert user.is_active
    assert state.prizes == [Prize("1700000000001", "Coffee", True)]
    assert state.admin.username == "REBL"


def test_stored_values_are_kept_as_written(store, state_path, admin):
    document = {
        "users": [{
            "id": "1",
            "name": "Ana",
            "phone": "",
            "subscription": {},
            "stamps": 3.0,
            "prize": "",
        }],
        "prizes": [],
        "admin": {"username": "REBL", "password": "Corp"},
    }
    text = json.dumps(document, ensure_ascii=False, indent=2)
    state_path.write_text(text, encoding="utf-8")

    state = store.load()
    assert state.users[0].subscription == {}
    assert state.users[0].prize == ""
    assert state.users[0].stamps == 3.0

    assert store.save(state) is True
    assert state_path.read_text(encoding="utf-8") == text


def test_save_then_load_round_trip(store, state_path, admin, subscription):
    state = AppState(
        admin=admin,
        users=[
            User("1700000000000", "Ana", "555", subscription(), 10, "1700000000002"),
            User("1700000000001", "Luis", "", None, 0, None),
        ],
        prizes=[Prize("1700000000002", "Coffee", False), Prize("1700000000003", "Cake", True)],
    )
    assert store.save(state) is True
    first = json.loads(state_path.read_text(encoding="utf-8"))

    reloaded = store.load()
    assert reloaded == state
    store.save(reloaded)
    assert json.loads(state_path.read_text(encoding="utf-8")) == first


def test_legacy_user_without_stamps_loads_with_zero(state_path, admin):
    state_path.write_text(json.dumps({
        "users": [{"id": "1", "name": "Ana", "phone": ""}],
        "prizes": [],
        "admin": {"username": "REBL", "password": "Corp"},
    }), encoding="utf-8")
    user = PersistentStore(state_path, default_admin=admin).load().users[0]
    assert user.stamps == 0
    assert user.prize is None
    assert user.subscription is None


def test_failed_save_is_reported_not_raised(tmp_path, admin, caplog):
    target = tmp_path / "occupied"
    target.mkdir()
    store = CountingStore(target, default_admin=admin)

    assert store.save(AppState.default(admin)) is False
    assert "Failed to save state" in caplog.text


def test_save_leaves_no_temporary_file(store, state_path, admin):
    store.save(AppState.default(admin))
    assert [p.name for p in state_path.parent.iterdir()] == ["data.json"]
