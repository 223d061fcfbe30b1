"""Pytest configuration and fixtures."""

import dataclasses
import random

import pytest

from config import load_config
from database import AdminCredentials, MenuStore, PersistentStore, StateRepository
from services import ChangeNotifier, PushService, VapidKeys
from web import create_app


class FakeHandle:
    """In-memory observer handle."""

    def __init__(self, open=True, fail=False):
        self.open = open
        self.fail = fail
        self.messages = []

    @property
    def is_open(self):
        return self.open

    def send(self, message):
        if self.fail:
            raise ConnectionError("socket gone")
        self.messages.append(message)


class CountingStore(PersistentStore):
    """Persistent store that remembers how often it was asked to save."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saves = 0

    def save(self, state):
        self.saves += 1
        return super().save(state)


def received(client):
    """Messages a Socket.IO test client got, as plain dicts."""
    messages = []
    for item in client.get_received():
        args = item["args"]
        if isinstance(args, list):
            args = args[0] if args else None
        messages.append(args)
    return messages


@pytest.fixture
def admin():
    return AdminCredentials("REBL", "Corp")


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def store(state_path, admin):
    return CountingStore(state_path, default_admin=admin)


@pytest.fixture
def repository(store):
    return StateRepository(store, rng=random.Random(7))


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def push_service():
    return PushService(
        VapidKeys(private_key_path="unused.pem", public_key="BPublicKeyForTests"),
        subject="mailto:test@example.com",
        greeting="Hola",
    )


@pytest.fixture
def config(tmp_path):
    static = tmp_path / "public"
    static.mkdir()
    (static / "index.html").write_text("<h1>Tarjeta</h1>", encoding="utf-8")
    return dataclasses.replace(
        load_config(),
        data_file=str(tmp_path / "data.json"),
        menu_file=str(tmp_path / "menu_data.json"),
        static_folder=str(static),
        vapid_private_key_path=str(tmp_path / "vapid.pem"),
    )


@pytest.fixture
def app(config, repository, notifier, push_service):
    return create_app(
        config,
        repository=repository,
        notifier=notifier,
        push_service=push_service,
        menu_store=MenuStore(config.menu_file),
        testing=True,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socketio(app):
    return app.extensions["socketio"]


@pytest.fixture
def subscription():
    def make(endpoint="https://push.example.com/ana"):
        return {
            "endpoint": endpoint,
            "expirationTime": None,
            "keys": {"p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA", "auth": "tBHItJI5svbpez7KI4CCXg"},
        }
    return make
