"""Tests for the change notifier registry."""

import pytest

from core import ChangeCategory
from services import ChangeNotifier
from tests.conftest import FakeHandle


def test_broadcast_reaches_every_open_observer(notifier):
    handles = [FakeHandle(), FakeHandle()]
    for n, handle in enumerate(handles):
        notifier.register(f"sid-{n}", handle)

    assert notifier.broadcast(ChangeCategory.CLIENTS_CHANGED) == 2
    for handle in handles:
        assert handle.messages == [{"type": "clientsChanged"}]


def test_broadcast_skips_closed_and_failing_observers(notifier):
    open_handle = FakeHandle()
    closed = FakeHandle(open=False)
    broken = FakeHandle(fail=True)
    notifier.register("closed", closed)
    notifier.register("broken", broken)
    notifier.register("open", open_handle)

    assert notifier.broadcast(ChangeCategory.PRIZES_CHANGED) == 1
    assert open_handle.messages == [{"type": "prizesChanged"}]
    assert closed.messages == []


def test_broadcast_accepts_tag_strings(notifier):
    handle = FakeHandle()
    notifier.register("sid", handle)
    notifier.broadcast("prizesChanged")
    assert handle.messages == [{"type": "prizesChanged"}]

    with pytest.raises(ValueError):
        notifier.broadcast("somethingElse")


def test_broadcast_without_observers():
    assert ChangeNotifier().broadcast(ChangeCategory.CLIENTS_CHANGED) == 0


def test_unregister_removes_observer(notifier):
    handle = FakeHandle()
    notifier.register("sid", handle)
    notifier.unregister("sid")
    notifier.unregister("sid")
    assert "sid" not in notifier
    assert len(notifier) == 0
    notifier.broadcast(ChangeCategory.CLIENTS_CHANGED)
    assert handle.messages == []


def test_relay_skips_sender(notifier):
    sender, other = FakeHandle(), FakeHandle()
    notifier.register("sender", sender)
    notifier.register("other", other)

    assert notifier.relay("sender", "hola") == 1
    assert other.messages == [{"type": "message", "payload": "hola"}]
    assert sender.messages == []


def test_send_to_single_observer(notifier):
    handle = FakeHandle()
    notifier.register("sid", handle)
    assert notifier.send_to("sid", {"type": "connected"}) is True
    assert notifier.send_to("unknown", {"type": "connected"}) is False
    assert handle.messages == [{"type": "connected"}]
