"""Tests for the realtime channel."""

from tests.conftest import received


def test_connect_greets_and_registers(app, socketio, notifier):
    ws = socketio.test_client(app)
    assert ws.is_connected()
    assert len(notifier) == 1
    assert received(ws) == [{"type": "connected", "message": "Realtime connection established"}]

    ws.disconnect()
    assert len(notifier) == 0


def test_mutations_signal_connected_clients(app, socketio, client, subscription):
    ws = socketio.test_client(app)
    received(ws)

    response = client.post("/subscribe", json={"name": "Ana", "phone": "555", "subscription": subscription()})
    user_id = response.get_json()["id"]
    assert received(ws) == [{"type": "clientsChanged"}]

    client.post("/premios", json={"name": "Coffee"})
    assert received(ws) == [{"type": "prizesChanged"}]

    client.post("/agregarSello", json={"id": user_id})
    client.post("/premios/canjear", json={"userId": user_id})
    client.delete(f"/clientes/{user_id}")
    assert received(ws) == [{"type": "clientsChanged"}] * 3


def test_failed_mutation_sends_no_signal(app, socketio, client):
    ws = socketio.test_client(app)
    received(ws)
    client.delete("/premios/missing")
    client.post("/agregarSello", json={"id": "missing"})
    assert received(ws) == []


def test_client_text_is_relayed_to_others(app, socketio):
    sender = socketio.test_client(app)
    other = socketio.test_client(app)
    received(sender)
    received(other)

    sender.send("hola")
    assert received(other) == [{"type": "message", "payload": "hola"}]
    assert received(sender) == []


def test_disconnected_client_no_longer_receives(app, socketio, client):
    staying = socketio.test_client(app)
    leaving = socketio.test_client(app)
    leaving.disconnect()
    received(staying)

    client.post("/premios", json={"name": "Coffee"})
    assert received(staying) == [{"type": "prizesChanged"}]


def test_name_registration_signals_whether_new_or_known(app, socketio, client):
    ws = socketio.test_client(app)
    received(ws)

    first = client.post("/api/usuarios", json={"name": "Ana"})
    assert first.status_code == 201
    assert received(ws) == [{"type": "clientsChanged"}]

    again = client.post("/api/usuarios", json={"name": "Ana"})
    assert again.status_code == 200
    assert received(ws) == [{"type": "clientsChanged"}]
