"""End-to-end tests against a running uvicorn server with a real Socket.IO client"""

import asyncio
import json
import socket
import threading
import time

import httpx
import pytest
import socketio
import uvicorn

from web.main import ChatServer


def _free_port():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def live_server(settings):
    chat = ChatServer(settings)
    port = _free_port()
    server = uvicorn.Server(uvicorn.Config(
        chat.asgi, host="127.0.0.1", port=port, log_config=None, lifespan="on",
    ))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            pytest.fail("uvicorn did not start")
        time.sleep(0.05)

    yield chat, f"http://127.0.0.1:{port}"

    server.should_exit = True
    thread.join(timeout=10)


def _register_and_login(base_url, login="alice", password="pw"):
    body = json.dumps({"login": login, "password": password})
    with httpx.Client(base_url=base_url) as http:
        assert http.post("/api/register", content=body).status_code == 201
        res = http.post("/api/login", content=body)
        assert res.status_code == 200, res.text
        return res.json()["token"]


async def _chat(base_url, token, text):
    loop = asyncio.get_running_loop()
    history = loop.create_future()
    received = loop.create_future()
    client = socketio.AsyncClient()

    @client.on("history")
    def on_history(data):
        if not history.done():
            history.set_result(data)

    @client.on("message")
    def on_message(data):
        if not received.done():
            received.set_result(json.loads(data))

    await client.connect(base_url, auth={"cookie": f"token={token}"}, transports=["polling"])
    try:
        snapshot = await asyncio.wait_for(history, timeout=5)
        await client.emit("new_message", text)
        message = await asyncio.wait_for(received, timeout=5)
    finally:
        await client.disconnect()
    return snapshot, message


async def _connect_only(base_url, auth):
    client = socketio.AsyncClient()
    try:
        await client.connect(base_url, auth=auth, transports=["polling"])
    finally:
        await client.disconnect()


def test_registered_user_chats_over_socketio(live_server):
    chat, base_url = live_server
    token = _register_and_login(base_url)
    alice_id = chat.services.accounts.store.find_by_login("alice").id

    snapshot, message = asyncio.run(_chat(base_url, token, "hi"))

    assert snapshot == []
    assert message["text"] == "hi"
    assert message["userId"] == alice_id
    assert message["sender"] == "Admin"
    assert [m.text for m in chat.services.history.all()] == ["hi"]


def test_history_replayed_to_a_later_connection(live_server):
    chat, base_url = live_server
    token = _register_and_login(base_url)
    asyncio.run(_chat(base_url, token, "first"))

    snapshot, message = asyncio.run(_chat(base_url, token, "second"))

    assert [m["text"] for m in snapshot] == ["first"]
    assert message["text"] == "second"


@pytest.mark.parametrize("auth", [
    None,
    {"cookie": ""},
    {"cookie": "token=00000000-0000-0000-0000-000000000000.mallory"},
])
def test_handshake_without_registered_token_is_refused(live_server, auth):
    chat, base_url = live_server
    with pytest.raises(socketio.exceptions.ConnectionError):
        asyncio.run(_connect_only(base_url, auth))
    assert chat.services.hub.participant_count == 0


def test_protected_page_redirects_without_cookie(live_server):
    _, base_url = live_server
    res = httpx.get(f"{base_url}/", follow_redirects=False)
    assert res.status_code == 302
    assert res.headers["location"] == "/auth"
