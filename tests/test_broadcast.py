from unittest.mock import AsyncMock

import pytest
from fastapi import WebSocketDisconnect

from app.routers.ws import relay
from app.services.broadcast import Broadcaster


def fake_socket():
    socket = AsyncMock()
    socket.accept = AsyncMock()
    socket.send_text = AsyncMock()
    return socket


@pytest.mark.asyncio
async def test_message_reaches_every_other_client():
    broadcaster = Broadcaster()
    sender, first, second = fake_socket(), fake_socket(), fake_socket()
    for socket in (sender, first, second):
        await broadcaster.connect(socket)

    delivered = await broadcaster.broadcast('{"type": "new-listing"}', sender=sender)

    assert delivered == 2
    sender.send_text.assert_not_called()
    first.send_text.assert_awaited_once_with('{"type": "new-listing"}')
    second.send_text.assert_awaited_once_with('{"type": "new-listing"}')
    sender.accept.assert_awaited_once()


@pytest.mark.asyncio
async def test_disconnected_client_misses_messages():
    broadcaster = Broadcaster()
    sender, gone = fake_socket(), fake_socket()
    await broadcaster.connect(sender)
    await broadcaster.connect(gone)
    broadcaster.disconnect(gone)
    broadcaster.disconnect(gone)

    assert await broadcaster.broadcast("hello", sender=sender) == 0
    gone.send_text.assert_not_called()


@pytest.mark.asyncio
async def test_failing_client_is_dropped():
    broadcaster = Broadcaster()
    sender, broken, healthy = fake_socket(), fake_socket(), fake_socket()
    broken.send_text.side_effect = RuntimeError("socket closed")
    for socket in (sender, broken, healthy):
        await broadcaster.connect(socket)

    delivered = await broadcaster.broadcast("hello", sender=sender)

    assert delivered == 1
    assert broken not in broadcaster.connections
    healthy.send_text.assert_awaited_once_with("hello")


def relay_socket(broadcaster, *incoming):
    socket = fake_socket()
    socket.app.state.broadcaster = broadcaster
    socket.receive_text = AsyncMock(side_effect=list(incoming))
    return socket


@pytest.mark.asyncio
async def test_relay_forwards_then_unregisters_on_close():
    broadcaster = Broadcaster()
    listener = fake_socket()
    await broadcaster.connect(listener)
    socket = relay_socket(broadcaster, "hello", WebSocketDisconnect(code=1000))

    await relay(socket)

    listener.send_text.assert_awaited_once_with("hello")
    assert broadcaster.connections == [listener]


@pytest.mark.asyncio
async def test_relay_unregisters_when_receive_fails():
    # Binary frames make receive_text raise KeyError
    broadcaster = Broadcaster()
    socket = relay_socket(broadcaster, KeyError("text"))

    with pytest.raises(KeyError):
        await relay(socket)

    assert broadcaster.connections == []
