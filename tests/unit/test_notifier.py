"""
Unit tests for live update fan-out
"""

import asyncio
import pytest
from datetime import date
from ingestion.notifier import ChangeNotifier
from models.base import SourceType
from schemas.normalized import CongressTradeCreate


class FakeWebSocket:
    """Records what the notifier sends"""

    def __init__(self, fail: bool = False):
        self.accepted = False
        self.sent = []
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(data)


@pytest.mark.asyncio
async def test_connect_accepts_socket():
    notifier = ChangeNotifier()
    ws = FakeWebSocket()

    await notifier.connect(ws)

    assert ws.accepted
    assert notifier.connection_count == 1


@pytest.mark.asyncio
async def test_broadcast_reaches_every_client():
    notifier = ChangeNotifier()
    clients = [FakeWebSocket(), FakeWebSocket()]
    for ws in clients:
        await notifier.connect(ws)

    sent = await notifier.broadcast(SourceType.HOLDINGS, {"message": "13F holdings updated"})

    assert sent == 2
    for ws in clients:
        assert len(ws.sent) == 1
        event = ws.sent[0]
        assert event["event"] == "update"
        assert event["data"]["type"] == "13f"
        assert event["data"]["data"] == {"message": "13F holdings updated"}
        assert "timestamp" in event["data"]


@pytest.mark.asyncio
async def test_records_are_serialized(pelosi_nvda_trade):
    notifier = ChangeNotifier()
    ws = FakeWebSocket()
    await notifier.connect(ws)

    trade = CongressTradeCreate(**{
        **pelosi_nvda_trade,
        "transaction_date": date(2024, 11, 15),
        "disclosure_date": date(2024, 12, 1),
    })
    await notifier.broadcast(SourceType.CONGRESS, [trade])

    payload = ws.sent[0]["data"]
    assert payload["type"] == "congress"
    assert payload["data"][0]["ticker"] == "NVDA"
    assert payload["data"][0]["transaction_date"] == "2024-11-15"


@pytest.mark.asyncio
async def test_failed_socket_is_dropped():
    notifier = ChangeNotifier()
    healthy = FakeWebSocket()
    broken = FakeWebSocket(fail=True)
    await notifier.connect(healthy)
    await notifier.connect(broken)

    sent = await notifier.broadcast(SourceType.INSIDER, [])

    assert sent == 1
    assert notifier.connection_count == 1
    assert len(healthy.sent) == 1


@pytest.mark.asyncio
async def test_broadcast_without_clients():
    notifier = ChangeNotifier()

    assert await notifier.broadcast(SourceType.CONGRESS, []) == 0


@pytest.mark.asyncio
async def test_disconnect_unknown_socket_is_harmless():
    notifier = ChangeNotifier()
    ws = FakeWebSocket()
    await notifier.connect(ws)

    await notifier.disconnect(ws)
    await notifier.disconnect(ws)

    assert notifier.connection_count == 0


def test_notifier_outlives_the_event_loop_it_was_created_in():
    notifier = ChangeNotifier()
    ws = FakeWebSocket()

    asyncio.run(notifier.connect(ws))
    sent = asyncio.run(notifier.broadcast(SourceType.CONGRESS, []))

    assert sent == 1
    assert len(ws.sent) == 1
