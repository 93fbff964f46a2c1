"""Tests for the webhook route."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from linehook.schemas.events import BeaconEvent, MessageEvent
from tests.fixtures.webhook_fixtures import (
    api_response,
    beacon_event,
    encode,
    follow_event,
    leave_event,
    message_event,
    sign,
)


def post_events(client: TestClient, events, path="/", headers=None):
    body = encode({"events": events})
    return client.post(path, content=body, headers=headers if headers is not None else sign(body))


def test_message_event_is_published(bot, client: TestClient):
    received = []
    bot.on("webhook:message", received.append)

    resp = post_events(client, [message_event()])

    assert resp.status_code == 200
    assert resp.content == b""
    assert len(received) == 1
    event = received[0]
    assert isinstance(event, MessageEvent)
    assert event.message.text == "hi"
    assert event.source.user_id == "U1"


@pytest.mark.parametrize(
    "headers",
    [{}, {"X-Line-Signature": "d3Jvbmc="}],
    ids=["missing", "wrong"],
)
def test_bad_signature_returns_400(bot, client: TestClient, headers):
    handler = MagicMock()
    bot.on("*", handler)

    resp = post_events(client, [message_event()], headers=headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request."}
    handler.assert_not_called()


def test_signature_over_different_body_is_rejected(client: TestClient):
    original = encode({"events": [message_event(text="hi")]})
    tampered = encode({"events": [message_event(text="ho")]})
    resp = client.post("/", content=tampered, headers=sign(original))
    assert resp.status_code == 400


def test_beacon_event(bot, client: TestClient):
    received = []
    bot.on("webhook:beacon", received.append)

    resp = post_events(client, [beacon_event()])

    assert resp.status_code == 200
    assert isinstance(received[0], BeaconEvent)
    assert received[0].beacon.type == "enter"
    assert received[0].beacon.hwid == "abc"


def test_wildcard_sees_every_event_in_order(bot, client: TestClient):
    seen = []
    messages = []
    bot.on("webhook:*", lambda e: seen.append(e.type))
    bot.on("webhook:message", lambda e: messages.append(e.message.text))

    resp = post_events(
        client,
        [message_event(text="one"), follow_event(), leave_event(), message_event(text="two")],
    )

    assert resp.status_code == 200
    assert seen == ["message", "follow", "leave", "message"]
    assert messages == ["one", "two"]


def test_no_handlers_still_returns_200(client: TestClient):
    assert post_events(client, [message_event(), beacon_event()]).status_code == 200


@pytest.mark.parametrize(
    "body",
    [b"{not json", b'{"destination": "U0"}', b'"events"'],
)
def test_malformed_body_returns_400(client: TestClient, body):
    resp = client.post("/", content=body, headers=sign(body))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid JSON."}


def test_undecodable_event_returns_400(bot, client: TestClient):
    handler = MagicMock()
    bot.on("webhook:*", handler)
    broken = message_event()
    del broken["source"]

    resp = post_events(client, [message_event(), broken])

    assert resp.status_code == 400
    assert "error" in resp.json()
    handler.assert_not_called()


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
@pytest.mark.parametrize("path", ["/", "/callback", "/line/webhook"])
def test_any_method_and_path(bot, client: TestClient, method, path):
    handler = MagicMock()
    bot.on("webhook:message", handler)
    body = encode({"events": [message_event()]})

    resp = client.request(method, path, content=body, headers=sign(body))

    assert resp.status_code == 200
    handler.assert_called_once()


def test_handler_can_reply(bot, client: TestClient, session):
    bot.on("webhook:message", lambda e: e.reply(e.message))

    resp = post_events(client, [message_event(text="echo", reply_token="r9")])

    assert resp.status_code == 200
    args, kwargs = session.post.call_args
    assert args[0] == "https://api.line.me/v2/bot/message/reply"
    assert kwargs["json"] == {
        "replyToken": "r9",
        "messages": [{"type": "text", "text": "echo"}],
    }


def test_handler_exception_propagates(bot, client: TestClient):
    bot.on("webhook:message", MagicMock(side_effect=RuntimeError("handler failed")))
    with pytest.raises(RuntimeError, match="handler failed"):
        post_events(client, [message_event()])


def test_async_handler_runs(bot, client: TestClient):
    seen = []
    done = threading.Event()

    async def handler(event):
        seen.append(event.message.text)
        done.set()

    bot.on("webhook:message", handler)
    resp = post_events(client, [message_event(text="later")])

    assert resp.status_code == 200
    assert done.wait(timeout=2)
    assert seen == ["later"]


def test_out_of_range_timestamp_returns_400(bot, client: TestClient):
    handler = MagicMock()
    bot.on("webhook:*", handler)

    resp = post_events(client, [{**message_event(), "timestamp": 10**15}])

    assert resp.status_code == 400
    assert "timestamp out of range" in resp.json()["error"]
    handler.assert_not_called()


def test_slow_reply_does_not_block_other_deliveries(bot, client: TestClient, session):
    entered = threading.Event()
    release = threading.Event()
    replied = []

    def slow_post(url, json=None, **kwargs):
        if json["messages"][0]["text"] == "slow":
            entered.set()
            release.wait(timeout=5)
        replied.append(json["messages"][0]["text"])
        return api_response(payload={})

    session.post.side_effect = slow_post
    bot.on("webhook:message", lambda e: e.reply(e.message))

    with ThreadPoolExecutor(max_workers=1) as pool:
        slow = pool.submit(post_events, client, [message_event(text="slow")])
        assert entered.wait(timeout=5)

        fast = post_events(client, [message_event(text="fast")])

        assert fast.status_code == 200
        assert not slow.done()
        release.set()
        assert slow.result(timeout=5).status_code == 200

    assert replied == ["fast", "slow"]
