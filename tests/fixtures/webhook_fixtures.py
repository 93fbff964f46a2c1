"""Webhook payload builders and signing helpers."""

import json
from unittest.mock import MagicMock

from linehook.core.signature import compute_signature

CHANNEL_SECRET = "test-channel-secret"
CHANNEL_TOKEN = "test-channel-token"


def message_event(text="hi", user_id="U1", reply_token="r1", message_id="m1"):
    return {
        "type": "message",
        "timestamp": 1462629479859,
        "source": {"type": "user", "userId": user_id},
        "replyToken": reply_token,
        "message": {"type": "text", "id": message_id, "text": text},
    }


def beacon_event():
    return {
        "type": "beacon",
        "timestamp": 0,
        "source": {"type": "user", "userId": "U2"},
        "replyToken": "r2",
        "beacon": {"hwid": "abc", "type": "enter"},
    }


def follow_event(user_id="U3", reply_token="r3"):
    return {
        "type": "follow",
        "timestamp": 1462629479860,
        "source": {"type": "user", "userId": user_id},
        "replyToken": reply_token,
    }


def leave_event(group_id="G1"):
    return {
        "type": "leave",
        "timestamp": 1462629479861,
        "source": {"type": "group", "groupId": group_id},
    }


def encode(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def sign(body: bytes, secret: str = CHANNEL_SECRET) -> dict[str, str]:
    return {"X-Line-Signature": compute_signature(body, secret)}


def api_response(status_code=200, payload=None, reason="OK"):
    """Mocked requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = reason
    if payload is None:
        resp.json.side_effect = ValueError("no JSON body")
    else:
        resp.json.return_value = payload
    return resp
