"""
Outbound calls to the LINE Messaging API.

Thin wrapper over requests: builds request bodies from Message objects and
raises RemoteCallError on any non-200 answer. No retries.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional, Union

import requests

from linehook.config import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from linehook.errors import RemoteCallError
from linehook.infra.logging_config import get_logger
from linehook.schemas.base import LineModel
from linehook.schemas.messages import Message
from linehook.schemas.profile import Profile
from linehook.schemas.sources import GroupSource, RoomSource, Source, UserSource

logger = get_logger("line_client")

PUSH_PATH = "message/push"
REPLY_PATH = "message/reply"
CONTENT_PATH = "message/{message_id}/content"
PROFILE_PATH = "profile/{user_id}"
LEAVE_PATH = "{kind}/{target_id}/leave"
CONTENT_CHUNK_SIZE = 8192

OutboundMessages = Union[Message, Mapping[str, Any], list[Any], tuple[Any, ...]]


def serialize_messages(messages: OutboundMessages) -> list[dict[str, Any]]:
    """
    Build the ``messages`` array of a push or reply body.

    A single message is the same as a one-element list. Message ids are
    dropped so decoded inbound messages can be echoed back.
    """
    items = list(messages) if isinstance(messages, (list, tuple)) else [messages]
    payload: list[dict[str, Any]] = []
    for item in items:
        if isinstance(item, Message):
            payload.append(
                item.model_dump(
                    by_alias=True, exclude_none=True, exclude={"id"}, mode="json"
                )
            )
        elif isinstance(item, LineModel):
            payload.append(item.to_payload())
        elif isinstance(item, Mapping):
            payload.append(dict(item))
        else:
            raise TypeError(f"Cannot send {type(item).__name__} as a message")
    return payload


class LineClient:
    """Bearer-token client for the push, reply, content, profile and leave endpoints."""

    def __init__(
        self,
        channel_token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._headers = {"Authorization": f"Bearer {channel_token}"}

    def push(self, to: str, messages: OutboundMessages) -> None:
        """Send messages to a user, group or room at any time."""
        self._post(PUSH_PATH, {"to": to, "messages": serialize_messages(messages)})

    def reply(self, reply_token: str, messages: OutboundMessages) -> None:
        """Answer the event that issued reply_token."""
        self._post(
            REPLY_PATH,
            {"replyToken": reply_token, "messages": serialize_messages(messages)},
        )

    def get_content(
        self, message_id: str, chunk_size: int = CONTENT_CHUNK_SIZE
    ) -> Iterator[bytes]:
        """Stream the image, video or audio data a user sent."""
        resp = self._session.get(
            self._url(CONTENT_PATH.format(message_id=message_id)),
            headers=self._headers,
            timeout=self._timeout,
            stream=True,
        )
        if resp.status_code != 200:
            resp.close()
            raise RemoteCallError(resp.status_code, resp.reason or "no reason")
        return resp.iter_content(chunk_size=chunk_size)

    def get_content_from_message(
        self, message: Message, chunk_size: int = CONTENT_CHUNK_SIZE
    ) -> Iterator[bytes]:
        if not message.id:
            raise ValueError("Message has no id; only received messages have content")
        return self.get_content(message.id, chunk_size=chunk_size)

    def get_profile(self, user_id: str) -> Profile:
        resp = self._session.get(
            self._url(PROFILE_PATH.format(user_id=user_id)),
            headers=self._headers,
            timeout=self._timeout,
        )
        self._raise_for_status(resp)
        return Profile.model_validate(resp.json())

    def get_profile_from_user_source(self, source: UserSource) -> Profile:
        return self.get_profile(source.user_id)

    def leave(self, kind: str, target_id: str) -> None:
        """Leave a group or room; kind is "group" or "room"."""
        self._post(LEAVE_PATH.format(kind=kind, target_id=target_id))

    def leave_from_source(self, source: Source) -> None:
        """Leave the group or room an event came from. User sources are ignored."""
        if isinstance(source, GroupSource):
            self.leave("group", source.group_id)
        elif isinstance(source, RoomSource):
            self.leave("room", source.room_id)
        else:
            logger.debug("Nothing to leave for %s source", source.type)

    def _post(self, path: str, payload: Optional[dict[str, Any]] = None) -> None:
        resp = self._session.post(
            self._url(path),
            json=payload,
            headers=self._headers,
            timeout=self._timeout,
        )
        self._raise_for_status(resp)

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if resp.status_code == 200:
            return
        message = resp.reason or "no reason"
        try:
            data = resp.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            message = str(data["message"])
        logger.warning("LINE API call failed: HTTP %s %s", resp.status_code, message)
        raise RemoteCallError(resp.status_code, message)
