"""
Webhook event objects.

Every event has a type, a timestamp and a source. Message, follow, join,
postback and beacon events also carry a one-time reply token; when decoded by
the webhook pipeline they receive a ReplyCapability so handlers can answer
that single event without holding a reference to the bot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Literal, Optional

from pydantic import Field, SerializeAsAny, field_validator

from linehook.constants.line_types import EventType
from linehook.errors import ReplyUnavailableError
from linehook.schemas.base import LineModel, resolve_variant, validate_variant
from linehook.schemas.messages import Message, decode_message
from linehook.schemas.sources import Source, decode_source

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Replier = Callable[[str, Any], Any]

# Keys a payload must not use to smuggle in a capability.
_CAPABILITY_KEYS = frozenset({"reply_capability", "replyCapability"})


@dataclass(frozen=True)
class ReplyCapability:
    """Reply token plus the outbound call that consumes it."""

    reply_token: str
    send: Replier

    def reply(self, messages: Any) -> Any:
        return self.send(self.reply_token, messages)


class Postback(LineModel):
    data: str


class Beacon(LineModel):
    """Beacon detection. type is "enter" for the beacon types known today."""

    hwid: str
    type: str


class Event(LineModel):
    """Base event; unknown event types decode to this shape."""

    type: str
    timestamp: datetime
    source: SerializeAsAny[Source]

    @field_validator("timestamp", mode="before")
    @classmethod
    def from_epoch_millis(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return EPOCH + timedelta(milliseconds=value)
            except (OverflowError, ValueError) as e:
                raise ValueError(f"timestamp out of range: {value!r}") from e
        return value

    @field_validator("source", mode="before")
    @classmethod
    def decode_event_source(cls, value: Any) -> Source:
        return decode_source(value)


class ReplyableEvent(Event):
    reply_token: str
    reply_capability: Optional[ReplyCapability] = Field(
        default=None, exclude=True, repr=False
    )

    def reply(self, messages: Any) -> Any:
        """
        Reply to this event with one message or a list of messages.

        Raises:
            ReplyUnavailableError: the event was built without a capability.
            RemoteCallError: the LINE API rejected the reply.
        """
        if self.reply_capability is None:
            raise ReplyUnavailableError(
                f"{type(self).__name__} has no reply capability bound"
            )
        return self.reply_capability.reply(messages)


class MessageEvent(ReplyableEvent):
    type: Literal["message"] = "message"
    message: SerializeAsAny[Message]

    @field_validator("message", mode="before")
    @classmethod
    def decode_event_message(cls, value: Any) -> Message:
        return decode_message(value)


class FollowEvent(ReplyableEvent):
    type: Literal["follow"] = "follow"


class UnfollowEvent(Event):
    type: Literal["unfollow"] = "unfollow"


class JoinEvent(ReplyableEvent):
    type: Literal["join"] = "join"


class LeaveEvent(Event):
    type: Literal["leave"] = "leave"


class PostbackEvent(ReplyableEvent):
    type: Literal["postback"] = "postback"
    postback: Postback


class BeaconEvent(ReplyableEvent):
    type: Literal["beacon"] = "beacon"
    beacon: Beacon


EVENT_TYPES: dict[str, type[Event]] = {
    EventType.MESSAGE: MessageEvent,
    EventType.FOLLOW: FollowEvent,
    EventType.UNFOLLOW: UnfollowEvent,
    EventType.JOIN: JoinEvent,
    EventType.LEAVE: LeaveEvent,
    EventType.POSTBACK: PostbackEvent,
    EventType.BEACON: BeaconEvent,
}


def decode_event(raw: Any, replier: Optional[Replier] = None) -> Event:
    """
    Decode one element of a webhook ``events`` array.

    When replier is given, replyable events are bound to it through a
    ReplyCapability carrying the event's reply token.
    """
    if isinstance(raw, Event):
        return raw
    model = resolve_variant(raw, EVENT_TYPES, Event)
    data = {key: value for key, value in raw.items() if key not in _CAPABILITY_KEYS}
    reply_token = data.get("replyToken")
    if (
        replier is not None
        and issubclass(model, ReplyableEvent)
        and isinstance(reply_token, str)
    ):
        data["reply_capability"] = ReplyCapability(
            reply_token=reply_token, send=replier
        )
    return validate_variant(model, data)
