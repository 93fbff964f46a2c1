"""Discriminator values used by the LINE Messaging API payloads."""

from enum import StrEnum

SIGNATURE_HEADER = "X-Line-Signature"
WEBHOOK_TOPIC_PREFIX = "webhook"


class EventType(StrEnum):
    """Webhook event types."""

    MESSAGE = "message"
    FOLLOW = "follow"
    UNFOLLOW = "unfollow"
    JOIN = "join"
    LEAVE = "leave"
    POSTBACK = "postback"
    BEACON = "beacon"

    @property
    def topic(self) -> str:
        """Event bus topic the pipeline publishes this event type on."""
        return f"{WEBHOOK_TOPIC_PREFIX}:{self.value}"


class SourceType(StrEnum):
    USER = "user"
    GROUP = "group"
    ROOM = "room"


class MessageType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    LOCATION = "location"
    STICKER = "sticker"
    IMAGEMAP = "imagemap"
    TEMPLATE = "template"


class ActionType(StrEnum):
    """Action types shared by imagemap and template actions."""

    URI = "uri"
    MESSAGE = "message"
    POSTBACK = "postback"


class TemplateType(StrEnum):
    BUTTONS = "buttons"
    CONFIRM = "confirm"
    CAROUSEL = "carousel"


class BeaconType(StrEnum):
    ENTER = "enter"
