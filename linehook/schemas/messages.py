"""
Message objects.

Inbound messages (decoded from webhook events) carry an ``id``; messages built
in code for push or reply leave it unset. Imagemap and template messages are
only ever sent, but decode the same way so any message can be round-tripped.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import SerializeAsAny, field_validator

from linehook.constants.line_types import MessageType
from linehook.schemas.actions import ImagemapAction, decode_imagemap_action
from linehook.schemas.base import LineModel, Size, decode_sequence, decode_variant
from linehook.schemas.templates import TemplateComponent, decode_template


class Message(LineModel):
    """Base message; unknown message types decode to this shape."""

    id: Optional[str] = None
    type: str


class TextMessage(Message):
    type: Literal["text"] = "text"
    text: str


class ImageMessage(Message):
    """Image message. URLs must be HTTPS JPEGs when sending."""

    type: Literal["image"] = "image"
    original_content_url: Optional[str] = None
    preview_image_url: Optional[str] = None


class VideoMessage(Message):
    """Video message. original_content_url points at an HTTPS MP4 when sending."""

    type: Literal["video"] = "video"
    original_content_url: Optional[str] = None
    preview_image_url: Optional[str] = None


class AudioMessage(Message):
    """Audio message; duration is in milliseconds."""

    type: Literal["audio"] = "audio"
    original_content_url: Optional[str] = None
    duration: Optional[int] = None


class LocationMessage(Message):
    type: Literal["location"] = "location"
    title: str
    address: str
    latitude: float
    longitude: float


class StickerMessage(Message):
    type: Literal["sticker"] = "sticker"
    package_id: str
    sticker_id: str


class ImagemapMessage(Message):
    type: Literal["imagemap"] = "imagemap"
    base_url: str
    alt_text: str
    base_size: Size
    actions: tuple[SerializeAsAny[ImagemapAction], ...]

    @field_validator("actions", mode="before")
    @classmethod
    def decode_actions(cls, value: Any) -> tuple[ImagemapAction, ...]:
        return decode_sequence(value, decode_imagemap_action, name="actions")


class TemplateMessage(Message):
    type: Literal["template"] = "template"
    alt_text: str
    template: SerializeAsAny[TemplateComponent]

    @field_validator("template", mode="before")
    @classmethod
    def decode_template_component(cls, value: Any) -> TemplateComponent:
        return decode_template(value)


MESSAGE_TYPES: dict[str, type[Message]] = {
    MessageType.TEXT: TextMessage,
    MessageType.IMAGE: ImageMessage,
    MessageType.VIDEO: VideoMessage,
    MessageType.AUDIO: AudioMessage,
    MessageType.LOCATION: LocationMessage,
    MessageType.STICKER: StickerMessage,
    MessageType.IMAGEMAP: ImagemapMessage,
    MessageType.TEMPLATE: TemplateMessage,
}


def decode_message(raw: Any) -> Message:
    """Decode a message object from a webhook event or an outbound payload."""
    return decode_variant(raw, MESSAGE_TYPES, Message)
