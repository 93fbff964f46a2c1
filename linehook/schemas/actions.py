"""
Actions attached to imagemap areas and template buttons.

The two families decode independently: imagemap actions carry a tappable
``area``; template actions carry a ``label``.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from linehook.constants.line_types import ActionType
from linehook.schemas.base import LineModel, Rectangle, decode_variant


class ImagemapAction(LineModel):
    """Base imagemap action; unknown action types decode to this shape."""

    type: str
    area: Optional[Rectangle] = None


class ImagemapURIAction(ImagemapAction):
    """Opens link_uri when the area is tapped."""

    type: Literal["uri"] = "uri"
    area: Rectangle
    link_uri: str


class ImagemapMessageAction(ImagemapAction):
    """Sends text as the user when the area is tapped."""

    type: Literal["message"] = "message"
    area: Rectangle
    text: str


class TemplateAction(LineModel):
    """Base template action. Labels are limited to 20 characters by the platform."""

    type: str
    label: Optional[str] = None


class TemplateURIAction(TemplateAction):
    type: Literal["uri"] = "uri"
    label: str
    uri: str


class TemplateMessageAction(TemplateAction):
    type: Literal["message"] = "message"
    label: str
    text: str


class TemplatePostbackAction(TemplateAction):
    """
    Returns ``data`` through a postback webhook event.

    ``text`` is optional: when set it is also sent as a message from the user.
    """

    type: Literal["postback"] = "postback"
    label: str
    data: str
    text: Optional[str] = None


IMAGEMAP_ACTION_TYPES: dict[str, type[ImagemapAction]] = {
    ActionType.URI: ImagemapURIAction,
    ActionType.MESSAGE: ImagemapMessageAction,
}

TEMPLATE_ACTION_TYPES: dict[str, type[TemplateAction]] = {
    ActionType.URI: TemplateURIAction,
    ActionType.MESSAGE: TemplateMessageAction,
    ActionType.POSTBACK: TemplatePostbackAction,
}


def decode_imagemap_action(raw: Any) -> ImagemapAction:
    return decode_variant(raw, IMAGEMAP_ACTION_TYPES, ImagemapAction)


def decode_template_action(raw: Any) -> TemplateAction:
    return decode_variant(raw, TEMPLATE_ACTION_TYPES, TemplateAction)
