"""Typed LINE payload models and their decoders."""

from linehook.schemas.actions import (
    ImagemapAction,
    ImagemapMessageAction,
    ImagemapURIAction,
    TemplateAction,
    TemplateMessageAction,
    TemplatePostbackAction,
    TemplateURIAction,
    decode_imagemap_action,
    decode_template_action,
)
from linehook.schemas.base import LineModel, Rectangle, Size
from linehook.schemas.events import (
    Beacon,
    BeaconEvent,
    Event,
    FollowEvent,
    JoinEvent,
    LeaveEvent,
    MessageEvent,
    Postback,
    PostbackEvent,
    ReplyableEvent,
    ReplyCapability,
    UnfollowEvent,
    decode_event,
)
from linehook.schemas.messages import (
    AudioMessage,
    ImagemapMessage,
    ImageMessage,
    LocationMessage,
    Message,
    StickerMessage,
    TemplateMessage,
    TextMessage,
    VideoMessage,
    decode_message,
)
from linehook.schemas.profile import Profile
from linehook.schemas.sources import (
    GroupSource,
    RoomSource,
    Source,
    UserSource,
    decode_source,
)
from linehook.schemas.templates import (
    ButtonsTemplate,
    CarouselTemplate,
    ConfirmTemplate,
    TemplateColumn,
    TemplateComponent,
    decode_template,
    decode_template_column,
)

__all__ = [
    "AudioMessage",
    "Beacon",
    "BeaconEvent",
    "ButtonsTemplate",
    "CarouselTemplate",
    "ConfirmTemplate",
    "Event",
    "FollowEvent",
    "GroupSource",
    "ImagemapAction",
    "ImagemapMessage",
    "ImagemapMessageAction",
    "ImagemapURIAction",
    "ImageMessage",
    "JoinEvent",
    "LeaveEvent",
    "LineModel",
    "LocationMessage",
    "Message",
    "MessageEvent",
    "Postback",
    "PostbackEvent",
    "Profile",
    "Rectangle",
    "ReplyableEvent",
    "ReplyCapability",
    "RoomSource",
    "Size",
    "Source",
    "StickerMessage",
    "TemplateAction",
    "TemplateColumn",
    "TemplateComponent",
    "TemplateMessage",
    "TemplateMessageAction",
    "TemplatePostbackAction",
    "TemplateURIAction",
    "TextMessage",
    "UnfollowEvent",
    "UserSource",
    "VideoMessage",
    "decode_event",
    "decode_imagemap_action",
    "decode_message",
    "decode_source",
    "decode_template",
    "decode_template_action",
    "decode_template_column",
]
