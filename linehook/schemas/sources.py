"""Event sources: the user, group or room an event originates from."""

from __future__ import annotations

from typing import Any, Literal

from linehook.constants.line_types import SourceType
from linehook.schemas.base import LineModel, decode_variant


class Source(LineModel):
    """Base shape; also used for source types this library does not know."""

    type: str


class UserSource(Source):
    type: Literal["user"] = "user"
    user_id: str


class GroupSource(Source):
    type: Literal["group"] = "group"
    group_id: str


class RoomSource(Source):
    type: Literal["room"] = "room"
    room_id: str


SOURCE_TYPES: dict[str, type[Source]] = {
    SourceType.USER: UserSource,
    SourceType.GROUP: GroupSource,
    SourceType.ROOM: RoomSource,
}


def decode_source(raw: Any) -> Source:
    """Decode a webhook ``source`` object."""
    return decode_variant(raw, SOURCE_TYPES, Source)
