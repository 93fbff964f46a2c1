"""Tests for source decoding."""

import pytest

from linehook.errors import DecodeError, MalformedPayloadError
from linehook.schemas.sources import (
    GroupSource,
    RoomSource,
    Source,
    UserSource,
    decode_source,
)


@pytest.mark.parametrize(
    ("raw", "model", "attr", "value"),
    [
        ({"type": "user", "userId": "U1"}, UserSource, "user_id", "U1"),
        ({"type": "group", "groupId": "G1"}, GroupSource, "group_id", "G1"),
        ({"type": "room", "roomId": "R1"}, RoomSource, "room_id", "R1"),
    ],
)
def test_decode_known_sources(raw, model, attr, value):
    source = decode_source(raw)
    assert type(source) is model
    assert getattr(source, attr) == value
    assert source.type == raw["type"]


def test_unknown_source_falls_back_to_base():
    source = decode_source({"type": "channel", "channelId": "C1"})
    assert type(source) is Source
    assert source.type == "channel"
    assert not hasattr(source, "channel_id")


def test_extra_fields_are_ignored():
    source = decode_source({"type": "user", "userId": "U1", "groupId": "G1"})
    assert source.to_payload() == {"type": "user", "userId": "U1"}


def test_missing_id_raises_decode_error():
    with pytest.raises(DecodeError, match="UserSource"):
        decode_source({"type": "user"})


def test_missing_type_raises_decode_error():
    with pytest.raises(MalformedPayloadError):
        decode_source({"userId": "U1"})


def test_non_mapping_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_source(["user", "U1"])


def test_instances_pass_through():
    source = UserSource(user_id="U1")
    assert decode_source(source) is source


def test_sources_are_frozen():
    source = UserSource(user_id="U1")
    with pytest.raises(ValueError):
        source.user_id = "U2"
