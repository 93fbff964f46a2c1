"""Tests for template component decoding."""

import pytest

from linehook.errors import DecodeError
from linehook.schemas.actions import TemplatePostbackAction, TemplateURIAction
from linehook.schemas.templates import (
    ButtonsTemplate,
    CarouselTemplate,
    ConfirmTemplate,
    TemplateColumn,
    TemplateComponent,
    decode_template,
    decode_template_column,
)

POSTBACK = {"type": "postback", "label": "Buy", "data": "action=buy&itemid=123"}
URI = {"type": "uri", "label": "View detail", "uri": "http://example.com/page/123"}


def test_buttons_template():
    template = decode_template(
        {
            "type": "buttons",
            "thumbnailImageUrl": "https://example.com/bot/images/image.jpg",
            "title": "Menu",
            "text": "Please select",
            "actions": [POSTBACK, URI],
        }
    )
    assert isinstance(template, ButtonsTemplate)
    assert template.title == "Menu"
    assert template.thumbnail_image_url == "https://example.com/bot/images/image.jpg"
    assert [type(a) for a in template.actions] == [
        TemplatePostbackAction,
        TemplateURIAction,
    ]


def test_confirm_template():
    template = decode_template(
        {
            "type": "confirm",
            "text": "Are you sure?",
            "actions": [
                {"type": "message", "label": "Yes", "text": "yes"},
                {"type": "message", "label": "No", "text": "no"},
            ],
        }
    )
    assert isinstance(template, ConfirmTemplate)
    assert [a.text for a in template.actions] == ["yes", "no"]


def test_carousel_template_decodes_columns_and_actions():
    template = decode_template(
        {
            "type": "carousel",
            "columns": [
                {"title": "first", "text": "one", "actions": [POSTBACK]},
                {"text": "two", "actions": [URI, POSTBACK]},
            ],
        }
    )
    assert isinstance(template, CarouselTemplate)
    assert len(template.columns) == 2
    first, second = template.columns
    assert isinstance(first, TemplateColumn)
    assert first.title == "first"
    assert second.title is None
    assert isinstance(second.actions[0], TemplateURIAction)


def test_empty_children_decode_to_empty_tuples():
    carousel = decode_template({"type": "carousel", "columns": []})
    assert carousel.columns == ()
    column = decode_template_column({"text": "empty", "actions": []})
    assert column.actions == ()


def test_actions_must_be_an_array():
    with pytest.raises(DecodeError, match="actions must be an array"):
        decode_template({"type": "confirm", "text": "?", "actions": "yes"})


def test_unknown_template_falls_back_to_base():
    template = decode_template({"type": "image_carousel", "columns": []})
    assert type(template) is TemplateComponent
    assert template.to_payload() == {"type": "image_carousel"}


def test_invalid_nested_action_fails_whole_template():
    with pytest.raises(DecodeError):
        decode_template(
            {
                "type": "buttons",
                "text": "Please select",
                "actions": [{"type": "uri", "label": "No uri"}],
            }
        )


def test_built_template_serializes_subclass_fields():
    template = ButtonsTemplate(
        text="Please select",
        actions=[TemplatePostbackAction(label="Buy", data="buy")],
    )
    assert template.to_payload() == {
        "type": "buttons",
        "text": "Please select",
        "actions": [{"type": "postback", "label": "Buy", "data": "buy"}],
    }
