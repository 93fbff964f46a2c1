"""
Template message components: buttons, confirm and carousel.

Platform limits (not enforced here): 4 actions per buttons template, 2 per
confirm template, 3 per carousel column, 5 columns per carousel.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import SerializeAsAny, field_validator

from linehook.constants.line_types import TemplateType
from linehook.schemas.actions import TemplateAction, decode_template_action
from linehook.schemas.base import (
    LineModel,
    decode_model,
    decode_sequence,
    decode_variant,
)

ActionList = tuple[SerializeAsAny[TemplateAction], ...]


def decode_template_actions(value: Any) -> tuple[TemplateAction, ...]:
    return decode_sequence(value, decode_template_action, name="actions")


class TemplateComponent(LineModel):
    """Base template; unknown template types decode to this shape."""

    type: str


class ButtonsTemplate(TemplateComponent):
    type: Literal["buttons"] = "buttons"
    thumbnail_image_url: Optional[str] = None
    title: Optional[str] = None
    text: str
    actions: ActionList

    @field_validator("actions", mode="before")
    @classmethod
    def decode_actions(cls, value: Any) -> tuple[TemplateAction, ...]:
        return decode_template_actions(value)


class ConfirmTemplate(TemplateComponent):
    type: Literal["confirm"] = "confirm"
    text: str
    actions: ActionList

    @field_validator("actions", mode="before")
    @classmethod
    def decode_actions(cls, value: Any) -> tuple[TemplateAction, ...]:
        return decode_template_actions(value)


class TemplateColumn(LineModel):
    """One carousel column."""

    thumbnail_image_url: Optional[str] = None
    title: Optional[str] = None
    text: str
    actions: ActionList

    @field_validator("actions", mode="before")
    @classmethod
    def decode_actions(cls, value: Any) -> tuple[TemplateAction, ...]:
        return decode_template_actions(value)


def decode_template_column(raw: Any) -> TemplateColumn:
    return decode_model(raw, TemplateColumn)


class CarouselTemplate(TemplateComponent):
    type: Literal["carousel"] = "carousel"
    columns: tuple[TemplateColumn, ...]

    @field_validator("columns", mode="before")
    @classmethod
    def decode_columns(cls, value: Any) -> tuple[TemplateColumn, ...]:
        return decode_sequence(value, decode_template_column, name="columns")


TEMPLATE_TYPES: dict[str, type[TemplateComponent]] = {
    TemplateType.BUTTONS: ButtonsTemplate,
    TemplateType.CONFIRM: ConfirmTemplate,
    TemplateType.CAROUSEL: CarouselTemplate,
}


def decode_template(raw: Any) -> TemplateComponent:
    """Decode the ``template`` object of a template message."""
    return decode_variant(raw, TEMPLATE_TYPES, TemplateComponent)
