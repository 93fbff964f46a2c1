"""
Shared scaffolding for the LINE payload models.

Every family (source, message, action, template, event) is a base model with a
``type`` tag plus a closed table of variants keyed by that tag. Decoding looks
the tag up in the table; unknown tags fall back to the base model so new
platform types do not break ingestion.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from linehook.errors import DecodeError

M = TypeVar("M", bound="LineModel")
T = TypeVar("T")


class LineModel(BaseModel):
    """Immutable model with snake_case attributes and camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """Wire representation: camelCase keys, unset optionals dropped."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Size(LineModel):
    width: int
    height: int


class Rectangle(LineModel):
    """Tappable area of an imagemap, in pixels of the base size."""

    x: int
    y: int
    width: int
    height: int


def resolve_variant(
    raw: Any, variants: Mapping[str, type[M]], base: type[M]
) -> type[M]:
    """Pick the variant class for raw's ``type`` tag, or the base class."""
    if not isinstance(raw, Mapping):
        raise DecodeError(
            f"{base.__name__} must be an object, got {type(raw).__name__}"
        )
    tag = raw.get("type")
    if isinstance(tag, str):
        return variants.get(tag, base)
    return base


def validate_variant(model: type[M], data: Mapping[str, Any]) -> M:
    """Validate data into model, reporting failures as DecodeError."""
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        raise DecodeError(f"Invalid {model.__name__}: {_summarize(e)}") from e


def decode_variant(
    raw: Any,
    variants: Mapping[str, type[M]],
    base: type[M],
) -> M:
    """Decode raw into the variant selected by its tag. Instances pass through."""
    if isinstance(raw, base):
        return raw
    model = resolve_variant(raw, variants, base)
    return validate_variant(model, raw)


def decode_sequence(
    raw: Any, decoder: Callable[[Any], T], name: str = "items"
) -> tuple[T, ...]:
    """Map decoder over a JSON array. An empty array yields an empty tuple."""
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise DecodeError(f"{name} must be an array, got {type(raw).__name__}")
    return tuple(decoder(item) for item in raw)


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def decode_model(raw: Any, model: type[M]) -> M:
    """Decode raw into a model that has no variants."""
    return decode_variant(raw, {}, model)
