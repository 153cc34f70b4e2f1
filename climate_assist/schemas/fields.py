"""Loose input coercion and strict output number handling shared by the schemas."""

from __future__ import annotations

import math
from typing import Annotated, Any, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    StrictFloat,
    StrictInt,
)
from pydantic.alias_generators import to_camel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _coerce_text(value: Any) -> Any:
    value = _blank_to_none(value)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_number(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        number = float(value.strip().replace(",", ""))
    else:
        return value
    if math.isnan(number) or math.isinf(number):
        raise ValueError("number must be finite")
    return number


def _optional_number(value: Any) -> Any:
    value = _blank_to_none(value)
    if value is None:
        return None
    return _coerce_number(value)


def _finite(value: Any) -> Any:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("number must be finite")
    return value


def _compact_number(value: float) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _compact_optional(value: Optional[float]) -> Any:
    if value is None:
        return None
    return _compact_number(value)


# Request-side field types: blank strings count as absent, numbers may arrive as text.
Text = Annotated[Optional[str], BeforeValidator(_coerce_text)]
OptionalNumber = Annotated[
    Optional[float],
    BeforeValidator(_optional_number),
    PlainSerializer(_compact_optional),
]

# Result-side number: a JSON int or float only; strings and bools are rejected.
Number = Annotated[
    Union[StrictInt, StrictFloat],
    AfterValidator(_finite),
    PlainSerializer(_compact_number),
]
Identifier = Annotated[str, BeforeValidator(_coerce_text)]


class CamelModel(BaseModel):
    """Wire names are camelCase; Python attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SnakeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
