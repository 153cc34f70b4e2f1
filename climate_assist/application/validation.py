"""Request-body parsing shared by the advisor and record handlers."""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..domain.errors import InputValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)


def _lookup(obj: Any, path: str) -> Any:
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        current = getattr(current, part, None)
    return current


def is_blank(value: Any) -> bool:
    # null, false, empty string and zero all count as "not provided"
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0
    return False


def list_missing_fields(model: BaseModel, required: Sequence[str]) -> List[str]:
    """Return the dotted field paths in `required` that are blank on `model`."""
    return [path for path in required if is_blank(_lookup(model, path))]


def first_error_location(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "body"
    return ".".join(str(part) for part in errors[0].get("loc", ())) or "body"


def parse_payload(
    model: Type[ModelT],
    payload: Any,
    *,
    required: Sequence[str] = (),
    missing_message: str = "Missing required fields",
) -> ModelT:
    if not isinstance(payload, Mapping):
        raise InputValidationError("Request body must be a JSON object")
    try:
        parsed = model.model_validate(dict(payload))
    except ValidationError as exc:
        field = first_error_location(exc)
        raise InputValidationError(f"Invalid value for {field}", [field]) from exc
    missing = list_missing_fields(parsed, required)
    if missing:
        raise InputValidationError(missing_message, missing)
    return parsed
