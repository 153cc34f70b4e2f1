from __future__ import annotations

from typing import Any, Optional


JSON_ONLY_INSTRUCTION = "Return ONLY valid JSON in this exact format:"


def describe(value: Any, default: str = "Not specified") -> str:
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or default


def yes_no(flag: Optional[bool]) -> str:
    return "Yes" if flag else "No"
