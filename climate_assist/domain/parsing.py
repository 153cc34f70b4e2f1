from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional


_FENCED_BLOCK_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_UNQUOTED_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")


def _candidate_span(text: str) -> Optional[str]:
    fenced = _FENCED_BLOCK_RE.search(text)
    if fenced:
        inner = fenced.group(1).strip()
        if inner:
            return inner
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def repair_json_text(candidate: str) -> str:
    """Drop trailing commas and quote bare object keys."""
    repaired = _TRAILING_COMMA_RE.sub(r"\1", candidate)
    return _UNQUOTED_KEY_RE.sub(r'\1"\2":', repaired)


def _loads_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Locate and parse the JSON object embedded in free-form model output.

    A fenced code block wins over the first-brace/last-brace span. Returns
    None when nothing object-shaped can be decoded.
    """
    if not text or not isinstance(text, str):
        return None
    candidate = _candidate_span(text)
    if candidate is None:
        return None
    if not candidate.lstrip().startswith("{"):
        brace = candidate.find("{")
        if brace == -1:
            return None
        candidate = candidate[brace : candidate.rfind("}") + 1]
    parsed = _loads_object(candidate)
    if parsed is not None:
        return parsed
    return _loads_object(repair_json_text(candidate))


def extract_text_reply(text: Optional[str]) -> Optional[Dict[str, Any]]:
    if not text or not isinstance(text, str):
        return None
    stripped = text.strip()
    if not stripped:
        return None
    return {"response": stripped}
