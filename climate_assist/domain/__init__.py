from __future__ import annotations

from typing import Any


_FALLBACK_EXPORTS = {
    "chat_fallback",
    "drought_crops_fallback",
    "equipment_fallback",
    "habitat_fallback",
    "image_analysis_fallback",
    "impact_fallback",
    "native_species_fallback",
    "round_half_up",
    "solar_fallback",
    "water_fallback",
}

__all__ = sorted(_FALLBACK_EXPORTS)


def __getattr__(name: str) -> Any:
    if name in _FALLBACK_EXPORTS:
        from . import fallbacks as _fallbacks

        return getattr(_fallbacks, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
