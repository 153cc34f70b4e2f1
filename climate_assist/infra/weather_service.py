"""OpenWeather proxy: geocoding plus a condensed current-conditions report."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from ..domain.errors import (
    ConfigurationError,
    InputValidationError,
    ResourceNotFoundError,
    UpstreamServiceError,
)
from ..domain.fallbacks import round_half_up
from ..observability.logging_utils import log_event, log_warning
from .config import get_config


HOURLY_POINTS = 8
MAX_DAILY_POINTS = 7
SEARCH_LIMIT = 5


def _as_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _first(items: Any) -> Dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


class WeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openweathermap.org",
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _get(self, path: str, params: Dict[str, Any], *, what: str) -> Any:
        query = {**params, "appid": self._api_key}
        try:
            with httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.get(path, params=query)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            log_warning("weather.upstream_error", path=path, error=str(exc))
            raise UpstreamServiceError(f"Failed to {what}") from exc

    def search(self, query: str) -> List[Dict[str, Any]]:
        data = self._get(
            "/geo/1.0/direct",
            {"q": query, "limit": SEARCH_LIMIT},
            what="search cities",
        )
        return data if isinstance(data, list) else []

    def reverse(self, lat: float, lon: float) -> Dict[str, Any]:
        data = self._get(
            "/geo/1.0/reverse",
            {"lat": lat, "lon": lon, "limit": 1},
            what="reverse geocode",
        )
        place = _first(data)
        if not place:
            raise ResourceNotFoundError("Location not found")
        return {
            "name": place.get("name"),
            "country": place.get("country"),
            "state": place.get("state"),
        }

    def current_report(self, lat: float, lon: float) -> Dict[str, Any]:
        coords = {"lat": lat, "lon": lon}
        current = self._get(
            "/data/2.5/weather",
            {**coords, "units": "metric"},
            what="fetch current weather data",
        )
        air = self._get(
            "/data/2.5/air_pollution", coords, what="fetch air quality data"
        )
        forecast = self._get(
            "/data/2.5/forecast",
            {**coords, "units": "metric"},
            what="fetch forecast data",
        )
        report = build_weather_report(current, air, forecast)
        log_event(
            "weather.report",
            location=report["location"],
            hourly=len(report["hourly_forecast"]),
            daily=len(report["daily_forecast"]),
        )
        return report


def _local_time(timestamp: Any, offset_seconds: int) -> datetime:
    zone = timezone(timedelta(seconds=offset_seconds))
    return datetime.fromtimestamp(int(_as_float(timestamp)), tz=zone)


def temperature_trend(forecast: Dict[str, Any]) -> float:
    entries = forecast.get("list") or []
    if len(entries) < 2:
        return 0
    first = _as_float(entries[0].get("main", {}).get("temp"))
    second = _as_float(entries[1].get("main", {}).get("temp"))
    return round_half_up(second - first, 1)


def _hourly(entries: List[Dict[str, Any]], offset: int) -> List[Dict[str, Any]]:
    hourly = []
    for item in entries[:HOURLY_POINTS]:
        main = item.get("main", {})
        hourly.append(
            {
                "time": _local_time(item.get("dt"), offset).strftime("%I:%M %p"),
                "temperature": int(round_half_up(_as_float(main.get("temp")))),
                "humidity": main.get("humidity"),
                "precipitation": _as_float(item.get("pop")) * 100,
            }
        )
    return hourly


def _daily(entries: List[Dict[str, Any]], offset: int) -> List[Dict[str, Any]]:
    # first forecast slot of each calendar day stands in for that day
    daily: List[Dict[str, Any]] = []
    seen = set()
    for item in entries:
        if len(daily) >= MAX_DAILY_POINTS:
            break
        moment = _local_time(item.get("dt"), offset)
        if moment.date() in seen:
            continue
        seen.add(moment.date())
        main = item.get("main", {})
        weather = _first(item.get("weather"))
        daily.append(
            {
                "date": f"{moment:%a}, {moment:%b} {moment.day}",
                "high": int(round_half_up(_as_float(main.get("temp_max")))),
                "low": int(round_half_up(_as_float(main.get("temp_min")))),
                "condition": weather.get("main"),
                "icon": weather.get("icon"),
                "precipitation": _as_float(item.get("pop")) * 100,
                "windSpeed": _as_float(item.get("wind", {}).get("speed")),
            }
        )
    return daily


def build_weather_report(
    current: Dict[str, Any], air: Dict[str, Any], forecast: Dict[str, Any]
) -> Dict[str, Any]:
    main = current.get("main", {})
    wind = current.get("wind") or {}
    weather = _first(current.get("weather"))
    aqi = _first(air.get("list"))
    components = aqi.get("components", {})
    entries = forecast.get("list") or []
    offset = int(_as_float((forecast.get("city") or {}).get("timezone")))
    visibility = current.get("visibility")
    return {
        "location": f"{current.get('name')}, {(current.get('sys') or {}).get('country')}",
        "date": datetime.now(timezone.utc).isoformat(),
        "temperature": int(round_half_up(_as_float(main.get("temp")))),
        "feels_like": int(round_half_up(_as_float(main.get("feels_like")))),
        "humidity": main.get("humidity"),
        "pressure": main.get("pressure"),
        "wind_speed": _as_float(wind.get("speed")),
        "wind_direction": _as_float(wind.get("deg")),
        "visibility": _as_float(visibility) / 1000 if visibility else None,
        "weather_description": weather.get("description"),
        "weather_icon": weather.get("icon"),
        "air_quality": aqi.get("main", {}).get("aqi"),
        "air_quality_components": {
            key: components.get(key) for key in ("pm2_5", "pm10", "no2", "o3", "co")
        },
        "predictions": {
            "temperature_trend": temperature_trend(forecast),
            "air_quality_trend": 0,
            "precipitation_probability": (current.get("clouds") or {}).get("all", 0),
        },
        "hourly_forecast": _hourly(entries, offset),
        "daily_forecast": _daily(entries, offset),
        "source": "OpenWeather API",
    }


def build_weather_client() -> WeatherClient:
    cfg = get_config()
    if not cfg.openweather_api_key:
        raise ConfigurationError("OpenWeather API key not configured")
    return WeatherClient(cfg.openweather_api_key, cfg.openweather_base_url)


def geocode(action: Optional[str], *, q: Optional[str] = None,
            lat: Optional[float] = None, lon: Optional[float] = None) -> Any:
    reverse = action == "reverse" and lat is not None and lon is not None
    if not reverse and not (action == "search" and q):
        raise InputValidationError("Invalid action or missing parameters")
    client = build_weather_client()
    if reverse:
        return client.reverse(lat, lon)
    return client.search(q)
