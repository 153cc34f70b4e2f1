import importlib.util
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

_MISSING_DEPS = any(
    importlib.util.find_spec(name) is None for name in ("pydantic_settings", "httpx")
)

if not _MISSING_DEPS:
    import httpx

    from climate_assist.domain.errors import ResourceNotFoundError, UpstreamServiceError
    from climate_assist.infra.weather_service import WeatherClient, temperature_trend

# 2024-03-01 00:00 UTC and every three hours after
_START = 1709251200


def _forecast_entry(index: int, temp: float) -> dict:
    return {
        "dt": _START + index * 3 * 3600,
        "main": {"temp": temp, "temp_min": temp - 2, "temp_max": temp + 2, "humidity": 40},
        "weather": [{"main": "Clear", "icon": "01d"}],
        "wind": {"speed": 3.5},
        "pop": 0.2,
    }


FORECAST = {
    "city": {"timezone": 0},
    "list": [_forecast_entry(i, 20 + (i % 4) * 0.5) for i in range(40)],
}
CURRENT = {
    "name": "Broken Hill",
    "sys": {"country": "AU"},
    "main": {"temp": 27.5, "feels_like": 26.4, "humidity": 18, "pressure": 1012},
    "wind": {"speed": 5.1, "deg": 220},
    "visibility": 10000,
    "weather": [{"description": "clear sky", "icon": "01d"}],
    "clouds": {"all": 5},
}
AIR = {
    "list": [
        {
            "main": {"aqi": 2},
            "components": {"pm2_5": 4.1, "pm10": 9.3, "no2": 1.2, "o3": 60.1, "co": 201.9},
        }
    ]
}


def _handler(request):
    path = request.url.path
    if path == "/data/2.5/weather":
        return httpx.Response(200, json=CURRENT)
    if path == "/data/2.5/air_pollution":
        return httpx.Response(200, json=AIR)
    if path == "/data/2.5/forecast":
        return httpx.Response(200, json=FORECAST)
    if path == "/geo/1.0/reverse":
        return httpx.Response(200, json=[])
    if path == "/geo/1.0/direct":
        return httpx.Response(200, json=[{"name": "Mildura", "country": "AU"}])
    return httpx.Response(404)


@unittest.skipUnless(not _MISSING_DEPS, "runtime dependencies are not installed")
class WeatherClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = WeatherClient(
            "test-key", "https://weather.test", transport=httpx.MockTransport(_handler)
        )

    def test_current_report(self) -> None:
        report = self.client.current_report(-31.95, 141.45)
        self.assertEqual(report["location"], "Broken Hill, AU")
        self.assertEqual(report["temperature"], 28)
        self.assertEqual(report["feels_like"], 26)
        self.assertEqual(report["visibility"], 10)
        self.assertEqual(report["air_quality"], 2)
        self.assertEqual(report["air_quality_components"]["pm2_5"], 4.1)
        self.assertEqual(report["predictions"]["temperature_trend"], 0.5)
        self.assertEqual(report["predictions"]["precipitation_probability"], 5)
        self.assertEqual(len(report["hourly_forecast"]), 8)
        self.assertEqual(report["hourly_forecast"][0]["time"], "12:00 AM")
        self.assertEqual(report["hourly_forecast"][0]["precipitation"], 20)
        daily = report["daily_forecast"]
        self.assertEqual(len(daily), 5)
        self.assertEqual(daily[0]["date"], "Fri, Mar 1")
        self.assertEqual(daily[0]["high"], 22)

    def test_reverse_geocode_without_match(self) -> None:
        with self.assertRaises(ResourceNotFoundError):
            self.client.reverse(0.5, 0.5)

    def test_search(self) -> None:
        self.assertEqual(self.client.search("Mildura")[0]["name"], "Mildura")

    def test_upstream_failure_is_502(self) -> None:
        failing = WeatherClient(
            "test-key",
            "https://weather.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )
        with self.assertRaises(UpstreamServiceError) as ctx:
            failing.current_report(1.0, 2.0)
        self.assertEqual(ctx.exception.status_code, 502)

    def test_trend_needs_two_entries(self) -> None:
        self.assertEqual(temperature_trend({"list": []}), 0)


if __name__ == "__main__":
    unittest.main()
