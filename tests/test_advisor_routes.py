import importlib.util
import json
import os
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

_MISSING_DEPS = any(
    importlib.util.find_spec(name) is None
    for name in ("pydantic_settings", "fastapi", "httpx", "langchain_openai", "supabase")
)

if not _MISSING_DEPS:
    from fastapi.testclient import TestClient

    from climate_assist.api.server import create_app
    from climate_assist.infra.config import get_config
    from climate_assist.infra.llm import (
        GenerativeModelClient,
        OfflineModelClient,
        get_model_client,
    )


    class RecordingClient(GenerativeModelClient):
        name = "recording"

        def __init__(self, reply: str) -> None:
            self.reply = reply
            self.prompts = []

        def generate(self, prompt, image=None):
            self.prompts.append(prompt)
            return self.reply


_ENV_KEYS = ("LLM_PROVIDER", "PERSISTENCE_BACKEND", "OPENWEATHER_API_KEY")


@unittest.skipUnless(not _MISSING_DEPS, "runtime dependencies are not installed")
class AdvisorRouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self._env_backup = {key: os.environ.get(key) for key in _ENV_KEYS}
        os.environ["LLM_PROVIDER"] = "offline"
        os.environ["PERSISTENCE_BACKEND"] = "memory"
        get_config.cache_clear()
        get_model_client.cache_clear()
        self.app = create_app()
        self.model = OfflineModelClient()
        self.app.dependency_overrides[get_model_client] = lambda: self.model
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()
        for key, value in self._env_backup.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_config.cache_clear()
        get_model_client.cache_clear()

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_trace_id_is_echoed(self) -> None:
        response = self.client.get("/health", headers={"X-Request-ID": "req-42"})
        self.assertEqual(response.headers["X-Request-ID"], "req-42")
        generated = self.client.get("/health").headers["X-Request-ID"]
        self.assertTrue(generated)

    def test_missing_fields_return_400(self) -> None:
        self.model = RecordingClient("{}")
        cases = {
            "/api/drought-crops": ({"region": "Wimmera"}, "Region and soil type are required"),
            "/api/chat": ({"message": ""}, "Message is required"),
            "/api/analyze-image": ({}, "Image data is required"),
            "/api/farm-equipment": (
                {"equipmentType": "Tractor", "fuelType": "Diesel"},
                "Equipment details are required",
            ),
            "/api/solar-optimizer": (
                {"propertySize": 500},
                "Property size and energy usage are required",
            ),
            "/api/habitat-protection": (
                {"assessment": {"habitatType": "Grassland"}},
                "Property assessment data is required",
            ),
            "/api/native-species": ({"habitat": "Mallee"}, "Region is required"),
        }
        for path, (payload, message) in cases.items():
            with self.subTest(path=path):
                response = self.client.post(path, json=payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {"error": message})
        self.assertEqual(self.model.prompts, [])

    def test_non_object_body_is_400(self) -> None:
        response = self.client.post("/api/chat", json=["hello"])
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_impact_requires_authorization_header(self) -> None:
        response = self.client.post(
            "/api/calculate-impact", json={"goal_title": "Reusable water bottle"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "No authorization header"})

    def test_impact_checks_header_before_body(self) -> None:
        response = self.client.post(
            "/api/calculate-impact",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "No authorization header"})

    def test_impact_fallback_numbers(self) -> None:
        response = self.client.post(
            "/api/calculate-impact",
            json={"goal_title": "Reusable water bottle", "duration_days": 7},
            headers={"Authorization": "Bearer anything"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["co2_saved"], 0.7)
        self.assertEqual(body["water_saved"], 14)
        self.assertEqual(body["energy_saved"], 3.5)
        self.assertEqual(body["waste_reduced"], 0.35)

    def test_water_conservation_needs_no_inputs(self) -> None:
        response = self.client.post("/api/water-conservation", json={})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["current_usage_analysis"]["usage_category"], "average")
        self.assertEqual(body["total_potential_savings"]["annual_liters"], 85000)

    def test_model_reply_served_when_valid(self) -> None:
        reply = {
            "co2_saved": 12.5,
            "water_saved": 40,
            "energy_saved": 9,
            "waste_reduced": 1.2,
            "impact_description": "Fewer trips to town",
        }
        self.model = RecordingClient("Sure!\n" + json.dumps(reply))
        response = self.client.post(
            "/api/calculate-impact",
            json={"goal_title": "Car pool", "goal_description": "Share rides", "duration_days": 14},
            headers={"Authorization": "Bearer anything"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["co2_saved"], 12.5)
        self.assertIn("Duration: 14 days", self.model.prompts[0])

    def test_invalid_model_reply_replaced_by_fallback(self) -> None:
        reply = {
            "co2_saved": True,
            "water_saved": 40,
            "energy_saved": 9,
            "waste_reduced": 1.2,
            "impact_description": "bad types",
        }
        self.model = RecordingClient(json.dumps(reply))
        response = self.client.post(
            "/api/calculate-impact",
            json={"goal_title": "Walk to school", "duration_days": 2},
            headers={"Authorization": "Bearer anything"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["co2_saved"], 5)

    def test_solar_fallback_uses_inputs(self) -> None:
        response = self.client.post(
            "/api/solar-optimizer",
            json={"propertySize": "1,200", "energyUsage": "1200", "location": "Remote"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["systemRecommendation"]["panelCapacity"], 12)
        self.assertIn("roi25Years", body["financialAnalysis"])


if __name__ == "__main__":
    unittest.main()
