import importlib.util
import os
import sys
import threading
import unittest
from pathlib import Path
from unittest.mock import patch

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
    from climate_assist.infra.gateway import InMemoryGateway

ALICE = {"Authorization": "Bearer alice-token"}
BOB = {"Authorization": "Bearer bob-token"}


@unittest.skipUnless(not _MISSING_DEPS, "runtime dependencies are not installed")
class RecordRouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self._env_backup = {
            key: os.environ.get(key)
            for key in ("PERSISTENCE_BACKEND", "LLM_PROVIDER", "OPENWEATHER_API_KEY")
        }
        os.environ["PERSISTENCE_BACKEND"] = "memory"
        os.environ["LLM_PROVIDER"] = "offline"
        get_config.cache_clear()
        self.gateway = InMemoryGateway({"alice-token": "alice", "bob-token": "bob"})
        self._gateway_patch = patch(
            "climate_assist.api.auth.get_gateway", return_value=self.gateway
        )
        self.get_gateway = self._gateway_patch.start()
        self.client = TestClient(create_app())

    def tearDown(self) -> None:
        self._gateway_patch.stop()
        for key, value in self._env_backup.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_config.cache_clear()

    def test_missing_token_rejected_before_gateway(self) -> None:
        requests = [
            ("get", "/api/goals"),
            ("post", "/api/goals"),
            ("patch", "/api/goals"),
            ("delete", "/api/goals"),
            ("get", "/api/user-goals"),
            ("get", "/api/scan-history"),
            ("get", "/api/messages"),
            ("get", "/api/chat-topics"),
            ("get", "/api/user-profile"),
        ]
        for method, path in requests:
            with self.subTest(method=method, path=path):
                kwargs = {"json": {}} if method in ("post", "patch") else {}
                response = getattr(self.client, method)(path, **kwargs)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"error": "No authorization header"})
        self.get_gateway.assert_not_called()

    def test_malformed_body_without_token_is_401(self) -> None:
        for method, path in (
            ("post", "/api/goals"),
            ("patch", "/api/user-goals"),
            ("post", "/api/messages"),
        ):
            with self.subTest(method=method, path=path):
                response = getattr(self.client, method)(
                    path,
                    content=b"{not json",
                    headers={"Content-Type": "application/json"},
                )
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"error": "No authorization header"})
        self.get_gateway.assert_not_called()

    def test_malformed_body_with_token_is_400(self) -> None:
        response = self.client.post(
            "/api/goals",
            content=b"{not json",
            headers={**ALICE, "Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid request body"})

    def test_registered_token_authenticates(self) -> None:
        self.gateway.register_token("carol-token", "carol")
        headers = {"Authorization": "Bearer carol-token"}
        self.client.post("/api/goals", json={"title": "Compost", "days": 3}, headers=headers)
        goals = self.client.get("/api/goals", headers=headers).json()["goals"]
        self.assertEqual([goal["user_id"] for goal in goals], ["carol"])

    def test_unknown_token_is_401(self) -> None:
        response = self.client.get(
            "/api/goals", headers={"Authorization": "Bearer stolen"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Unauthorized"})

    def test_goal_lifecycle(self) -> None:
        created = self.client.post(
            "/api/goals",
            json={"title": "Reusable bottle", "days": 2, "environmental_impact": {"co2_saved": 0.2}},
            headers=ALICE,
        )
        self.assertEqual(created.status_code, 200)
        goal = created.json()["goal"]
        self.assertEqual(goal["current_day"], 0)
        self.assertEqual(goal["status"], "active")
        self.assertEqual(goal["description"], "")

        for _ in range(3):
            response = self.client.patch(
                "/api/goals", json={"goal_id": goal["id"], "action": "progress"}, headers=ALICE
            )
            self.assertEqual(response.json(), {"success": True})
        goals = self.client.get("/api/goals", headers=ALICE).json()["goals"]
        self.assertEqual(goals[0]["current_day"], 2)

        self.client.patch(
            "/api/goals", json={"goal_id": goal["id"], "action": "complete"}, headers=ALICE
        )
        goals = self.client.get("/api/goals", headers=ALICE).json()["goals"]
        self.assertEqual(goals[0]["status"], "completed")
        self.assertTrue(goals[0]["completed_at"])

    def test_goal_invalid_action_is_400(self) -> None:
        response = self.client.patch(
            "/api/goals", json={"goal_id": "x", "action": "pause"}, headers=ALICE
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid action"})

    def test_other_users_goal_is_not_found(self) -> None:
        goal = self.client.post(
            "/api/goals", json={"title": "Bike to work", "days": 5}, headers=ALICE
        ).json()["goal"]
        for action in ("progress", "complete"):
            response = self.client.patch(
                "/api/goals", json={"goal_id": goal["id"], "action": action}, headers=BOB
            )
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json(), {"error": "Goal not found"})
        self.assertEqual(self.client.get("/api/goals", headers=BOB).json(), {"goals": []})

    def test_delete_only_removes_own_goals(self) -> None:
        self.client.post("/api/goals", json={"title": "A", "days": 3}, headers=ALICE)
        self.client.post("/api/goals", json={"title": "B", "days": 3}, headers=BOB)
        response = self.client.delete("/api/goals", headers=ALICE)
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(self.client.get("/api/goals", headers=ALICE).json()["goals"], [])
        self.assertEqual(len(self.client.get("/api/goals", headers=BOB).json()["goals"]), 1)

    def test_user_goals(self) -> None:
        missing = self.client.post(
            "/api/user-goals", json={"title": "Save water", "category": "water"}, headers=ALICE
        )
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.json(), {"error": "Missing required fields"})

        created = self.client.post(
            "/api/user-goals",
            json={"title": "Save water", "category": "water", "target_value": 100},
            headers=ALICE,
        ).json()
        goal_id = created["data"]["id"]
        self.assertEqual(created["data"]["current_value"], 0)

        no_id = self.client.patch("/api/user-goals", json={"status": "done"}, headers=ALICE)
        self.assertEqual(no_id.json(), {"error": "Goal ID required"})

        foreign = self.client.patch(
            "/api/user-goals", json={"goal_id": goal_id, "current_value": 5}, headers=BOB
        )
        self.assertEqual(foreign.status_code, 404)

        updated = self.client.patch(
            "/api/user-goals", json={"goal_id": goal_id, "current_value": 40}, headers=ALICE
        ).json()
        self.assertEqual(updated["data"]["current_value"], 40)
        self.assertEqual(updated["data"]["status"], "active")

    def test_scan_history(self) -> None:
        for name, category in (("Bottle", "plastic"), ("Can", "metal"), ("Bag", "plastic")):
            response = self.client.post(
                "/api/scan-history",
                json={"object_name": name, "category": category},
                headers=ALICE,
            )
            self.assertEqual(response.json()["data"]["carbon_footprint"], 0)
        self.client.post(
            "/api/scan-history",
            json={"object_name": "Jar", "category": "glass", "carbon_footprint": 3.1},
            headers=BOB,
        )
        body = self.client.get("/api/scan-history?limit=2", headers=ALICE).json()
        self.assertEqual([scan["object_name"] for scan in body["scans"]], ["Bag", "Can"])
        self.assertEqual(body["categoryCounts"], {"plastic": 2, "metal": 1})
        self.assertEqual(body["totalScans"], 3)

        missing = self.client.post(
            "/api/scan-history", json={"object_name": "Thing"}, headers=ALICE
        )
        self.assertEqual(missing.status_code, 400)

    def test_messages_are_owner_scoped(self) -> None:
        self.gateway.seed(
            "chat_conversations",
            [{"id": "conv-1", "user_id": "alice", "updated_at": "2024-01-01T00:00:00+00:00"}],
        )
        self.assertEqual(
            self.client.get("/api/messages", headers=ALICE).json(),
            {"error": "Conversation ID required"},
        )
        foreign = self.client.get("/api/messages?conversation_id=conv-1", headers=BOB)
        self.assertEqual(foreign.status_code, 404)
        self.assertEqual(foreign.json(), {"error": "Conversation not found"})
        denied = self.client.post(
            "/api/messages",
            json={"conversation_id": "conv-1", "role": "user", "content": "hi"},
            headers=BOB,
        )
        self.assertEqual(denied.status_code, 404)

        for role, content in (("user", "How do I save water?"), ("assistant", "Mulch.")):
            saved = self.client.post(
                "/api/messages",
                json={"conversation_id": "conv-1", "role": role, "content": content},
                headers=ALICE,
            )
            self.assertEqual(saved.status_code, 200)
            self.assertEqual(saved.json()["message"]["content"], content)

        messages = self.client.get(
            "/api/messages?conversation_id=conv-1", headers=ALICE
        ).json()["messages"]
        self.assertEqual([m["role"] for m in messages], ["user", "assistant"])

        session = self.gateway.authenticate("alice-token")
        conversation = session.select_one("chat_conversations", {"id": "conv-1"})
        self.assertNotEqual(conversation["updated_at"], "2024-01-01T00:00:00+00:00")

    def test_chat_topics(self) -> None:
        for topic in ("solar", "water", "solar"):
            response = self.client.post(
                "/api/chat-topics", json={"topic": topic}, headers=ALICE
            )
            self.assertEqual(response.json(), {"success": True})
        self.client.post("/api/chat-topics", json={"topic": "bees"}, headers=BOB)
        self.assertEqual(
            self.client.post("/api/chat-topics", json={}, headers=ALICE).json(),
            {"error": "Topic required"},
        )
        topics = self.client.get("/api/chat-topics", headers=ALICE).json()["topics"]
        self.assertEqual(
            [(t["topic"], t["mentioned_count"]) for t in topics],
            [("solar", 2), ("water", 1)],
        )

    def test_concurrent_first_mentions_share_one_row(self) -> None:
        session = self.gateway.authenticate("alice-token")
        barrier = threading.Barrier(8)

        def mention() -> None:
            barrier.wait()
            session.rpc("upsert_chat_topic", {"user_uuid": "alice", "topic_name": "compost"})

        workers = [threading.Thread(target=mention) for _ in range(8)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()
        rows = session.select("chat_topics", {"user_id": "alice", "topic": "compost"})
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["mentioned_count"], 8)

    def test_profile(self) -> None:
        self.gateway.seed("user_profiles", [{"id": "alice", "display_name": "Alice"}])
        response = self.client.get("/api/user-profile", headers=ALICE)
        self.assertEqual(response.json(), {"profile": {"id": "alice", "display_name": "Alice"}})
        self.assertEqual(self.client.get("/api/user-profile", headers=BOB).status_code, 404)

    def test_weather_without_api_key_is_500(self) -> None:
        os.environ["OPENWEATHER_API_KEY"] = ""
        get_config.cache_clear()
        response = self.client.post("/api/weather", json={"latitude": -33.9, "longitude": 151.2})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "OpenWeather API key not configured"})

    def test_bad_geocode_request_is_400_without_api_key(self) -> None:
        os.environ["OPENWEATHER_API_KEY"] = ""
        get_config.cache_clear()
        for query in ("action=bogus", "action=search", "action=reverse&lat=1.5"):
            with self.subTest(query=query):
                response = self.client.get(f"/api/weather?{query}")
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.json(), {"error": "Invalid action or missing parameters"}
                )
        response = self.client.get("/api/weather?action=search&q=Dubbo")
        self.assertEqual(response.status_code, 500)


if __name__ == "__main__":
    unittest.main()
