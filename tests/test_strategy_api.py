from __future__ import annotations

import asyncio
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

from rooms_strategy.main import app
from rooms_strategy.services.log_service import log_http_request, log_operation


def _on_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class TestStrategyApi(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        patcher = patch("rooms_strategy.core.settings.STRATEGY_LOG_PATH", Path(self._tmp.name) / "operations.jsonl")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(app)

    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(200, resp.status_code)
        self.assertEqual("ok", resp.json()["status"])
        self.assertGreaterEqual(resp.json()["strategy_count"], 1)

    def test_list_strategies(self) -> None:
        resp = self.client.get("/v1/strategies")
        self.assertIn("rooms-sections", resp.json()["strategies"])

    def test_generate(self) -> None:
        resp = self.client.post(
            "/v1/strategies/rooms-sections/generate",
            json={
                "config": {"favorite_entities": ["light.x"]},
                "hass": {
                    "areas": {"den": {"area_id": "den", "name": "Den"}},
                    "entities": {"light.x": {"entity_id": "light.x", "area_id": "den"}},
                    "states": {"light.x": {"state": "on"}},
                    "panelUrl": "rooms",
                },
                "trace_id": "req-1",
            },
        )
        self.assertEqual(200, resp.status_code)
        views = resp.json()["views"]
        self.assertEqual(["home", "den", "media-players"], [view["path"] for view in views])
        favorites = views[0]["sections"][0]
        self.assertEqual(["light.x"], favorites["cards"][1]["entities"])
        self.assertEqual("/rooms/den", views[0]["sections"][2]["cards"][1]["navigation_path"])

    def test_generate_by_element_tag(self) -> None:
        resp = self.client.post("/v1/strategies/ll-strategy-dashboard-rooms-sections/generate", json={})
        self.assertEqual(200, resp.status_code)
        self.assertEqual(2, len(resp.json()["views"]))

    def test_bad_input_shape_is_422(self) -> None:
        resp = self.client.post("/v1/strategies/rooms-sections/generate", json={"hass": {"devices": [1, 2]}})
        self.assertEqual(422, resp.status_code)
        detail = resp.json()["detail"]
        self.assertEqual("invalid_input_shape", detail["error_code"])
        self.assertEqual("hass.devices", detail["field"])

    def test_unknown_strategy_is_404(self) -> None:
        resp = self.client.post("/v1/strategies/masonry/generate", json={})
        self.assertEqual(404, resp.status_code)
        self.assertEqual("strategy_not_found", resp.json()["detail"]["error_code"])

    def test_requests_are_logged(self) -> None:
        self.client.post("/v1/strategies/rooms-sections/generate", json={"trace_id": "req-2"})
        resp = self.client.get("/v1/logs/recent")
        logs = resp.json()["logs"]
        self.assertEqual(["http_request", "strategy"], [x["event_type"] for x in logs])
        self.assertEqual("req-2", logs[1]["trace_id"])

    def test_log_writes_run_off_the_event_loop(self) -> None:
        seen: list[tuple[str, bool]] = []

        def recording(name, func):
            def wrapper(*args, **kwargs):
                seen.append((name, _on_event_loop()))
                return func(*args, **kwargs)

            return wrapper

        with patch("rooms_strategy.main.log_http_request", recording("http", log_http_request)), patch(
            "rooms_strategy.services.strategy_service.log_operation", recording("strategy", log_operation)
        ):
            resp = self.client.post("/v1/strategies/rooms-sections/generate", json={"trace_id": "req-3"})

        self.assertEqual(200, resp.status_code)
        self.assertEqual([("strategy", False), ("http", False)], seen)


if __name__ == "__main__":
    unittest.main()
