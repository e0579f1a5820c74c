# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for create_app() and create_app_from_config()."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from contactapi.core.config import Config
from contactapi.web.adapters.starlette.app import create_app, create_app_from_config
from contactapi.web.cors import CorsPolicy

DEV_ORIGIN = "http://localhost:5173"


async def get_contacts(request: Request) -> JSONResponse:
    return JSONResponse([{"id": "1", "name": "Ada"}])


ROUTES = [Route("/contacts", get_contacts)]


class TestCreateApp:
    def test_policy_exposed_on_state(self):
        policy = CorsPolicy()
        app = create_app(routes=ROUTES, cors=policy)
        assert app.state.cors_policy is policy

    def test_without_request_logging(self):
        app = create_app(routes=ROUTES, cors=CorsPolicy(), request_logging=False)
        resp = TestClient(app).get("/contacts", headers={"Origin": DEV_ORIGIN})
        assert resp.headers["access-control-allow-origin"] == DEV_ORIGIN


class TestCreateAppFromConfig:
    def test_bundled_defaults_install_dev_origin(self):
        app = create_app_from_config(Config(Config._load_defaults()), routes=ROUTES)
        resp = TestClient(app).get("/contacts", headers={"Origin": DEV_ORIGIN})

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == DEV_ORIGIN

    def test_configured_origins_replace_default(self):
        config = Config(
            Config._deep_merge(
                Config._load_defaults(),
                {"contactapi": {"cors": {"allowed-origins": ["https://contacts.example"]}}},
            )
        )
        client = TestClient(create_app_from_config(config, routes=ROUTES))

        admitted = client.get("/contacts", headers={"Origin": "https://contacts.example"})
        dev = client.get("/contacts", headers={"Origin": DEV_ORIGIN})

        assert admitted.headers["access-control-allow-origin"] == "https://contacts.example"
        assert "access-control-allow-origin" not in dev.headers

    def test_disabled_cors(self):
        config = Config({"contactapi": {"cors": {"enabled": False}}})
        app = create_app_from_config(config, routes=ROUTES)

        assert app.state.cors_policy is None
        resp = TestClient(app).get("/contacts", headers={"Origin": DEV_ORIGIN})
        assert "access-control-allow-origin" not in resp.headers
