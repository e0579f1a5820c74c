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
"""Tests for CorsFilter — preflight and actual requests through create_app()."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from contactapi.web.adapters.starlette.app import create_app
from contactapi.web.adapters.starlette.filters.cors_filter import CorsFilter
from contactapi.web.cors import CorsPolicy

DEV_ORIGIN = "http://localhost:5173"
EVIL_ORIGIN = "http://evil.example"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

calls: list[str] = []


async def list_contacts(request: Request) -> JSONResponse:
    calls.append(request.method)
    return JSONResponse({"content": [], "totalElements": 0})


async def options_handler(request: Request) -> PlainTextResponse:
    calls.append(request.method)
    return PlainTextResponse("routed", status_code=202)


CONTACT_ROUTES = [
    Route("/api/contacts", list_contacts, methods=["GET", "POST", "PUT", "DELETE"]),
    Route("/options-aware", options_handler, methods=["OPTIONS"]),
]


def _client(policy: CorsPolicy | None = None) -> TestClient:
    app = create_app(routes=CONTACT_ROUTES, cors=policy or CorsPolicy())
    return TestClient(app)


def _preflight(client: TestClient, path: str, origin: str | None, method: str = "POST", **extra: str):
    headers = {"Access-Control-Request-Method": method, **extra}
    if origin is not None:
        headers["Origin"] = origin
    return client.options(path, headers=headers)


# ---------------------------------------------------------------------------
# Actual (non-preflight) requests
# ---------------------------------------------------------------------------


class TestActualRequests:
    def setup_method(self):
        self.client = _client()

    def test_allowed_origin_is_echoed(self):
        resp = self.client.get("/api/contacts", headers={"Origin": DEV_ORIGIN})

        assert resp.status_code == 200
        assert resp.json() == {"content": [], "totalElements": 0}
        assert resp.headers["access-control-allow-origin"] == DEV_ORIGIN
        assert resp.headers["access-control-allow-credentials"] == "true"
        assert "Authorization" in resp.headers["access-control-expose-headers"]
        assert resp.headers["vary"] == "Origin"

    def test_foreign_origin_gets_no_cors_headers(self):
        resp = self.client.get("/api/contacts", headers={"Origin": EVIL_ORIGIN})

        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers
        assert "access-control-allow-credentials" not in resp.headers
        assert "access-control-expose-headers" not in resp.headers

    def test_request_without_origin_passes_through(self):
        resp = self.client.get("/api/contacts")

        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers
        assert "vary" not in resp.headers

    def test_every_method_is_decorated(self):
        for method in ("POST", "PUT", "DELETE"):
            resp = self.client.request(method, "/api/contacts", headers={"Origin": DEV_ORIGIN})
            assert resp.headers["access-control-allow-origin"] == DEV_ORIGIN

    def test_error_responses_are_decorated(self):
        resp = self.client.get("/missing", headers={"Origin": DEV_ORIGIN})

        assert resp.status_code == 404
        assert resp.headers["access-control-allow-origin"] == DEV_ORIGIN

    def test_same_request_twice_yields_identical_headers(self):
        first = self.client.get("/api/contacts", headers={"Origin": DEV_ORIGIN})
        second = self.client.get("/api/contacts", headers={"Origin": DEV_ORIGIN})

        cors = [h for h in first.headers if h.startswith("access-control-")]
        assert cors
        for name in cors:
            assert first.headers[name] == second.headers[name]


# ---------------------------------------------------------------------------
# Preflight requests
# ---------------------------------------------------------------------------


class TestPreflightRequests:
    def setup_method(self):
        calls.clear()
        self.client = _client()

    def test_preflight_from_allowed_origin(self):
        resp = _preflight(self.client, "/api/contacts", DEV_ORIGIN, "POST")

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == DEV_ORIGIN
        assert resp.headers["access-control-allow-credentials"] == "true"
        assert "POST" in resp.headers["access-control-allow-methods"]
        assert resp.headers["access-control-max-age"] == "1800"
        assert "Origin" in resp.headers["vary"]

    def test_preflight_delete_on_contacts(self):
        resp = _preflight(self.client, "/api/contacts", DEV_ORIGIN, "DELETE")

        assert resp.status_code == 200
        assert "DELETE" in resp.headers["access-control-allow-methods"]

    def test_approved_preflight_does_not_reach_routing(self):
        resp = _preflight(self.client, "/options-aware", DEV_ORIGIN, "GET")

        assert resp.status_code == 200
        assert calls == []

    def test_unlisted_request_header_not_echoed(self):
        resp = _preflight(
            self.client,
            "/api/contacts",
            DEV_ORIGIN,
            "POST",
            **{"Access-Control-Request-Headers": "X-Custom-Header, Content-Type"},
        )

        allow_headers = resp.headers["access-control-allow-headers"]
        assert "X-Custom-Header" not in allow_headers
        assert "Content-Type" in allow_headers

    def test_preflight_from_foreign_origin_falls_through(self):
        resp = _preflight(self.client, "/options-aware", EVIL_ORIGIN, "POST")

        assert resp.status_code == 202
        assert resp.text == "routed"
        assert calls == ["OPTIONS"]
        assert "access-control-allow-origin" not in resp.headers
        assert "access-control-allow-methods" not in resp.headers

    def test_preflight_without_origin_falls_through(self):
        resp = _preflight(self.client, "/options-aware", None, "POST")

        assert resp.status_code == 202
        assert "access-control-allow-methods" not in resp.headers

    def test_preflight_for_unlisted_method_falls_through(self):
        client = _client(CorsPolicy(allowed_methods=("GET",)))
        resp = _preflight(client, "/options-aware", DEV_ORIGIN, "DELETE")

        assert resp.status_code == 202
        assert "access-control-allow-methods" not in resp.headers

    def test_foreign_preflight_on_route_without_options_is_not_rejected_by_filter(self):
        resp = _preflight(self.client, "/api/contacts", EVIL_ORIGIN, "POST")

        # Routing decides: the contacts route does not accept OPTIONS.
        assert resp.status_code == 405
        assert "access-control-allow-origin" not in resp.headers


# ---------------------------------------------------------------------------
# Path pattern and configuration
# ---------------------------------------------------------------------------


class TestPathPattern:
    def test_filter_scoped_to_pattern(self):
        client = _client(CorsPolicy(path_pattern="/api/**"))

        inside = client.get("/api/contacts", headers={"Origin": DEV_ORIGIN})
        outside = client.get("/elsewhere", headers={"Origin": DEV_ORIGIN})

        assert inside.headers["access-control-allow-origin"] == DEV_ORIGIN
        assert "access-control-allow-origin" not in outside.headers

    def test_filter_uses_policy_pattern(self):
        cors_filter = CorsFilter(CorsPolicy(path_pattern="/api/**"))
        assert cors_filter.url_patterns == ["/api/**"]

    def test_default_filter_policy(self):
        assert CorsFilter().policy == CorsPolicy()


class TestNoCorsWhenNotConfigured:
    def test_no_cors_headers_without_policy(self):
        client = TestClient(create_app(routes=CONTACT_ROUTES))

        resp = client.get("/api/contacts", headers={"Origin": DEV_ORIGIN})

        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers


class TestExistingVaryPreserved:
    def test_vary_is_merged(self):
        async def varied(request: Request) -> PlainTextResponse:
            return PlainTextResponse("ok", headers={"Vary": "Accept-Encoding"})

        client = TestClient(create_app(routes=[Route("/varied", varied)], cors=CorsPolicy()))
        resp = client.get("/varied", headers={"Origin": DEV_ORIGIN})

        assert resp.headers["vary"] == "Accept-Encoding, Origin"
