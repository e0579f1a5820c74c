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
"""CORS filter — applies a :class:`CorsPolicy` to every matching request."""

from __future__ import annotations

from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from contactapi.container.ordering import HIGHEST_PRECEDENCE, order
from contactapi.web.cors import (
    ACCESS_CONTROL_REQUEST_METHOD,
    ORIGIN,
    PREFLIGHT_VARY,
    VARY,
    CorsPolicy,
    merge_vary,
)
from contactapi.web.filters import OncePerRequestFilter
from contactapi.web.ports.filter import CallNext

logger = structlog.get_logger("contactapi.web.cors")

CORS_STATE_PREFLIGHT = "preflight"
CORS_STATE_ALLOWED = "allowed"
CORS_STATE_REJECTED = "rejected"


@order(HIGHEST_PRECEDENCE + 200)
class CorsFilter(OncePerRequestFilter):
    """Decorates responses for admitted origins; never rejects a request.

    An approved preflight is answered here with ``200`` and the route handler
    is not invoked.  Anything else continues down the chain, and only
    responses to admitted origins gain CORS headers.  The outcome is
    recorded on ``request.state.cors`` for the request logger.
    """

    def __init__(self, policy: CorsPolicy | None = None) -> None:
        self._policy = policy or CorsPolicy()
        self.url_patterns = [self._policy.path_pattern]

    @property
    def policy(self) -> CorsPolicy:
        return self._policy

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        policy = self._policy
        origin = request.headers.get(ORIGIN)

        if origin is None:
            return cast(Response, await call_next(request))

        if policy.is_preflight(request.method, request.headers):
            headers = policy.preflight_headers(origin, request.headers.get(ACCESS_CONTROL_REQUEST_METHOD))
            if headers:
                request.state.cors = CORS_STATE_PREFLIGHT
                headers[VARY] = merge_vary(None, PREFLIGHT_VARY)
                return Response(status_code=200, headers=headers)
            self._rejected(request, origin)
            return cast(Response, await call_next(request))

        response = cast(Response, await call_next(request))
        headers = policy.actual_headers(origin)
        if not headers:
            self._rejected(request, origin)
            return response

        request.state.cors = CORS_STATE_ALLOWED
        for name, value in headers.items():
            response.headers[name] = value
        response.headers[VARY] = merge_vary(response.headers.get(VARY), (ORIGIN,))
        return response

    @staticmethod
    def _rejected(request: Request, origin: str) -> None:
        request.state.cors = CORS_STATE_REJECTED
        logger.debug(
            "cors_origin_rejected",
            origin=origin,
            method=request.method,
            path=request.url.path,
        )
