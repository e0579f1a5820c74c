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
"""Contact API web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from contactapi.config.properties.web import WebProperties
from contactapi.container.ordering import get_order
from contactapi.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from contactapi.web.adapters.starlette.filters import CorsFilter, RequestLoggingFilter
from contactapi.web.cors import cors_policy_from_config
from contactapi.web.ports.filter import WebFilter

if TYPE_CHECKING:
    from contactapi.core.config import Config
    from contactapi.web.cors import CorsPolicy

logger = structlog.get_logger("contactapi.web")


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    cors: CorsPolicy | None = None,
    filters: Sequence[WebFilter] | None = None,
    debug: bool = False,
    request_logging: bool = True,
    lifespan: object | None = None,
) -> Starlette:
    """Create a Starlette application with the Contact API filter chain.

    The chain is composed explicitly: request logging, then CORS (when a
    policy is given), then any caller-supplied filters, all sorted by
    ``@order``.  Routes are the caller's business endpoints.
    """
    chain: list[WebFilter] = []
    if request_logging:
        chain.append(RequestLoggingFilter())
    if cors is not None:
        chain.append(CorsFilter(cors))
    chain.extend(filters or ())

    chain.sort(key=lambda f: get_order(type(f)))

    app = Starlette(
        debug=debug,
        routes=list(routes or ()),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        lifespan=lifespan,  # type: ignore[arg-type]
    )
    app.state.cors_policy = cors
    return app


def create_app_from_config(
    config: Config,
    routes: Sequence[BaseRoute] | None = None,
    filters: Sequence[WebFilter] | None = None,
) -> Starlette:
    """Build the application from ``contactapi.*`` configuration."""
    web = config.bind(WebProperties)
    policy = cors_policy_from_config(config)
    if policy is None:
        logger.warning("cors_disabled")
    else:
        logger.info(
            "cors_policy_installed",
            allowed_origins=list(policy.allowed_origins),
            path_pattern=policy.path_pattern,
        )
    return create_app(routes=routes, cors=policy, filters=filters, debug=web.debug)
