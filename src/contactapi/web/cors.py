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
"""Cross-origin admission policy.

A :class:`CorsPolicy` is built once at startup and read by every request
afterwards.  All decisions are pure functions of the policy and the request
values passed in, so the same request always yields the same headers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from contactapi.config.properties.cors import (
    DEFAULT_ALLOWED_HEADERS,
    DEFAULT_ALLOWED_METHODS,
    DEFAULT_ALLOWED_ORIGINS,
    CorsProperties,
)
from contactapi.core.config import Config
from contactapi.kernel.exceptions import InvalidCorsConfigurationException
from contactapi.web.filters import path_matches

ORIGIN = "Origin"
ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"
VARY = "Vary"

ALL = "*"

PREFLIGHT_VARY = (ORIGIN, ACCESS_CONTROL_REQUEST_METHOD, ACCESS_CONTROL_REQUEST_HEADERS)


def _as_tuple(values: Iterable[str]) -> tuple[str, ...]:
    if isinstance(values, str):
        values = [values]
    return tuple(v.strip() for v in values if v and v.strip())


@dataclass(frozen=True)
class CorsPolicy:
    """Immutable cross-origin policy.

    Origins are compared exactly (scheme, host and port).  A trailing slash
    on a configured origin is dropped and methods are upper-cased, so
    ``"http://localhost:5173/"`` and ``"get"`` are accepted as written.

    Raises:
        InvalidCorsConfigurationException: if credentials are allowed for the
            wildcard origin, or no methods are allowed.
    """

    allowed_origins: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_ALLOWED_ORIGINS))
    allowed_methods: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_ALLOWED_METHODS))
    allowed_headers: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_ALLOWED_HEADERS))
    exposed_headers: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_ALLOWED_HEADERS))
    allow_credentials: bool = True
    path_pattern: str = "/**"
    max_age: int = 1800  # seconds

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "allowed_origins", tuple(o.rstrip("/") for o in _as_tuple(self.allowed_origins))
        )
        object.__setattr__(self, "allowed_methods", tuple(m.upper() for m in _as_tuple(self.allowed_methods)))
        object.__setattr__(self, "allowed_headers", _as_tuple(self.allowed_headers))
        object.__setattr__(self, "exposed_headers", _as_tuple(self.exposed_headers))

        if self.allow_credentials and ALL in self.allowed_origins:
            raise InvalidCorsConfigurationException(
                "allowed_origins cannot contain '*' when allow_credentials is true; "
                "list the origins explicitly",
                code="CORS_001",
                context={"allowed_origins": list(self.allowed_origins)},
            )
        if not self.allowed_methods:
            raise InvalidCorsConfigurationException(
                "at least one HTTP method must be allowed",
                code="CORS_002",
            )

    @classmethod
    def from_properties(cls, props: CorsProperties) -> CorsPolicy:
        """Build a policy from bound ``contactapi.cors`` properties."""
        return cls(
            allowed_origins=tuple(props.allowed_origins),
            allowed_methods=tuple(props.allowed_methods),
            allowed_headers=tuple(props.allowed_headers),
            exposed_headers=tuple(props.exposed_headers),
            allow_credentials=props.allow_credentials,
            path_pattern=props.path_pattern,
            max_age=props.max_age,
        )

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def applies_to(self, path: str) -> bool:
        return path_matches(path, self.path_pattern)

    def is_origin_allowed(self, origin: str | None) -> bool:
        if not origin:
            return False
        return ALL in self.allowed_origins or origin in self.allowed_origins

    def is_method_allowed(self, method: str | None) -> bool:
        return bool(method) and method.upper() in self.allowed_methods  # type: ignore[union-attr]

    @staticmethod
    def is_preflight(method: str, headers: Mapping[str, str]) -> bool:
        """A preflight is an ``OPTIONS`` request carrying ``Access-Control-Request-Method``."""
        if method.upper() != "OPTIONS":
            return False
        lowered = {k.lower(): v for k, v in headers.items()}
        return ACCESS_CONTROL_REQUEST_METHOD.lower() in lowered

    def preflight_headers(self, origin: str | None, requested_method: str | None) -> dict[str, str]:
        """Headers for a preflight response, or ``{}`` when it is not approved.

        The allowed-headers value is always the configured list; headers the
        browser asked for that are not configured are never echoed back.
        """
        if not self.is_origin_allowed(origin) or not self.is_method_allowed(requested_method):
            return {}
        headers = self._origin_headers(origin)  # type: ignore[arg-type]
        headers[ACCESS_CONTROL_ALLOW_METHODS] = ", ".join(self.allowed_methods)
        if self.allowed_headers:
            headers[ACCESS_CONTROL_ALLOW_HEADERS] = ", ".join(self.allowed_headers)
        if self.max_age >= 0:
            headers[ACCESS_CONTROL_MAX_AGE] = str(self.max_age)
        return headers

    def actual_headers(self, origin: str | None) -> dict[str, str]:
        """Headers for a non-preflight response, or ``{}`` when the origin is not admitted."""
        if not self.is_origin_allowed(origin):
            return {}
        headers = self._origin_headers(origin)  # type: ignore[arg-type]
        if self.exposed_headers:
            headers[ACCESS_CONTROL_EXPOSE_HEADERS] = ", ".join(self.exposed_headers)
        return headers

    def _origin_headers(self, origin: str) -> dict[str, str]:
        allow_origin = ALL if ALL in self.allowed_origins else origin
        headers = {ACCESS_CONTROL_ALLOW_ORIGIN: allow_origin}
        if self.allow_credentials:
            headers[ACCESS_CONTROL_ALLOW_CREDENTIALS] = "true"
        return headers


def cors_policy_from_config(config: Config) -> CorsPolicy | None:
    """Bind ``contactapi.cors`` and build the policy, or ``None`` when disabled."""
    props = config.bind(CorsProperties)
    if not props.enabled:
        return None
    return CorsPolicy.from_properties(props)


def merge_vary(existing: str | None, names: Iterable[str]) -> str:
    """Append *names* to an existing ``Vary`` value without duplicates."""
    values = [v.strip() for v in (existing or "").split(",") if v.strip()]
    seen = {v.lower() for v in values}
    for name in names:
        if name.lower() not in seen:
            values.append(name)
            seen.add(name.lower())
    return ", ".join(values)
