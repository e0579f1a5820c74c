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
"""CORS configuration properties (contactapi.cors.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from contactapi.core.config import config_properties

DEFAULT_ALLOWED_ORIGINS: list[str] = ["http://localhost:5173"]

DEFAULT_ALLOWED_METHODS: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# The same list is used for the exposed headers.
DEFAULT_ALLOWED_HEADERS: list[str] = [
    "Origin",
    "Access-Control-Allow-Origin",
    "Content-Type",
    "Accept",
    "Authorization",
    "X-Requested-With",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
    "Access-Control-Allow-Credentials",
]


@config_properties(prefix="contactapi.cors")
@dataclass
class CorsProperties:
    """Externalised cross-origin policy.

    ``allowed_origins`` accepts a YAML list or a comma-separated string, so
    ``CONTACTAPI_CORS_ALLOWED_ORIGINS=https://a.example,https://b.example``
    overrides the development default.
    """

    enabled: bool = True
    allowed_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    allowed_methods: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_METHODS))
    allowed_headers: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_HEADERS))
    exposed_headers: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_HEADERS))
    allow_credentials: bool = True
    path_pattern: str = "/**"
    max_age: int = 1800  # seconds
