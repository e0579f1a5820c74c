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
"""Exception hierarchy for Contact API.

All errors inherit from ContactApiException so callers can catch a single
base type. Request handling never raises from this hierarchy: the CORS
filter only shapes headers. Errors surface at startup, when configuration
is bound into an immutable policy.

Categories:
- InfrastructureException: environment and deployment failures
- ConfigurationException: invalid or inconsistent configuration values
"""

from __future__ import annotations


class ContactApiException(Exception):
    """Base exception for all Contact API errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class InfrastructureException(ContactApiException):
    """Infrastructure failures: configuration, server, environment."""


class ConfigurationException(InfrastructureException):
    """Configuration could not be loaded or is inconsistent."""


class InvalidCorsConfigurationException(ConfigurationException):
    """The configured cross-origin policy cannot be honoured by browsers."""
