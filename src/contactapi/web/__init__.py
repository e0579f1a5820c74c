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
"""Contact API web layer — CORS policy, filter chain and Starlette adapter."""

from contactapi.web.adapters.starlette import (
    CorsFilter,
    RequestLoggingFilter,
    create_app,
    create_app_from_config,
)
from contactapi.web.cors import CorsPolicy, cors_policy_from_config
from contactapi.web.filters import OncePerRequestFilter
from contactapi.web.ports.filter import WebFilter

__all__ = [
    "CorsFilter",
    "CorsPolicy",
    "OncePerRequestFilter",
    "RequestLoggingFilter",
    "WebFilter",
    "cors_policy_from_config",
    "create_app",
    "create_app_from_config",
]
