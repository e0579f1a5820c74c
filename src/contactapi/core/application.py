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
"""Application bootstrap — loads configuration, logging and the web app."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import yaml  # type: ignore[import-untyped]

from contactapi.core.config import Config
from contactapi.logging.port import LoggingPort
from contactapi.logging.structlog_adapter import StructlogAdapter

if TYPE_CHECKING:
    from starlette.applications import Starlette
    from starlette.routing import BaseRoute

    from contactapi.web.ports.filter import WebFilter

_CONFIG_CANDIDATES = ("contactapi.yaml", "contactapi.toml", "config/contactapi.yaml", "config/contactapi.toml")


class ContactApiApplication:
    """Bootstraps the service.

    Startup sequence:
    1. Locate the project config directory and active profiles
    2. Load and merge configuration
    3. Configure logging
    4. Build the Starlette app with the CORS policy installed
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        config_dir = self._find_config_dir(config_path)
        active_profiles = self._resolve_profiles_early(config_dir)
        if config_dir:
            self.config = Config.from_sources(config_dir, active_profiles=active_profiles)
        else:
            self.config = Config(Config._load_defaults())
            self.config._loaded_sources = ["contactapi-defaults.yaml (defaults)"]
        self.active_profiles = active_profiles

        self._logging: LoggingPort = StructlogAdapter()
        self._logging.configure(self.config)
        self._logger = self._logging.get_logger("contactapi.core")

    @property
    def logging(self) -> LoggingPort:
        """The configured logging adapter."""
        return self._logging

    def asgi_app(
        self,
        routes: Sequence[BaseRoute] | None = None,
        filters: Sequence[WebFilter] | None = None,
    ) -> Starlette:
        """Build the ASGI application with the configured filter chain."""
        from contactapi.web.adapters.starlette.app import create_app_from_config

        self._logger.info(
            "starting",
            app=self.config.get("contactapi.app.name", "contact-api"),
            profiles=self.active_profiles or None,
            sources=self.config.loaded_sources,
        )
        return create_app_from_config(self.config, routes=routes, filters=filters)

    @staticmethod
    def _find_config_dir(config_path: str | Path | None) -> Path | None:
        if config_path:
            p = Path(config_path)
            return p.parent if p.is_file() else p
        for candidate in _CONFIG_CANDIDATES:
            if Path(candidate).exists():
                return Path(".")
        return None

    @staticmethod
    def _resolve_profiles_early(config_dir: Path | None) -> list[str]:
        """Resolve active profiles before the full config load."""
        env_profiles = os.environ.get("CONTACTAPI_PROFILES_ACTIVE", "")
        if env_profiles:
            return [p.strip() for p in env_profiles.split(",") if p.strip()]

        if config_dir is None:
            return []

        for candidate in (config_dir / "config" / "contactapi.yaml", config_dir / "contactapi.yaml"):
            if candidate.exists():
                with open(candidate) as f:
                    data = yaml.safe_load(f) or {}
                profiles_value = (data.get("contactapi", {}) or {}).get("profiles", {})
                active = profiles_value.get("active", "") if isinstance(profiles_value, dict) else ""
                if active:
                    return [p.strip() for p in str(active).split(",") if p.strip()]

        return []
