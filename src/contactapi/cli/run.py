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
"""'contactapi run' — start the backend under uvicorn."""

from __future__ import annotations

import click
import uvicorn

from contactapi.cli.console import console
from contactapi.config.properties.web import WebProperties
from contactapi.core.config import Config
from contactapi.kernel.exceptions import ConfigurationException

DEFAULT_APP = "contactapi.main:app"


@click.command()
@click.option("--host", default=None, help="Bind address (default: contactapi.web.host).")
@click.option("--port", default=None, type=int, help="Port number (default: contactapi.web.port or 8080).")
@click.option("--reload", "use_reload", is_flag=True, help="Enable auto-reload for development.")
@click.option("--app", "app_path", default=DEFAULT_APP, show_default=True, help="Application import path.")
def run_command(host: str | None, port: int | None, use_reload: bool, app_path: str) -> None:
    """Start the application server."""
    try:
        web = Config.from_sources(".").bind(WebProperties)
    except ConfigurationException as exc:
        console.print(f"[error]Invalid configuration:[/error] {exc}")
        raise SystemExit(1) from None
    host = host or web.host
    port = port or web.port

    console.print(f"[info]Serving[/info] {app_path} on http://{host}:{port}")
    uvicorn.run(app_path, host=host, port=port, reload=use_reload, log_level="warning")
