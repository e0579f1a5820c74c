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
"""'contactapi cors' — inspect the effective cross-origin policy."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from contactapi.cli.console import console
from contactapi.core.config import Config
from contactapi.kernel.exceptions import ConfigurationException
from contactapi.web.cors import CorsPolicy, cors_policy_from_config


def _load_policy(config_dir: Path) -> CorsPolicy | None:
    try:
        return cors_policy_from_config(Config.from_sources(config_dir))
    except ConfigurationException as exc:
        console.print(f"[error]Invalid CORS configuration:[/error] {exc}")
        raise SystemExit(1) from None


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory holding contactapi.yaml.",
)
@click.pass_context
def cors_group(ctx: click.Context, config_dir: Path) -> None:
    """Inspect the cross-origin policy."""
    ctx.obj = config_dir


@cors_group.command("show")
@click.pass_obj
def show_command(config_dir: Path) -> None:
    """Print the effective policy."""
    policy = _load_policy(config_dir)
    if policy is None:
        console.print("[warning]CORS is disabled[/warning] (contactapi.cors.enabled=false)")
        return

    table = Table(title="CORS policy", show_header=False, border_style="dim")
    table.add_column("Key", style="info")
    table.add_column("Value")
    table.add_row("Allowed origins", "\n".join(policy.allowed_origins) or "-")
    table.add_row("Allowed methods", ", ".join(policy.allowed_methods))
    table.add_row("Allowed headers", "\n".join(policy.allowed_headers) or "-")
    table.add_row("Exposed headers", "\n".join(policy.exposed_headers) or "-")
    table.add_row("Allow credentials", str(policy.allow_credentials).lower())
    table.add_row("Path pattern", policy.path_pattern)
    table.add_row("Max age", f"{policy.max_age}s")
    console.print(table)


@cors_group.command("check")
@click.argument("origin")
@click.option("--method", default=None, help="Simulate a preflight for this requested method.")
@click.option("--path", "path", default="/", show_default=True, help="Request path.")
@click.pass_obj
def check_command(config_dir: Path, origin: str, method: str | None, path: str) -> None:
    """Show the headers a request from ORIGIN would receive.

    Exits 1 when the origin is not admitted.
    """
    policy = _load_policy(config_dir)
    if policy is None:
        console.print("[warning]CORS is disabled[/warning]")
        raise SystemExit(1)

    if not policy.applies_to(path):
        headers: dict[str, str] = {}
    elif method is not None:
        headers = policy.preflight_headers(origin, method)
    else:
        headers = policy.actual_headers(origin)

    if not headers:
        console.print(f"[error]rejected[/error] {origin}")
        raise SystemExit(1)

    console.print(f"[success]admitted[/success] {origin}")
    for name, value in headers.items():
        console.print(f"  [info]{name}[/info]: {value}")
