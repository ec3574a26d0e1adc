from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer
import uvicorn

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_health, render_sensors
from logging_config import configure_logging
from services.poll_cache import build_default_cache
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Serve and inspect 1-Wire and IIO temperature/humidity sensors.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Sensor server base URL (defaults to API_BASE_URL env or http://localhost:8080).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the server to answer.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (defaults to HOST env)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port (defaults to PORT env)."),
) -> None:
    """Run the HTTP server with background polling."""
    settings = get_settings()
    configure_logging()
    # uvicorn exits non-zero on its own when the port cannot be bound.
    uvicorn.run(
        "app.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command("read")
def read_command() -> None:
    """Read all local sensors once and print them."""
    configure_logging()
    snapshot = build_default_cache().refresh()
    render_sensors({"id": r.sensor_id, "value": r.value} for r in snapshot)


@app.command("sensors")
def sensors_command(ctx: typer.Context) -> None:
    """Fetch cached readings from a running server."""
    state = _get_state(ctx)
    payload = state.client.get_sensors()
    render_sensors(payload.get("sensors") or [])


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Show server health; exits with 1 when the cache holds no data."""
    state = _get_state(ctx)
    payload = state.client.get_health()
    render_health(payload)
    if payload.get("status") != "ok":
        raise typer.Exit(code=1)
