from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def render_sensors(sensors: Iterable[Mapping[str, Any]]) -> None:
    items = list(sensors)
    echo_heading("Sensors")
    if not items:
        typer.echo("No readings available.")
        return
    width = max(len(str(item.get("id"))) for item in items)
    for item in items:
        typer.echo(f"  {str(item.get('id')).ljust(width)}  {item.get('value')}")


def render_health(payload: Dict[str, Any]) -> None:
    status = payload.get("status")
    color = typer.colors.GREEN if status == "ok" else typer.colors.YELLOW
    typer.secho(f"status: {status}", fg=color)
    typer.echo(f"sensors: {payload.get('sensors')}")
