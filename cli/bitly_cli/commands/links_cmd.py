from __future__ import annotations

import typer
from rich.table import Table

from bitly_client import BitlyError

from .. import console
from ..config import load_config
from ..http import make_client

app = typer.Typer(help="Shorten, expand and inspect links.")


def _fail(action: str, e: BitlyError) -> None:
    code = getattr(e, "status_code", None)
    suffix = f" (code {code})" if code is not None else ""
    console.err(f"{action} failed: {e}{suffix}")
    raise typer.Exit(code=2)


@app.command("shorten")
def shorten(
    long_url: str = typer.Argument(..., help="URL to shorten."),
    domain: str | None = typer.Option(None, "--domain", help="Preferred short domain (bit.ly, j.mp, bitly.com)."),
    json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    client = make_client(load_config(), base_url_override=base_url)
    try:
        data = client.shorten(long_url, domain=domain)
    except BitlyError as e:
        _fail("Shorten", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    console.console.print(data.get("url"))


@app.command("expand")
def expand(
    short_url: str | None = typer.Argument(None, help="Short link to expand."),
    hash_: str | None = typer.Option(None, "--hash", help="Link hash instead of a short URL."),
    json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    client = make_client(load_config(), base_url_override=base_url)
    try:
        data = client.expand(short_url=short_url, hash=hash_)
    except BitlyError as e:
        _fail("Expand", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    console.console.print(data.get("long_url") or data.get("error") or "-")


@app.command("info")
def info(
    short_url: str | None = typer.Argument(None, help="Short link to inspect."),
    hash_: str | None = typer.Option(None, "--hash", help="Link hash instead of a short URL."),
    json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    client = make_client(load_config(), base_url_override=base_url)
    try:
        data = client.info(short_url=short_url, hash=hash_)
    except BitlyError as e:
        _fail("Info", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    table = Table(title="Link info")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(str(key), "-" if value is None else str(value))
    console.console.print(table)


@app.command("clicks")
def clicks(
    link: str = typer.Argument(..., help="Short link."),
    unit: str = typer.Option("day", "--unit", help="minute, hour, day, week or month."),
    units: int | None = typer.Option(None, "--units", help="Number of units to report (-1 for all)."),
    rollup: bool | None = typer.Option(None, "--rollup/--no-rollup", help="Return a single total instead of a series."),
    json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    client = make_client(load_config(), base_url_override=base_url)
    try:
        data = client.link_clicks(link, unit=unit, units=units, rollup=rollup)
    except BitlyError as e:
        _fail("Clicks", e)
    finally:
        client.close()

    if json_out or not isinstance(data.get("link_clicks"), list):
        console.print_json(data)
        return
    table = Table(title=f"Clicks per {unit}")
    table.add_column("Timestamp")
    table.add_column("Clicks", justify="right")
    for row in data["link_clicks"]:
        table.add_row(str(row.get("dt")), str(row.get("clicks")))
    console.console.print(table)
