from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/bitly/config.toml).")


def _state(value: str) -> str:
    return "(set)" if value.strip() else "(empty)"


@app.command("show")
def show_config():
    cfg = load_config()
    console.console.print(
        f"base_url={cfg.base_url} timeout_s={cfg.timeout_s} force_ipv4={str(cfg.force_ipv4).lower()} "
        f"client_id={cfg.auth.client_id or '-'} client_secret={_state(cfg.auth.client_secret)} "
        f"access_token={_state(cfg.auth.access_token)}",
        markup=False,
        highlight=False,
    )
    console.info(f"Config file: {config_path()}")


@app.command("set")
def set_config(
    base_url: str | None = typer.Option(None, "--base-url", help="API base URL."),
    timeout: float | None = typer.Option(None, "--timeout", min=0.1, help="Request timeout in seconds."),
    force_ipv4: bool | None = typer.Option(None, "--force-ipv4/--no-force-ipv4", help="Pin connections to IPv4."),
    client_id: str | None = typer.Option(None, "--client-id", help="OAuth2 client id."),
    client_secret: str | None = typer.Option(None, "--client-secret", help="OAuth2 client secret."),
    access_token: str | None = typer.Option(None, "--access-token", help="Access token to use directly."),
):
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url)
        if not cfg.base_url:
            console.err("Base URL cannot be empty.")
            raise typer.Exit(code=2)
    if timeout is not None:
        cfg.timeout_s = timeout
    if force_ipv4 is not None:
        cfg.force_ipv4 = force_ipv4
    if client_id is not None:
        cfg.auth.client_id = client_id.strip()
    if client_secret is not None:
        cfg.auth.client_secret = client_secret.strip()
    if access_token is not None:
        cfg.auth.access_token = access_token.strip()
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
