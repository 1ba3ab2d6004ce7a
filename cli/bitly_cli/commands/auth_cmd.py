from __future__ import annotations

import typer

from bitly_client import BitlyError

from .. import console
from ..config import load_config, save_config
from ..http import make_client

app = typer.Typer(help="OAuth2 login and token management.")


@app.command("exchange", help="Exchange an OAuth2 authorization code for an access token.")
def exchange(
    code: str = typer.Option(..., "--code", prompt=True, help="Authorization code from the redirect."),
    redirect_uri: str = typer.Option(..., "--redirect-uri", prompt=True, help="Redirect URI used for the code."),
    client_id: str | None = typer.Option(None, "--client-id", help="OAuth2 client id (saved on success)."),
    client_secret: str | None = typer.Option(
        None, "--client-secret", help="OAuth2 client secret (saved on success)."
    ),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    cfg = load_config()
    if client_id is not None:
        cfg.auth.client_id = client_id
    if client_secret is not None:
        cfg.auth.client_secret = client_secret
    if not cfg.auth.client_id or not cfg.auth.client_secret:
        console.err("client id and secret are required (--client-id/--client-secret or config).")
        raise typer.Exit(code=2)

    client = make_client(cfg, base_url_override=base_url)
    try:
        token = client.exchange_authorization_code(code, redirect_uri)
    except BitlyError as e:
        console.err(f"Token exchange failed: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()

    cfg.auth.access_token = token
    save_path = save_config(cfg)
    console.ok(f"Login successful. Token saved to {save_path}.")


@app.command("logout", help="Forget the saved access token.")
def logout():
    cfg = load_config()
    cfg.auth.access_token = ""
    save_path = save_config(cfg)
    console.ok(f"Token cleared from {save_path}.")


@app.command("whoami", help="Show the authenticated user.")
def whoami(
    json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        data = client.user_info()
    except BitlyError as e:
        console.err(f"Failed to fetch user info: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    login = data.get("login") if isinstance(data, dict) else None
    full_name = data.get("full_name") if isinstance(data, dict) else None
    console.console.print(f"login={login or '-'} full_name={full_name or '-'}")
