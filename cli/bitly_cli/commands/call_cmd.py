from __future__ import annotations

from typing import Any

import typer

from bitly_client import BitlyError

from .. import console
from ..config import load_config
from ..http import make_client


def parse_params(pairs: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` strings into a parameter mapping.

    A key given more than once becomes a list, sent as repeated pairs.
    """
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--param")
        if key not in params:
            params[key] = value
        elif isinstance(params[key], list):
            params[key].append(value)
        else:
            params[key] = [params[key], value]
    return params


def call(
    endpoint: str = typer.Argument(..., help="Endpoint path, e.g. v3/user/info."),
    param: list[str] = typer.Option([], "--param", "-p", help="Request parameter as key=value (repeatable)."),
    post: bool = typer.Option(False, "--post", help="Send as a form-encoded POST."),
    raw: bool = typer.Option(False, "--raw", help="Print the raw body instead of the JSON data."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    """Call any API endpoint through the client's request pipeline."""
    params = parse_params(param)
    client = make_client(load_config(), base_url_override=base_url)
    try:
        result = client.call(endpoint.lstrip("/"), params, use_post=post, expect_json=not raw)
    except BitlyError as e:
        code = getattr(e, "status_code", None)
        console.err(f"{endpoint} failed: {e}" + (f" (code {code})" if code is not None else ""))
        raise typer.Exit(code=2)
    finally:
        client.close()

    if raw:
        console.console.print(result, markup=False, highlight=False)
        return
    console.print_json(result)
