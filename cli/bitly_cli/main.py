from __future__ import annotations

import typer

from .commands import auth_cmd, call_cmd, config_cmd, links_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="bitly",
        help="bitly API command line client",
        no_args_is_help=True,
    )

    app.add_typer(auth_cmd.app, name="auth")
    app.add_typer(links_cmd.app, name="links")
    app.add_typer(config_cmd.app, name="config")
    app.command("call")(call_cmd.call)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
