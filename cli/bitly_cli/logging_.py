from __future__ import annotations

import logging

# httpx logs request URLs, access_token included, at INFO
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    for name in (*_TRANSPORT_LOGGERS, "bitly_client"):
        logging.getLogger(name).setLevel(level)
