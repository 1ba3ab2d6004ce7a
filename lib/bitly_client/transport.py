from __future__ import annotations

import logging

import httpx

from .config_types import ClientConfig
from .errors import RequestTimeout, TransportError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Transport:
    def __init__(self, cfg: ClientConfig, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        if transport is not None and cfg.force_ipv4:
            raise ValueError("force_ipv4 cannot be combined with an explicit transport")
        if cfg.force_ipv4:
            # binding the local side to an IPv4 wildcard keeps resolution on A records
            transport = httpx.HTTPTransport(local_address="0.0.0.0")

        self._client = httpx.Client(
            timeout=httpx.Timeout(cfg.timeout_s, connect=cfg.connect_timeout_s),
            headers={"User-Agent": cfg.user_agent},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def get(self, url: str, query: str) -> str:
        if query:
            url = f"{url}?{query}"
        return self.request("GET", url)

    def post(self, url: str, body: str) -> str:
        return self.request(
            "POST",
            url,
            content=body.encode("utf-8"),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    def request(self, method: str, url: str, *, content: bytes | None = None, headers: dict | None = None) -> str:
        """Send one request and return the body of a 200 response."""
        target = url.split("?", 1)[0]
        try:
            r = self._client.request(method, url, content=content, headers=headers)
        except httpx.TimeoutException as e:
            logger.debug("%s %s timed out: %s", method, target, e)
            raise RequestTimeout(f"{method} {target} timed out: {e}") from e
        except httpx.RequestError as e:
            logger.debug("%s %s failed: %s", method, target, e)
            raise TransportError(None, None, f"{method} {target} failed: {e}") from e

        if r.status_code != 200:
            logger.debug("%s %s failed with HTTP %s", method, target, r.status_code)
            raise TransportError(r.status_code, r.text, f"{method} {target} failed with {r.status_code}")
        return r.text
