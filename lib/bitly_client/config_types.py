from __future__ import annotations
from dataclasses import dataclass

import httpx

CLIENT_VERSION = "0.1.0"
DEFAULT_API_URL = "https://api-ssl.bitly.com/"
DEFAULT_USER_AGENT = f"bitly-client-python/{CLIENT_VERSION} httpx/{httpx.__version__}"


@dataclass(frozen=True)
class ClientConfig:
    client_id: str | None = None
    client_secret: str | None = None
    access_token: str | None = None
    base_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_s: float = 30.0
    connect_timeout_s: float = 25.0
    force_ipv4: bool = False
