from __future__ import annotations

from bitly_client import BitlyClient
from bitly_client.config_types import ClientConfig

from .config import AppConfig, apply_env, normalize_base_url


def make_client(cfg: AppConfig, *, base_url_override: str | None = None) -> BitlyClient:
    effective_cfg = apply_env(cfg)
    base_url = normalize_base_url(base_url_override) or effective_cfg.base_url
    return BitlyClient(
        ClientConfig(
            client_id=effective_cfg.auth.client_id or None,
            client_secret=effective_cfg.auth.client_secret or None,
            access_token=effective_cfg.auth.access_token or None,
            base_url=base_url,
            timeout_s=effective_cfg.timeout_s,
            force_ipv4=effective_cfg.force_ipv4,
        )
    )
