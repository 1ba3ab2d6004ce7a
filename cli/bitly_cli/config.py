from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from bitly_client.config_types import DEFAULT_API_URL

APP_NAME = "bitly"
CONFIG_FILENAME = "config.toml"

ENV_ACCESS_TOKEN = "BITLY_ACCESS_TOKEN"
ENV_CLIENT_ID = "BITLY_CLIENT_ID"
ENV_CLIENT_SECRET = "BITLY_CLIENT_SECRET"
ENV_API_URL = "BITLY_API_URL"


@dataclass
class AuthConfig:
    access_token: str = ""
    client_id: str = ""
    client_secret: str = ""


@dataclass
class AppConfig:
    base_url: str = DEFAULT_API_URL
    auth: AuthConfig = field(default_factory=AuthConfig)
    timeout_s: float = 30.0
    force_ipv4: bool = False


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_base_url(raw: str | None) -> str:
    """Endpoint paths are appended verbatim, so the base always ends with ``/``."""
    value = (raw or "").strip()
    if not value:
        return ""
    lowered = value.lower()
    if not (lowered.startswith("http://") or lowered.startswith("https://")):
        value = f"https://{value}"
    return value.rstrip("/") + "/"


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return _prune_empty(
        {
            "base_url": cfg.base_url,
            "timeout_s": cfg.timeout_s,
            "force_ipv4": cfg.force_ipv4,
            "auth": {
                "access_token": cfg.auth.access_token,
                "client_id": cfg.auth.client_id,
                "client_secret": cfg.auth.client_secret,
            },
        }
    )


def _prune_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_empty(v) for k, v in value.items() if v is not None and v != ""}
    return value


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""))
    if base_url:
        cfg.base_url = base_url
    try:
        cfg.timeout_s = float(data.get("timeout_s", cfg.timeout_s))
    except (TypeError, ValueError):
        pass
    if isinstance(data.get("force_ipv4"), bool):
        cfg.force_ipv4 = data["force_ipv4"]
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(
            access_token=str(auth_raw.get("access_token") or ""),
            client_id=str(auth_raw.get("client_id") or ""),
            client_secret=str(auth_raw.get("client_secret") or ""),
        )
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_env(cfg: AppConfig) -> AppConfig:
    """Return a copy of ``cfg`` with ``BITLY_*`` environment overrides applied."""
    base_url = normalize_base_url(os.getenv(ENV_API_URL, "")) or cfg.base_url
    return AppConfig(
        base_url=base_url,
        auth=AuthConfig(
            access_token=os.getenv(ENV_ACCESS_TOKEN, "").strip() or cfg.auth.access_token,
            client_id=os.getenv(ENV_CLIENT_ID, "").strip() or cfg.auth.client_id,
            client_secret=os.getenv(ENV_CLIENT_SECRET, "").strip() or cfg.auth.client_secret,
        ),
        timeout_s=cfg.timeout_s,
        force_ipv4=cfg.force_ipv4,
    )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
