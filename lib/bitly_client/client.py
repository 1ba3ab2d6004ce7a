from __future__ import annotations

import inspect
import json
import logging
import threading
from typing import Any, Mapping
from urllib.parse import parse_qsl

import httpx

from .config_types import ClientConfig
from .endpoints import ENDPOINTS, Endpoint, as_bool
from .errors import ApiError, MalformedResponseError, UsageError
from .query import encode_params, normalize_params
from .transport import Transport

logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = "oauth/access_token"


def _status_code(envelope: Any, endpoint: str) -> int:
    if not isinstance(envelope, dict):
        raise MalformedResponseError(500, f"{endpoint} returned a non-object JSON body", json.dumps(envelope)[:1000])
    try:
        return int(envelope.get("status_code"))
    except (TypeError, ValueError):
        raise MalformedResponseError(
            500, f"{endpoint} returned an envelope without status_code", json.dumps(envelope)[:1000]
        ) from None


def _edit_params(fields: Mapping[str, Any]) -> dict[str, Any]:
    params = {k: v for k, v in fields.items() if v is not None}
    params["edit"] = ",".join(params)
    return params


class BitlyClient:
    def __init__(self, cfg: ClientConfig | None = None, *, transport: httpx.BaseTransport | None = None):
        """``transport`` replaces the default httpx transport; it cannot be
        combined with ``force_ipv4``, which needs its own transport.
        """
        self._cfg = cfg or ClientConfig()
        self._t = Transport(self._cfg, transport)
        self._access_token = self._cfg.access_token
        self._token_lock = threading.RLock()

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def access_token(self) -> str | None:
        with self._token_lock:
            return self._access_token

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> BitlyClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def call(
            self,
            endpoint: str,
            params: Mapping[str, Any] | None = None,
            *,
            use_post: bool = False,
            expect_json: bool = True,
    ) -> Any:
        """Run one API request and unwrap the result.

        ``format=json`` is always sent and the held access token is added
        unless ``params`` already carries one. A non-200 HTTP status raises
        ``TransportError``; a non-200 envelope ``status_code`` raises
        ``ApiError``. With ``expect_json=False`` the raw body is returned,
        otherwise the envelope's ``data``.
        """
        params = dict(params or {})
        params["format"] = "json"
        token = self.access_token
        if token is not None and params.get("access_token") is None:
            params["access_token"] = token
        params = normalize_params(params)

        url = self._cfg.base_url + endpoint
        logger.debug("%s %s", "POST" if use_post else "GET", endpoint)
        if use_post:
            body = self._t.post(url, encode_params(params))
        else:
            body = self._t.get(url, encode_params(params))

        if not expect_json:
            return body

        envelope = json.loads(body)
        status_code = _status_code(envelope, endpoint)
        if status_code != 200:
            message = str(envelope.get("status_txt") or "")
            logger.debug("%s returned status_code %s: %s", endpoint, status_code, message)
            raise ApiError(status_code, message, body[:1000])
        return envelope.get("data")

    def exchange_authorization_code(self, code: str, redirect_uri: str) -> str:
        """Trade an OAuth2 authorization code for an access token.

        The token is stored on the client and used for every later call.
        Concurrent exchanges on one client are serialized.
        """
        params = {
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self._cfg.client_id,
            "client_secret": self._cfg.client_secret,
        }
        with self._token_lock:
            body = self.call(TOKEN_ENDPOINT, params, use_post=True, expect_json=False)
            data = dict(parse_qsl(body, keep_blank_values=True))
            token = data.get("access_token")
            if not token:
                raise MalformedResponseError(500, f"{TOKEN_ENDPOINT} returned no access_token", body[:1000])
            self._access_token = token
            return token

    # --- links ---
    def expand(self, short_url: str | list[str] | None = None, hash: str | list[str] | None = None) -> Any:
        if not short_url and not hash:
            raise UsageError("short_url or hash must be specified")
        if short_url:
            params, many = {"shortUrl": short_url}, isinstance(short_url, (list, tuple))
        else:
            params, many = {"hash": hash}, isinstance(hash, (list, tuple))
        data = self.call("v3/expand", params)
        return data["expand"] if many else data["expand"][0]

    def info(
            self,
            short_url: str | list[str] | None = None,
            hash: str | list[str] | None = None,
            *,
            expand_user: bool | None = None,
    ) -> Any:
        if not short_url and not hash:
            raise UsageError("short_url or hash must be specified")
        params: dict[str, Any] = {}
        if expand_user is not None:
            params["expand_user"] = expand_user
        if short_url:
            params["shortUrl"] = short_url
            many = isinstance(short_url, (list, tuple))
        else:
            params["hash"] = hash
            many = isinstance(hash, (list, tuple))
        data = self.call("v3/info", params)
        return data["info"] if many else data["info"][0]

    def shorten(self, long_url: str, *, domain: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"longUrl": long_url}
        if domain is not None:
            params["domain"] = domain
        data = self.call("v3/shorten", params)
        if isinstance(data, dict) and "new_hash" in data:
            data["new_hash"] = as_bool(data["new_hash"])
        return data

    def user_link_edit(self, link: str, **fields: Any) -> dict[str, Any]:
        """Edit a saved link.

        ``edit`` is derived from the names of the supplied ``fields``
        (``title``, ``note``, ``private``, ``user_ts``, ``archived``, ...).
        """
        params = _edit_params(fields)
        params["link"] = link
        return self.call("v3/user/link_edit", params)["link_edit"]

    def user_link_save(self, long_url: str, **fields: Any) -> dict[str, Any]:
        params = {k: v for k, v in fields.items() if v is not None}
        params["longUrl"] = long_url
        return self.call("v3/user/link_save", params)["link_save"]

    def search(
            self,
            query: str,
            *,
            limit: int = 10,
            offset: int = 0,
            lang: str | None = None,
            cities: str | list[str] | None = None,
            domain: str | None = None,
            fields: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"query": query, "limit": limit, "offset": offset}
        if lang is not None:
            params["lang"] = lang
        if cities is not None:
            params["cities"] = cities
        if domain is not None:
            params["domain"] = domain
        if fields is not None:
            params["fields"] = ",".join(fields)
        return self.call("v3/search", params)["results"]

    # --- bundles ---
    def bundle_archive(self, bundle_link: str) -> bool:
        body = self.call("v3/bundle/archive", {"bundle_link": bundle_link}, expect_json=False)
        return body == "OK"

    def bundle_edit(self, bundle_link: str, **fields: Any) -> dict[str, Any]:
        """Edit bundle metadata (``title``, ``description``, ``private``, ``preview``, ``og_image``)."""
        params = _edit_params(fields)
        params["bundle_link"] = bundle_link
        return self.call("v3/bundle/edit", params)["bundle"]

    def bundle_link_edit(self, bundle_link: str, link: str, **fields: Any) -> dict[str, Any]:
        params = _edit_params(fields)
        params["bundle_link"] = bundle_link
        params["link"] = link
        return self.call("v3/bundle/link_edit", params)["bundle"]


def _bind(endpoint: Endpoint):
    def method(self: BitlyClient, *args: Any, **kwargs: Any) -> Any:
        params = endpoint.build_params(args, kwargs)
        data = self.call(endpoint.path, params, use_post=endpoint.post, expect_json=endpoint.expect_json)
        return endpoint.extract(data)

    sig = endpoint.signature
    self_param = inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)
    method.__signature__ = sig.replace(parameters=[self_param, *sig.parameters.values()])
    method.__name__ = endpoint.name
    method.__qualname__ = f"BitlyClient.{endpoint.name}"
    method.__doc__ = endpoint.doc or f"Call ``{endpoint.path}``."
    return method


for _endpoint in ENDPOINTS:
    setattr(BitlyClient, _endpoint.name, _bind(_endpoint))
del _endpoint
