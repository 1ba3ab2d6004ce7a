from __future__ import annotations

import json

import httpx
import pytest

from bitly_client import BitlyClient, ClientConfig


class Backend:
    """Records requests and replies with a queued or fixed response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: str = json.dumps({"status_code": 200, "status_txt": "OK", "data": {}})

    def reply_json(self, payload, status_code: int = 200) -> None:
        self.status_code = status_code
        self.body = json.dumps(payload)

    def reply_text(self, text: str, status_code: int = 200) -> None:
        self.status_code = status_code
        self.body = text

    def reply_data(self, data) -> None:
        self.reply_json({"status_code": 200, "status_txt": "OK", "data": data})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_params(self) -> httpx.QueryParams:
        request = self.last
        if request.method == "POST":
            return httpx.QueryParams(request.content.decode("utf-8"))
        return request.url.params


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
def make_client(backend):
    clients: list[BitlyClient] = []

    def _make(**cfg_kwargs) -> BitlyClient:
        client = BitlyClient(ClientConfig(**cfg_kwargs), transport=httpx.MockTransport(backend.handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
