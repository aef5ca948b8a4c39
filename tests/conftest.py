from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from docs_gate.api.routes import attach_docs
from docs_gate.config import Option


class FakeContext:
    """RequestContext double that records which lookups the gate made."""

    def __init__(self, client_ip: str = "127.0.0.1", headers: dict[str, str] | None = None):
        self.client_ip = client_ip
        self.headers = headers or {}
        self.address_lookups = 0
        self.header_lookups: list[str] = []

    def client_address(self) -> str:
        self.address_lookups += 1
        return self.client_ip

    def header(self, name: str) -> str | None:
        self.header_lookups.append(name)
        return self.headers.get(name)


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    def _make(*options: Option, handler=None) -> FastAPI:
        app = FastAPI(title="test-api", docs_url=None, redoc_url=None, openapi_url=None)

        @app.get("/hello")
        async def hello() -> dict[str, str]:
            return {"msg": "hello world"}

        attach_docs(app, *options, handler=handler)
        return app

    return _make


def client_for(app: FastAPI, client_ip: str = "127.0.0.1") -> AsyncClient:
    transport = ASGITransport(app=app, client=(client_ip, 50000))
    return AsyncClient(transport=transport, base_url="http://test")
