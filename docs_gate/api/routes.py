"""Registration of the gated documentation routes.

``attach_docs`` wires two routes onto a FastAPI app or ``APIRouter``:

- the UI catch-all (GET/HEAD/OPTIONS), always behind the gate
- the OpenAPI document, behind the gate only when ``protect_doc_json`` is set

Leaving the document public lets a protected UI page still fetch it.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from docs_gate.api.context import StarletteRequestContext
from docs_gate.api.docs import swagger_handler
from docs_gate.config import Option, build_policy
from docs_gate.constants import DOC_FILENAME, DOC_METHODS, UI_METHODS
from docs_gate.core.gate import AccessGate
from docs_gate.core.logging import get_logger

logger = get_logger(__name__)

Handler = Callable[[Request], Response | Awaitable[Response]]


class RouteRegistrar(Protocol):
    """Anything routes can be added to: ``FastAPI`` or ``APIRouter``."""

    def add_api_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        *,
        methods: list[str] | None = None,
        include_in_schema: bool = True,
    ) -> None: ...


def _split_wildcard(path: str) -> tuple[str, str | None]:
    """Split "/swagger/*any" into ("/swagger/", "any")."""
    head, _, last = path.rpartition("/")
    if last.startswith("*") and len(last) > 1:
        return f"{head}/", last[1:]
    if last.startswith("{") and last.endswith(":path}"):
        return f"{head}/", last[1 : -len(":path}")]
    return path, None


def route_pattern(path: str) -> str:
    """Translate a trailing ``*name`` segment into Starlette's ``{name:path}``."""
    prefix, name = _split_wildcard(path)
    if name is None:
        return path
    return f"{prefix}{{{name}:path}}"


def doc_path_for(path: str) -> str:
    """Document route beside the UI: "/swagger/*any" -> "/swagger/doc.json"."""
    prefix, _ = _split_wildcard(path)
    if not prefix.endswith("/"):
        prefix = f"{prefix}/"
    return f"{prefix}{DOC_FILENAME}"


async def _call(handler: Handler, request: Request) -> Response:
    response = handler(request)
    if inspect.isawaitable(response):
        response = await response
    return response


def passthrough(handler: Handler) -> Callable[[Request], Awaitable[Response]]:
    """Expose ``handler`` as an endpoint FastAPI hands the raw request to."""

    async def endpoint(request: Request) -> Response:
        return await _call(handler, request)

    return endpoint


def gated(gate: AccessGate, handler: Handler) -> Callable[[Request], Awaitable[Response]]:
    """Put ``gate`` in front of ``handler``.

    A denial short-circuits with ``{"error": reason}`` and the denial's status;
    otherwise the request reaches ``handler`` untouched.
    """

    async def endpoint(request: Request) -> Response:
        ctx = StarletteRequestContext(request, gate.policy.trusted_proxies)
        denial = gate.evaluate(ctx)
        if denial is not None:
            return JSONResponse(status_code=denial.status_code, content=denial.to_dict())
        return await _call(handler, request)

    return endpoint


def attach_docs(
    router: RouteRegistrar,
    *options: Option,
    handler: Handler | None = None,
) -> AccessGate:
    """Register the documentation routes on ``router``.

    Args:
        router: FastAPI app or APIRouter
        *options: Option setters applied to the default policy, in order
        handler: Documentation handler; defaults to the bundled Swagger UI

    Returns:
        The gate guarding the routes
    """
    policy = build_policy(*options)
    gate = AccessGate(policy)
    docs_handler = handler or swagger_handler

    protected = gated(gate, docs_handler)
    doc_path = doc_path_for(policy.path)

    # Document route first so the UI catch-all does not shadow it
    router.add_api_route(
        doc_path,
        protected if policy.protect_doc_json else passthrough(docs_handler),
        methods=DOC_METHODS,
        include_in_schema=False,
    )
    router.add_api_route(
        route_pattern(policy.path),
        protected,
        methods=UI_METHODS,
        include_in_schema=False,
    )

    logger.info(
        "docs_routes_attached",
        extra={
            "ui_path": policy.path,
            "doc_path": doc_path,
            "protect_doc_json": policy.protect_doc_json,
        },
    )
    return gate
