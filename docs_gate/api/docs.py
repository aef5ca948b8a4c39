"""Default documentation handler.

Serves the Swagger UI page and the host application's OpenAPI document
from the same endpoint, depending on the requested resource.
"""

from __future__ import annotations

from fastapi.openapi.docs import get_swagger_ui_html
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from docs_gate.constants import DOC_FILENAME

_INDEX_RESOURCES = {"", "index.html"}


def _resource(request: Request) -> str:
    # The catch-all is the last segment of the route pattern
    params = list(request.path_params.values())
    if params:
        return str(params[-1]).strip("/")
    if request.url.path.endswith(f"/{DOC_FILENAME}"):
        return DOC_FILENAME
    return ""


def _doc_url(request: Request, resource: str) -> str:
    """Absolute document URL beside the page, under any router prefix."""
    base = request.url.path.rstrip("/")
    if resource and base.endswith(resource):
        base = base[: -len(resource)]
    return f"{base.rstrip('/')}/{DOC_FILENAME}"


async def swagger_handler(request: Request) -> Response:
    """Serve the UI page, doc.json, or a 404 for anything else.

    The UI page references the document by an absolute path derived from
    the request path, so "/docs" and "/swagger/index.html" both point at
    the document route registered beside them.
    """
    resource = _resource(request)

    if resource == DOC_FILENAME:
        return JSONResponse(request.app.openapi())

    if resource in _INDEX_RESOURCES:
        return get_swagger_ui_html(
            openapi_url=_doc_url(request, resource),
            title=f"{request.app.title} - Swagger UI",
        )

    return JSONResponse(status_code=404, content={"error": "not found"})
