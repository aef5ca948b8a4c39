from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request

from docs_gate.api.routes import attach_docs
from docs_gate.core.logging import configure_logging, get_logger
from docs_gate.settings import GateSettings, get_settings

logger = get_logger(__name__)


def _install_observability_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_middleware(request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "route": request.url.path,
                    "status_code": 500,
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            raise

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "route": request.url.path,
                "status_code": response.status_code,
                "latency_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return response


async def hello() -> dict[str, str]:
    """Public example endpoint."""
    return {"msg": "hello world"}


def create_app(*, settings: GateSettings | None = None) -> FastAPI:
    resolved_settings = settings or get_settings()

    # Built-in docs stay off; the gated routes below replace them
    app = FastAPI(
        title="docs-gate example",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = resolved_settings

    _install_observability_middleware(app)

    app.add_api_route("/hello", hello, methods=["GET"], tags=["example"])
    attach_docs(app, *resolved_settings.options())

    return app


def run(host: str = "0.0.0.0", port: int = 8080) -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)
    uvicorn.run(create_app(settings=settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
