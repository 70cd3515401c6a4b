"""eSIM Check backend — FastAPI application entry point.

Provides /api/search-devices and /api/check-esim for the bundled frontend.
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ValidationError

from esim_check import messages
from esim_check.config import settings
from esim_check.errors import EsimCheckError, ErrorKind
from esim_check.orchestrator.lookup import LookupService
from esim_check.orchestrator.schemas import CheckEsimRequest, SearchDevicesRequest, SearchDevicesResponse

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger("esim_check")


# ═══════════════ HELPERS ═══════════════

async def _parse_body(request: Request, model: type[BaseModel]) -> BaseModel | None:
    """Parse the JSON body into ``model``; None when it is unusable."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if body is None:
        body = {}
    try:
        return model.model_validate(body)
    except ValidationError:
        return None


def _error_response(error: Exception, failure_message: str) -> JSONResponse:
    """Map an exception to the API's error body."""
    if isinstance(error, EsimCheckError):
        kind = error.kind
    else:
        kind = ErrorKind.INTERNAL

    if kind.http_status >= 500:
        return JSONResponse(
            status_code=kind.http_status,
            content={"error": failure_message, "details": str(error)},
        )

    content: dict = {"error": str(error)}
    if kind.response_code is not None:
        content["code"] = kind.response_code
    return JSONResponse(status_code=kind.http_status, content=content)


# ═══════════════ APP ═══════════════

def create_app(service: LookupService | None = None, public_dir: Path | None = None) -> FastAPI:
    """Build the application around one LookupService (its throttle and cache state)."""
    lookup = service or LookupService.from_settings(settings)
    frontend_dir = Path(public_dir or settings.public_dir).resolve()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "eSIM backend starting | catalog=%s | frontend=%s",
            lookup.catalog.base_url, frontend_dir,
        )
        yield
        logger.info("eSIM backend shutting down | cached=%d", len(lookup.cache))

    app = FastAPI(
        title="eSIM Check API",
        description="Checks whether a phone supports eSIM using a phone spec catalog",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.lookup = lookup

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS", "GET"],
        allow_headers=["Content-Type"],
    )

    # ═══════════════ ENDPOINTS ═══════════════

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "cacheSize": len(lookup.cache),
            "blockedFor": round(lookup.gate.blocked_for(), 1),
        }

    @app.post("/api/search-devices")
    async def search_devices(request: Request):
        search_req = await _parse_body(request, SearchDevicesRequest)
        if search_req is None:
            return JSONResponse(status_code=400, content={"error": messages.INVALID_BODY})

        start = time.monotonic()
        try:
            results = await lookup.search_devices(search_req.query)
        except Exception as e:
            _log_failure("Search", e, start)
            return _error_response(e, messages.SEARCH_FAILED)

        return SearchDevicesResponse(results=results).model_dump()

    @app.post("/api/check-esim")
    async def check_esim(request: Request):
        check_req = await _parse_body(request, CheckEsimRequest)
        if check_req is None:
            return JSONResponse(status_code=400, content={"error": messages.INVALID_BODY})

        start = time.monotonic()
        try:
            payload, from_cache = await lookup.check_esim(check_req.query, check_req.deviceId)
        except Exception as e:
            _log_failure("eSIM check", e, start)
            return _error_response(e, messages.CHECK_FAILED)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "eSIM check completed | found=%s | cache=%s | %dms",
            payload.found, from_cache, elapsed_ms,
        )
        return payload.to_response(from_cache=from_cache)

    # ═══════════════ FRONTEND ═══════════════

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        index = frontend_dir / "index.html"
        if full_path:
            candidate = (frontend_dir / full_path).resolve()
            if candidate.is_relative_to(frontend_dir) and candidate.is_file():
                return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        return JSONResponse(status_code=404, content={"error": "Not Found"})

    return app


def _log_failure(label: str, error: Exception, start: float) -> None:
    elapsed_ms = int((time.monotonic() - start) * 1000)
    if isinstance(error, EsimCheckError) and error.kind.http_status < 500:
        logger.info("%s rejected | kind=%s | %dms", label, error.kind.value, elapsed_ms)
    else:
        logger.error(
            "%s failed | %dms | %s", label, elapsed_ms, str(error)[:300],
            exc_info=not isinstance(error, EsimCheckError),
        )


app = create_app()


def main():
    """Run the server."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
