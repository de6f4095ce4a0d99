# Backend/app/main.py
from __future__ import annotations

# --- ensure project root is on sys.path so `api.*`, `app.*` and `services.*` are importable ---
import sys
from pathlib import Path
THIS_FILE = Path(__file__).resolve()
BACKEND_ROOT = THIS_FILE.parents[1]  # .../Backend
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
# -------------------------------------------------------------------------

from typing import Dict, Optional

from fastapi import FastAPI, Response, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Logging & request-id ---
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response as StarletteResponse

from app.config import load_feeds_config, settings
from app.core.logging import configure_logging, logger
from app.core.request_id import REQUEST_ID_HEADER, new_request_id, reset_request_id, set_request_id
from app.deps.feeds import build_http_client
from services.source_errors import SourceError

from api.routers.feeds import router as feeds_router

configure_logging(service_name="gateway", level=settings.LOG_LEVEL)

app = FastAPI(
    title="Feeds Gateway",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


def _cors_headers(origin: Optional[str]) -> Dict[str, str]:
    allowed = settings.CORS_ALLOW_ORIGINS
    if "*" in allowed:
        return {"Access-Control-Allow-Origin": "*"}
    if origin and origin in allowed:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


@app.on_event("startup")
async def _startup() -> None:
    # A broken config document is fatal; missing blocks only disable their routes.
    config = load_feeds_config(settings)
    app.state.feeds_config = config
    app.state.http_client = build_http_client(settings)
    missing = config.missing_sources()
    if missing:
        logger.warning("feeds_sources_unconfigured", sources=missing)
    logger.info("feeds_sources_configured", sources=config.configured_sources())


@app.on_event("shutdown")
async def _shutdown() -> None:
    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = set_request_id(req_id)

        logger.info("request_started", method=request.method, path=str(request.url.path))
        try:
            response: StarletteResponse = await call_next(request)
        except Exception as exc:
            logger.error("request_exception", error=str(exc.__class__.__name__))
            reset_request_id(token)
            raise
        logger.info("request_ended", status_code=response.status_code)
        response.headers[REQUEST_ID_HEADER] = req_id
        # Only successful reads may be cached by intermediaries
        if response.status_code < 400 and "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = settings.CACHE_CONTROL
        reset_request_id(token)
        return response


# --- CORS ---
# Last added = outermost: RequestIdMiddleware below wraps CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

app.add_middleware(RequestIdMiddleware)


@app.exception_handler(SourceError)
async def source_error_handler(request: Request, exc: SourceError) -> JSONResponse:
    logger.warning(
        "source_error",
        source=exc.source,
        error_kind=exc.kind,
        status_code=exc.status_code,
        error=str(exc),
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    origin = request.headers.get("origin") or request.headers.get("Origin")
    headers = dict(exc.headers or {})
    headers.update(_cors_headers(origin))
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    origin = request.headers.get("origin") or request.headers.get("Origin")
    headers = _cors_headers(origin)
    logger.exception("unhandled_exception", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"}, headers=headers)

# --- Health endpoints ---
@app.get("/")
async def root():
    return {"ok": True, "app": "Feeds Gateway", "version": settings.APP_VERSION}

@app.head("/")
async def root_head():
    return Response(status_code=200)

@app.get("/healthz")
async def healthz():
    return {"status": "healthy"}

@app.get("/health")
async def health():
    return {"ok": True}

# --- Universele preflight ---
@app.options("/{rest_of_path:path}")
async def any_preflight(rest_of_path: str) -> Response:
    return Response(status_code=204)


app.include_router(feeds_router)

logger.info("routers_registered", routers=["feeds"])
