from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from rasgen.config import load_settings
from rasgen.errors import register_error_handlers
from rasgen.routers import badge, docs, github, npm, yurba

settings = load_settings()

app = FastAPI(title="Rasgen Badge API", version="1.1.0")
app.state.settings = settings

logging.getLogger("rasgen").setLevel(settings.log_level)
logger = logging.getLogger("rasgen.api.requests")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
logger.propagate = False
logger.setLevel(logging.INFO)

# Query parameter that names the upstream subject, per badge family.
_SUBJECT_PARAMS = {"github": "repo", "npm": "package", "yurba": "dialog_id"}


def _badge_family(path: str) -> str:
    """``github`` for /api/github, ``docs`` for /api, ``other`` outside /api."""
    parts = [p for p in path.split("/") if p]
    if not parts or parts[0] != "api":
        return "other"
    return parts[1] if len(parts) > 1 else "docs"


def _upstream_subject(family: str, request: Request) -> str:
    param = _SUBJECT_PARAMS.get(family)
    if param is None:
        return "-"
    return request.query_params.get(param) or "-"


def _request_origin(request: Request) -> tuple[str, str]:
    """(client address, request id) as seen behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        client = forwarded.split(",", 1)[0].strip()
    else:
        client = request.client.host if request.client and request.client.host else "unknown"
    request_id = request.headers.get("x-request-id") or request.headers.get("x-vercel-id") or "none"
    return client, request_id


def _log_badge_request(request: Request, status_code: int, elapsed_ms: float, error: str | None) -> None:
    family = _badge_family(request.url.path)
    client, request_id = _request_origin(request)
    level = logging.WARNING if status_code >= 500 else logging.INFO
    logger.log(
        level,
        "badge_request family=%s subject=%s style=%s status=%s elapsed_ms=%.2f client=%s request_id=%s error=%s",
        family,
        _upstream_subject(family, request),
        request.query_params.get("style") or "flat",
        status_code,
        elapsed_ms,
        client,
        request_id,
        error or "none",
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)
register_error_handlers(app)


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""
    return RedirectResponse(url="/docs")


app.include_router(docs.router, prefix="/api", tags=["docs"])
app.include_router(badge.router, prefix="/api", tags=["badge"])
app.include_router(github.router, prefix="/api", tags=["github"])
app.include_router(npm.router, prefix="/api", tags=["npm"])
app.include_router(yurba.router, prefix="/api", tags=["yurba"])


@app.middleware("http")
async def log_request_timing(request: Request, call_next):
    start = time.perf_counter()
    status_code = 500
    error: str | None = None
    response: Response | None = None
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    except Exception as exc:
        error = exc.__class__.__name__
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if response is not None:
            response.headers["x-rasgen-runtime-ms"] = f"{max(0.1, elapsed_ms):.4f}"
        current = request.app.state.settings
        if elapsed_ms >= current.slow_request_ms or current.log_all_requests or status_code >= 500:
            _log_badge_request(request, status_code, elapsed_ms, error)
