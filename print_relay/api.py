import json
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from print_relay import env
from print_relay.audit import audit
from print_relay.errors import RequestError
from print_relay.models import PrintJobIn
from print_relay.relay import relay
from print_relay.responses import (
    outcome_response,
    request_error_response,
    unexpected_error_response,
)
from print_relay.transports import Transport, default_transport

# -----------------------------
# Logging
# -----------------------------
logging.basicConfig(level=env.LOG_LEVEL)
logger = logging.getLogger("print_relay")

ENDPOINTS = {
    "health": "/health",
    "info": "/api/info",
    "print": "/api/print",
}

app = FastAPI(title=env.APP_NAME, version=env.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=env.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_transport() -> Transport:
    return default_transport


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("[%s] %s %s", _now(), request.method, request.url.path)
    return await call_next(request)


@app.on_event("startup")
def _startup():
    logger.info("%s %s running (%s)", env.APP_NAME, env.APP_VERSION, env.APP_ENV)
    logger.info("Print endpoint: %s, health check: %s", ENDPOINTS["print"], ENDPOINTS["health"])
    audit("server_startup", {"version": env.APP_VERSION, "environment": env.APP_ENV})


# -----------------------------
# Error handlers
# -----------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            {
                "success": False,
                "error": "Endpoint not found",
                "availableEndpoints": list(ENDPOINTS.values()),
            },
            status_code=404,
        )
    return JSONResponse({"success": False, "error": exc.detail}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.exception("Server error: %s", exc)
    error = "Internal server error" if env.APP_ENV == "production" else str(exc)
    return JSONResponse({"success": False, "error": error}, status_code=500)


# -----------------------------
# Endpoints
# -----------------------------
@app.get("/health")
def health():
    return {
        "status": "ok",
        "message": "Print server is running",
        "timestamp": _now(),
        "version": env.APP_VERSION,
    }


@app.get("/api/info")
def info():
    return {
        "name": env.APP_NAME,
        "version": env.APP_VERSION,
        "environment": env.APP_ENV,
        "endpoints": ENDPOINTS,
    }


def _parse_body(raw: bytes) -> dict:
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        logger.warning("Request body is not valid JSON")
        return {}
    return body if isinstance(body, dict) else {}


@app.post(
    "/api/print",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": PrintJobIn.model_json_schema()}},
        }
    },
)
async def print_job(request: Request, transport: Transport = Depends(get_transport)):
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > env.MAX_BODY_BYTES:
        return JSONResponse({"success": False, "error": "Request body too large"}, status_code=413)

    raw = await request.body()
    if len(raw) > env.MAX_BODY_BYTES:
        return JSONResponse({"success": False, "error": "Request body too large"}, status_code=413)

    body = _parse_body(raw)
    ip = body.get("ip")
    port = body.get("port")
    data = body.get("data")

    size = len(data) if isinstance(data, (list, str)) else 0
    logger.info("Print request received for %s:%s (%d bytes)", ip, port or env.DEFAULT_PRINTER_PORT, size)
    audit("print_received", {"ip": ip, "port": port, "size": size})

    try:
        outcome = await relay(ip, port, data, transport=transport)
    except RequestError as e:
        logger.error("Invalid print request: %s", e.error)
        audit("print_rejected", {"ip": ip, "error": e.error})
        return request_error_response(e)
    except Exception as e:
        logger.exception("Unexpected error while relaying to %s: %s", ip, e)
        audit("print_failed", {"ip": ip, "error": str(e)})
        return unexpected_error_response(e)

    if outcome.success:
        audit("print_done", {"ip": ip, "port": port, "size": size})
    else:
        audit("print_failed", {"ip": ip, "port": port, "error": outcome.error})
    return outcome_response(outcome)
