import os
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mandrill_demo.dispatcher.service import DispatchResult

router = APIRouter()

# Last dispatch, reported by /healthz
_last_dispatch: Optional[Dict[str, Any]] = None

OUTPUT_PREVIEW_CHARS = 500


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def update_last_dispatch(result: DispatchResult) -> None:
    global _last_dispatch

    _last_dispatch = {
        "time": _now(),
        "operation": result.operation,
        "success": result.success,
    }
    if result.exit_code is not None:
        _last_dispatch["exit_code"] = result.exit_code
    if result.output:
        _last_dispatch["output_preview"] = result.output[:OUTPUT_PREVIEW_CHARS]
    if not result.success:
        _last_dispatch["error"] = result.message[:OUTPUT_PREVIEW_CHARS]


def get_last_dispatch() -> Optional[Dict[str, Any]]:
    return _last_dispatch


@router.get("/healthz")
def health_check() -> JSONResponse:
    """Status with the last dispatch and observability settings."""
    response: Dict[str, Any] = {
        "status": "ok",
        "timestamp": _now(),
        "api_key_configured": bool(os.getenv("MANDRILL_API_KEY")),
    }
    last = get_last_dispatch()
    if last:
        response["last_dispatch"] = last
    response["observability"] = {
        "enabled": os.getenv("OBS_ENABLED", "false").lower() == "true",
        "sentry_configured": bool(os.getenv("SENTRY_DSN")),
    }
    return JSONResponse(status_code=200, content=response)


@router.get("/healthz/live")
def liveness_check() -> JSONResponse:
    return JSONResponse(status_code=200, content={"status": "alive", "timestamp": _now()})
