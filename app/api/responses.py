"""JSON responses that are never cached."""

from typing import Any

from fastapi.responses import JSONResponse

# Live status changes constantly; nothing here may be cached.
NO_STORE_HEADERS = {
    "cache-control": "no-store, max-age=0",
    "pragma": "no-cache",
    "expires": "0",
}


def no_store_json(payload: dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=payload,
        status_code=status_code,
        headers=NO_STORE_HEADERS,
        media_type="application/json; charset=utf-8",
    )
