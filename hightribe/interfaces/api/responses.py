"""Success envelopes and response headers shared by the API routers."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

LIST_CACHE_CONTROL = "max-age=60, s-maxage=300, stale-while-revalidate=3600"


def success(status_code: int = status.HTTP_200_OK, **fields: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, **fields})


def cache_list_response(request: Request, response: JSONResponse) -> JSONResponse:
    """Let shared caches hold user listings, in production only."""
    if request.app.state.settings.is_production:
        response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    return response
