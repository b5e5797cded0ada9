# billbook/api/v1/envelope.py
"""
JSON envelope shared by every v1 endpoint::

    {"status": "ok" | "error", "data": ..., "message": ..., "errors": [...]}

Successful handlers return :func:`ok` / :func:`paginated` dicts; failures
go out through :func:`error_response` so they carry a non-2xx status code.
"""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class Envelope(BaseModel):
    status: str = "ok"
    data: Any = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


class Page(BaseModel):
    items: list[Any]
    total: int
    limit: int
    offset: int
    has_more: bool


def ok(data: Any = None, message: str | None = None) -> dict:
    return Envelope(data=data, message=message).model_dump()


def error_response(status_code: int, message: str, errors: list[dict[str, Any]] | None = None) -> JSONResponse:
    """``errors`` holds ``{"field", "message"}`` pairs for form validation failures."""
    body = Envelope(status="error", message=message, errors=errors).model_dump()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def paginated(items: list, total: int, limit: int, offset: int) -> dict:
    page = Page(items=items, total=total, limit=limit, offset=offset, has_more=offset + limit < total)
    return ok(data=page.model_dump())
