"""Wrapped JSON responses: {success, data?, error?}."""

from typing import Any

from fastapi import Response

from expense_app.domain.schemas.envelope import ApiResponse


def _render(body: ApiResponse, status_code: int) -> Response:
    return Response(
        content=body.model_dump_json(by_alias=True, exclude_none=True),
        status_code=status_code,
        media_type="application/json",
    )


def ok(data: Any) -> Response:
    return _render(ApiResponse(success=True, data=data), 200)


def fail(status_code: int, message: str) -> Response:
    return _render(ApiResponse(success=False, error=message), status_code)
