# File: user_api/api/responses.py

"""
Response envelope helpers.

Every body has a ``success`` flag. Successful bodies carry ``data`` (plus an
optional ``message``, ``pagination`` or ``count``); failures carry
``message`` and, depending on the failure, ``error`` or ``errors``.
"""

from typing import Any, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return jsonable_encoder(value)


def success(
    data: Any,
    *,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    **meta: Any,
) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body["data"] = _dump(data)
    for key, value in meta.items():
        if value is not None:
            body[key] = _dump(value)
    return JSONResponse(status_code=status_code, content=body)


def failure(
    status_code: int,
    message: str,
    *,
    error: Optional[str] = None,
    errors: Optional[List[str]] = None,
) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)
