"""Enveloppe de réponse commune : {success, message, data?, errors?}"""

from typing import Any, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse


def envelope(success: bool, message: str, data: Any = None, errors: Optional[List[dict]] = None) -> dict:
    body = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    return body


def success(message: str, data: Any = None) -> dict:
    return envelope(True, message, data)


def created(message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=envelope(True, message, data))


def error(message: str, status_code: int, errors: Optional[List[dict]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(False, message, errors=errors))
