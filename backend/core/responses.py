"""Uniform response envelope.

Every endpoint answers with::

    {"message": {"success" | "warning" | "danger": "..."},
     "data": ...,
     "error": {"<field>": "<message>"} | null}

Call sites pass the wrapper key for ``data`` explicitly (``key="inventory"``);
without a key the payload is returned as-is.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

_DEFAULT_SUCCESS = {
    "GET": "{entity} retrieved successfully",
    "POST": "{entity} added successfully",
    "PUT": "{entity} updated successfully",
    "DELETE": "{entity} deleted successfully",
}


def _message_level(status_code: int) -> str:
    if status_code < 300:
        return "success"
    if status_code in (status.HTTP_400_BAD_REQUEST, status.HTTP_404_NOT_FOUND):
        return "warning"
    return "danger"


def _default_message(method: str, status_code: int, entity: str) -> str:
    entity = entity or "Data"
    if status_code < 300:
        template = _DEFAULT_SUCCESS.get(method, "Request completed")
        return template.format(entity=entity)
    if status_code == status.HTTP_400_BAD_REQUEST:
        return "Invalid request"
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return "Access denied"
    if status_code == status.HTTP_404_NOT_FOUND:
        return f"{entity} not found"
    return "An unexpected error occurred"


def build_envelope(
    method: str,
    data: Any = None,
    *,
    key: Optional[str] = None,
    entity: str = "",
    status_code: int = status.HTTP_200_OK,
    message: str = "",
    errors: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    text = message or _default_message(method.upper(), status_code, entity)
    payload = None
    if data is not None and errors is None:
        payload = {key: data} if key else data

    return {
        "message": {_message_level(status_code): text},
        "data": payload,
        "error": errors,
    }


def api_response(
    request: Request,
    data: Any = None,
    *,
    key: Optional[str] = None,
    entity: str = "",
    status_code: int = status.HTTP_200_OK,
    message: str = "",
    errors: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    envelope = build_envelope(
        request.method,
        data,
        key=key,
        entity=entity,
        status_code=status_code,
        message=message,
        errors=errors,
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope))
