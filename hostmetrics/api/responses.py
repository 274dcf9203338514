from __future__ import annotations

import json
from typing import Any

from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from hostmetrics.errors import MetricsError

JSON_MEDIA_TYPE = "application/json"


def to_json(value: Any) -> str:
    """Strings pass through verbatim; everything else is JSON-encoded."""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return json.dumps(value.model_dump(mode="json"))
    if isinstance(value, MetricsError):
        return json.dumps(value.as_dict())
    if isinstance(value, BaseException):
        return json.dumps({"error": str(value)})
    return json.dumps(value)


def success(value: Any) -> Response:
    return Response(content=to_json(value), status_code=200, media_type=JSON_MEDIA_TYPE)


def failure(error: Any) -> Response:
    return Response(content=to_json(error), status_code=500, media_type=JSON_MEDIA_TYPE)


def health_ok() -> Response:
    return PlainTextResponse("ok", status_code=200)


def not_found() -> Response:
    return Response(status_code=404)
