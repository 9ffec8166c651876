"""orjson-backed JSON response, used as the application's default."""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    """JSONResponse that serializes with orjson.

    Handles datetimes, UUIDs and Pydantic models; keys are sorted so output
    is stable.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - any JSON-serializable content
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)
        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)
