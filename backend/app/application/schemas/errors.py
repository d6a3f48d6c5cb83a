"""Error envelope shared by every failing response."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    details: Any | None = None
