"""Helpers turning multipart form input into service arguments."""

from typing import TypeVar

from fastapi import UploadFile
from pydantic import BaseModel, ValidationError

from app.application.services import IncomingFile
from app.config import get_settings
from app.domain.exceptions import InputValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_upload(upload: UploadFile | None) -> IncomingFile | None:
    """Read an uploaded file into memory.

    At most one byte more than the upload limit is read, which is enough
    for the size check to reject oversized files.
    """
    if upload is None:
        return None
    content = await upload.read(get_settings().max_upload_bytes + 1)
    return IncomingFile(
        filename=upload.filename or "upload",
        content_type=upload.content_type,
        content=content,
    )


def parse_form(model: type[ModelT], **fields) -> ModelT:
    """Validate form fields against ``model``; unset (None) fields are omitted."""
    try:
        return model(**{name: value for name, value in fields.items() if value is not None})
    except ValidationError as exc:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise InputValidationError("Validation failed", details=errors) from exc
