"""HTTP rendering of workflow results.

Every route returns the same envelope: ``{"status": "success", ...}`` or
the Failure body, with the HTTP status derived from the error kind.
"""

from __future__ import annotations

from typing import Any

from fastapi import UploadFile, status
from fastapi.responses import JSONResponse

from shared_kernel.errors import ErrorKind, FleetError
from shared_kernel.results import Failure
from shared_kernel.uploads import UploadedFile

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNSAFE_CONTENT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.DEPENDENCY: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CONSISTENCY_GAP: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def failure_response(failure: Failure) -> JSONResponse:
    """Render a Failure with the status code for its kind."""
    return JSONResponse(
        status_code=STATUS_BY_KIND[failure.kind],
        content=failure.as_dict(),
    )


def error_response(error: FleetError) -> JSONResponse:
    """Render a typed error raised outside a workflow (e.g. by a dependency)."""
    return failure_response(Failure.from_error(error))


def success_body(data: Any, message: str = "") -> dict[str, Any]:
    """Build the success envelope around serialized data."""
    body: dict[str, Any] = {"status": "success", "data": data}
    if message:
        body["message"] = message
    return body


async def read_uploads(files: list[UploadFile] | None) -> tuple[UploadedFile, ...]:
    """Read multipart file parts into memory for one request."""
    uploads = []
    for file in files or []:
        uploads.append(
            UploadedFile(
                filename=file.filename or "",
                content=await file.read(),
                content_type=file.content_type or "application/octet-stream",
            )
        )
    return tuple(uploads)
