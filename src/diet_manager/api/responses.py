"""Response envelope helpers."""

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(
    data: object = None,
    *,
    message: str | None = None,
    count: int | None = None,
) -> dict[str, object]:
    """Wrap a successful result as {success, message?, data?, count?}."""
    body: dict[str, object] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if count is not None:
        body["count"] = count
    return body


def error_response(status_code: int, message: str) -> JSONResponse:
    """Render a failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )
