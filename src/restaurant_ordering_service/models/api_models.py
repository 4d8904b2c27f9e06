"""Response envelope shared by every API endpoint except the health check."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Normalized ``{code, data, msg}`` response wrapper.

    ``code`` mirrors the HTTP status of the response.
    """

    code: int = Field(..., description="Status code mirroring the HTTP status")
    data: T | None = Field(None, description="Payload, null on failure")
    msg: str = Field(..., description="Human-readable outcome message")


class UploadResult(BaseModel):
    """Public location of a stored upload."""

    url: str


def envelope(code: int, msg: str, data: object = None) -> dict[str, object]:
    """Build a plain envelope dict for exception handlers.

    Args:
        code: Status code mirrored from the HTTP response
        msg: Message for the client
        data: Optional payload

    Returns:
        dict: JSON-serializable envelope
    """
    return {"code": code, "data": data, "msg": msg}
