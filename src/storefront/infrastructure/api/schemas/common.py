"""Uniform response envelope shared by every endpoint."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope: {success, message, result?}.

    The result key is left out entirely when there is no result.
    """

    success: bool = Field(True, description="Whether the request succeeded")
    message: str = Field("", description="Human-readable status message")
    result: T | None = Field(None, description="Payload of a successful request")

    @model_serializer(mode="wrap")
    def _omit_empty_result(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.result is None:
            data.pop("result", None)
        return data


def error_body(message: str) -> dict[str, Any]:
    """Body of a failed request."""
    return {"success": False, "message": message}
