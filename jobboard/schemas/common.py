from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope every route answers with."""

    success: bool = True
    message: str | None = None
    data: T | None = None
