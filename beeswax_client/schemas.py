"""Beeswax operation result schema.

Every entity operation returns an OperationResult. Expected negative
outcomes (invalid write body, object not found) come back with
``success=False``; anything else is raised as BeeswaxAPIError.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

NOT_FOUND_MESSAGE = "Not found"
EMPTY_BODY_MESSAGE = "Body must be non-empty object"


class OperationResult(BaseModel):
    """Uniform result of a Beeswax entity operation."""

    model_config = ConfigDict(extra="forbid")

    success: bool = Field(..., description="Whether the operation succeeded")
    payload: Any = Field(default=None, description="Record(s) returned by Beeswax")
    code: int | None = Field(default=None, description="Status code for unsuccessful results")
    message: str | None = Field(default=None, description="Reason for unsuccessful results")

    @classmethod
    def ok(cls, payload: Any) -> "OperationResult":
        return cls(success=True, payload=payload)

    @classmethod
    def failure(cls, message: str, code: int = 400) -> "OperationResult":
        return cls(success=False, code=code, message=message)

    @classmethod
    def not_found(cls) -> "OperationResult":
        return cls.failure(NOT_FOUND_MESSAGE)

    @classmethod
    def empty_body(cls) -> "OperationResult":
        return cls.failure(EMPTY_BODY_MESSAGE)
