"""Uniform response envelope returned by every item API operation.

On the wire: { isSuccess: bool, result: T | null, errorMessages: [str] }
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

UNSPECIFIED_FAILURE = "The request failed without an error message."


class ResponseEnvelope(BaseModel, Generic[T]):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_success: bool
    result: Optional[T] = None
    error_messages: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def failure_has_messages(self):
        if not self.is_success and not self.error_messages:
            self.error_messages = [UNSPECIFIED_FAILURE]
        return self

    @classmethod
    def ok(cls, result: Optional[T] = None) -> "ResponseEnvelope[T]":
        return cls(is_success=True, result=result)

    @classmethod
    def fail(cls, *messages: str) -> "ResponseEnvelope[T]":
        return cls(is_success=False, error_messages=list(messages))
