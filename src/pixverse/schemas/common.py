"""
Common schemas shared across control-plane endpoints.

Every control-plane response is wrapped in the same envelope: a numeric
error code, a message and the endpoint-specific payload.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

# Type variable for the envelope payload
T = TypeVar("T")


class WireModel(BaseModel):
    """
    Base schema for request and response bodies.

    Fields may be populated by Python name or by their wire alias;
    unknown response fields are kept.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to a JSON-ready request body, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Envelope(BaseModel, Generic[T]):
    """
    Control-plane response wrapper.

    Attributes:
        err_code: Application error code (0 = success)
        err_msg: Human-readable message
        resp: Endpoint payload, only meaningful when err_code is 0
    """

    model_config = ConfigDict(populate_by_name=True)

    err_code: int = Field(alias="ErrCode", description="Application error code")
    err_msg: str = Field(default="", alias="ErrMsg", description="Error message")
    resp: T = Field(alias="Resp", description="Endpoint payload")

    @property
    def ok(self) -> bool:
        """Whether the envelope reports success."""
        return self.err_code == 0
