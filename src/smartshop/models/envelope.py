"""
Response wrappers - the ``{success, data, message, errorCode}`` envelope and
the paged list every list endpoint returns inside it.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, computed_field, model_validator

from smartshop.models.wire import API_RESPONSE_WIRE_NAMES, PAGED_RESPONSE_WIRE_NAMES, wire_config

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Every call resolves to exactly one of: success with (optional) data, or
    failure with a message and/or error code.
    """

    model_config = wire_config(API_RESPONSE_WIRE_NAMES, "ApiResponse")

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error_code: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_data_on_failure(cls, values: Any) -> Any:
        # a failed envelope keeps its message and code; stray data is discarded
        if isinstance(values, dict) and values.get("success") in (False, "false") and "data" in values:
            return {k: v for k, v in values.items() if k != "data"}
        return values


class PagedResponse(BaseModel, Generic[T]):
    model_config = wire_config(PAGED_RESPONSE_WIRE_NAMES, "PagedResponse")

    items: tuple[T, ...] = ()
    total_count: int = Field(..., ge=0)
    page: int = Field(..., ge=1, description="1-based page number")
    page_size: int = Field(..., ge=1)

    @computed_field
    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total_count
