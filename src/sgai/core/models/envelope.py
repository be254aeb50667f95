from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class ApiResult(BaseModel, Generic[T]):
    """Uniform outcome returned by every public operation.

    Exactly one of `data` (success) and `error` (error) is populated. Error
    envelopes always report `elapsed_ms == 0`.
    """

    status: Literal["success", "error"]
    data: Optional[T] = None
    error: Optional[str] = None
    elapsed_ms: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_slots(self) -> "ApiResult[T]":
        if self.status == "success":
            if self.data is None or self.error is not None:
                raise ValueError("success envelope must carry data and no error")
        else:
            if self.data is not None or self.error is None:
                raise ValueError("error envelope must carry an error message and no data")
            if self.elapsed_ms != 0:
                raise ValueError("error envelope must report elapsed_ms == 0")
        return self

    @property
    def is_success(self) -> bool:
        return self.status == "success"
