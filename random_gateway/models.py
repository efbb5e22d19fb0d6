from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, model_validator

Number = Union[int, float]


class RangeRequest(BaseModel):
    """Bounds sent to the random function as its JSON payload."""

    model_config = ConfigDict(frozen=True)

    min: int
    max: int

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min > self.max:
            raise ValueError("min must not be greater than max")
        return self

    def describe(self) -> str:
        return f"min={self.min}, max={self.max}"


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    value: Number
    logs: str = ""


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    reason: str


InvocationOutcome = Union[Success, Failure]


class AggregateResult(BaseModel):
    attempted: int
    succeeded: int
    failed_reasons: List[str]
    # successful values in arrival order
    values: List[Number]
