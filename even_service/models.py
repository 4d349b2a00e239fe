from pydantic import BaseModel, ConfigDict, Field, StrictInt


class NumberRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    number: StrictInt = Field(..., description="Integer to test for evenness")


class EvenResponse(BaseModel):
    is_even: bool


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
