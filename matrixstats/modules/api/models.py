"""
Matrixstats shared data models.

These models define the structure of all data passed between the API,
its clients and peer services.
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Request Models (API Input)


class LoginRequest(BaseModel):
    """Credentials exchanged for a bearer token."""

    username: str = Field(
        ...,
        description="Caller identifier",
        validation_alias=AliasChoices("username", "identifier"),
    )
    password: str = Field(
        ...,
        description="Caller secret",
        validation_alias=AliasChoices("password", "secret"),
    )


class StatsRequest(BaseModel):
    """
    Batch of matrices to aggregate.

    Cells are deliberately untyped: non-numeric cells are skipped by the
    aggregator rather than rejected here.
    """

    matrices: List[List[Any]] = Field(..., description="Matrices, each a list of rows")


# Response Models (API Output)


class LoginResponse(BaseModel):
    """Successful login."""

    success: bool = True
    token: str
    message: str = "Login successful"


class StatsResponse(BaseModel):
    """
    Statistics over a matrix batch.

    Numeric fields are None when the value overflowed past the float range.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    max_value: Optional[float] = Field(..., alias="maxValue")
    min_value: Optional[float] = Field(..., alias="minValue")
    mean: Optional[float] = Field(..., alias="promedio")
    total_sum: Optional[float] = Field(..., alias="totalSum")
    is_diagonal: bool = Field(..., alias="isDiagonal")
    total_elements: int = Field(..., alias="totalElements")
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    success: bool = False
    message: str


class HealthResponse(BaseModel):
    """Liveness report."""

    status: str = "ok"
    service: str
    timestamp: str
