from pydantic import BaseModel, ConfigDict, Field

from novels_api.constants import ENVELOPE_ERROR


class ErrorResponseModel(BaseModel):  # type: ignore[misc]
    """Body of every error response."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = ENVELOPE_ERROR
    status_code: int = Field(alias="statusCode")
    message: str
    fields: list[str] | None = None


class HealthResponse(BaseModel):  # type: ignore[misc]
    """Response model for health check endpoint."""

    status: str
    database: str
