"""Data models for forecast narration."""

from pydantic import BaseModel, ConfigDict, Field


class ForecastNarration(BaseModel):
    """Five day forecast narrated in sports announcer style."""
    model_config = ConfigDict(frozen=True)

    day1: str = Field(..., description="First day weather forecast in sports announcer style")
    day2: str = Field(..., description="Second day weather forecast in sports announcer style")
    day3: str = Field(..., description="Third day weather forecast in sports announcer style")
    day4: str = Field(..., description="Fourth day weather forecast in sports announcer style")
    day5: str = Field(..., description="Fifth day weather forecast in sports announcer style")


class ForecastRequest(BaseModel):
    """Request body for the forecast endpoint."""
    location: str = Field(..., description="Location name to forecast")


class NarrationResponse(BaseModel):
    """Successful forecast endpoint response."""
    result: ForecastNarration


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
