"""API endpoints for the forecast announcer service."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from forecast_announcer.config import (
    FORECAST_DAYS, FORECAST_UNITS, OPENAI_MODEL, SERVICE_NAME, SERVICE_VERSION
)
from forecast_announcer.errors import ValidationError
from forecast_announcer.narration.models import ErrorResponse, ForecastRequest, NarrationResponse
from forecast_announcer.pipeline import ForecastAnnouncer

logger = logging.getLogger(__name__)

MISSING_LOCATION_MESSAGE = "Please provide a location in the request body."
DEFAULT_ERROR_MESSAGE = "Internal Server Error"

router = APIRouter(tags=["forecast"])


def get_announcer(request: Request) -> ForecastAnnouncer:
    """Dependency returning the pipeline built at startup."""
    return request.app.state.announcer


async def read_location(request: Request) -> str:
    """Extract the location from a JSON request body.

    Raises:
        ValidationError: If the body is not JSON or the location is missing or empty
    """
    try:
        body: Any = await request.json()
        payload = ForecastRequest.model_validate(body)
    except (ValueError, PydanticValidationError) as e:
        logger.warning(f"Rejected forecast request body: {e}")
        raise ValidationError(MISSING_LOCATION_MESSAGE) from e

    if not payload.location:
        raise ValidationError(MISSING_LOCATION_MESSAGE)

    return payload.location


@router.post(
    "/forecast",
    response_model=NarrationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ForecastRequest.model_json_schema()}}
        }
    }
)
async def create_forecast(
    request: Request,
    announcer: ForecastAnnouncer = Depends(get_announcer)
):
    """Narrate the five day forecast for a location.

    Returns:
        200 with the narration, 400 when the location is missing,
        500 when any pipeline stage fails
    """
    try:
        location = await read_location(request)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        narration = await announcer.announce(location)
    except Exception as e:
        logger.exception(f"Forecast request failed for '{location}': {e}")
        return JSONResponse(status_code=500, content={"error": str(e) or DEFAULT_ERROR_MESSAGE})

    logger.info(f"Successfully narrated forecast for '{location}'")
    return NarrationResponse(result=narration)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "model": OPENAI_MODEL,
        "units": FORECAST_UNITS,
        "forecast_days": FORECAST_DAYS,
        "data_source": "OpenWeather API"
    }
