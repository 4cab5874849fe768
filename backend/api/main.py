"""
FastAPI backend for RideFlow.

This provides REST API endpoints for GPX route parsing and wind analysis,
enabling framework-agnostic frontend development.
"""

from fastapi import FastAPI, UploadFile, File, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict, Any, Optional
import logging

from config.settings import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION, CORS_ORIGINS, LOGGING_CONFIG, API_HOST, API_PORT,
    MAX_UPLOAD_SIZE_BYTES, DEFAULT_RIDER_SPEED, MIN_RIDER_SPEED, MAX_RIDER_SPEED,
    RouteConfig, WeatherConfig
)
from core.validation import (
    ValidationError, FileTooLargeError, validate_file_upload
)
from services.route_analysis_service import parse_route, analyze_route_wind
from services.weather_service import WeatherService, ExternalServiceError, get_weather_service

# Initialize logging
logging.basicConfig(level=LOGGING_CONFIG["level"], format=LOGGING_CONFIG["format"])
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=f"{APP_NAME} API",
    description=APP_DESCRIPTION,
    version=APP_VERSION
)

# Add CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Pydantic models for API requests/responses
class AnalyzeWindRequest(BaseModel):
    # Fields are checked by the core validators (InvalidInputError -> 400)
    segments: Optional[Any] = None
    datetime: Optional[Any] = None
    rider_speed: Optional[Any] = None


class SuccessResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Render errors in the same envelope as successful responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail}
    )


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"{APP_NAME} API",
        "version": APP_VERSION,
        "endpoints": {
            "POST /api/parse-gpx": "Parse a GPX file into route segments",
            "POST /api/analyze-wind": "Score route segments against the wind forecast",
            "GET /api/config": "Default configuration values",
            "GET /api/health": "Health check endpoint"
        }
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "rideflow-api"}


@app.get("/api/config")
async def get_config():
    """Get default configuration values."""
    return {
        "defaults": {
            "rider_speed": DEFAULT_RIDER_SPEED,
        },
        "ranges": {
            "rider_speed": {"min": MIN_RIDER_SPEED, "max": MAX_RIDER_SPEED, "step": 0.5},
        },
        "route": RouteConfig.as_dict(),
        "weather": WeatherConfig.as_dict(),
    }


@app.post("/api/parse-gpx", response_model=SuccessResponse)
async def parse_gpx(gpx: UploadFile = File(...)):
    """
    Parse a GPX file into a simplified route.

    Args:
        gpx: GPX file to parse

    Returns:
        Route name, points, segments, total distance and route shape
    """
    try:
        content = await gpx.read()
        validate_file_upload(gpx.filename, len(content), MAX_UPLOAD_SIZE_BYTES)

        logger.info(f"Processing file: {gpx.filename}")
        result = parse_route(content, gpx.filename)

        return SuccessResponse(data=result.to_dict())

    except FileTooLargeError as e:
        logger.error(f"Rejected upload {gpx.filename}: {str(e)}")
        raise HTTPException(status_code=413, detail=str(e))
    except ValidationError as e:
        logger.error(f"Invalid GPX upload {gpx.filename}: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error parsing GPX: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error parsing GPX: {str(e)}")


@app.post("/api/analyze-wind", response_model=SuccessResponse)
def analyze_wind(
    request: AnalyzeWindRequest,
    weather_service: WeatherService = Depends(get_weather_service)
):
    """
    Score route segments against the wind forecast.

    Runs synchronously in the threadpool because the forecast fetch blocks.

    Args:
        request: Segments from /api/parse-gpx, local ride start and rider speed

    Returns:
        Per-segment analysis, route center, dominant wind and summary
    """
    try:
        result = analyze_route_wind(
            segments=request.segments,
            ride_datetime=request.datetime,
            rider_speed=request.rider_speed,
            weather_service=weather_service
        )
        return SuccessResponse(data=result.to_dict())

    except ValidationError as e:
        logger.error(f"Invalid analysis request: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalServiceError as e:
        logger.error(f"Forecast unavailable: {str(e)}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Error analyzing wind: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error analyzing wind: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
