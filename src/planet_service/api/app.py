from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from planet_service.api.dependencies import HandlerDep, lifespan
from planet_service.api.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from planet_service.dto import (
    HealthCheckResponse,
    PlanetCreatedResponse,
    PlanetDeletedResponse,
    PlanetRequest,
    PlanetResponse,
    PlanetUpdatedResponse,
)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": ...}`` unless the detail is already a body."""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and path parameters as 400 instead of 422."""
    logger.debug("Rejected invalid request to {}: {}", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


def create_app(app_lifespan: Any = lifespan) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_lifespan: Lifespan context manager that installs services
            into app.state. Tests pass one wired to in-memory stores.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Planet API",
        description="Planet CRUD service with Redis read-through caching and rate limiting",
        version="0.1.0",
        lifespan=app_lifespan,
    )

    # Last added runs first: log every request, including rate-limited ones.
    app.add_middleware(RateLimitMiddleware)  # type: ignore[arg-type]
    app.add_middleware(RequestLoggingMiddleware)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep, response: Response) -> HealthCheckResponse:
        """Health check endpoint."""
        result = await handler.health_check()
        if result.status != "healthy":
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return result

    @app.get("/", response_model=list[PlanetResponse])
    async def list_planets(handler: HandlerDep) -> list[PlanetResponse]:
        """List all planets."""
        return await handler.list_planets()

    @app.get("/{planet_id}", response_model=PlanetResponse)
    async def get_planet(planet_id: int, handler: HandlerDep) -> PlanetResponse:
        """Get a planet by id."""
        return await handler.get_planet(planet_id)

    @app.post("/", response_model=PlanetCreatedResponse)
    async def create_planet(request: PlanetRequest, handler: HandlerDep) -> PlanetCreatedResponse:
        """Add a planet."""
        return await handler.create_planet(request)

    @app.put("/{planet_id}", response_model=PlanetUpdatedResponse)
    async def update_planet(
        planet_id: int, request: PlanetRequest, handler: HandlerDep
    ) -> PlanetUpdatedResponse:
        """Rename a planet."""
        return await handler.update_planet(planet_id, request)

    @app.delete("/{planet_id}", response_model=PlanetDeletedResponse)
    async def delete_planet(planet_id: int, handler: HandlerDep) -> PlanetDeletedResponse:
        """Delete a planet."""
        return await handler.delete_planet(planet_id)

    return app


app = create_app()
