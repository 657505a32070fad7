"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from restaurant_finder.app_logging import configure_logging
from restaurant_finder.containers import AppContainer
from restaurant_finder.errors import BadRequestError, UpstreamError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/restaurants/{postcode}", response_model=None)
    async def restaurants_by_postcode(postcode: str, request: Request) -> Response:
        """Return up to ten restaurants near a UK postcode."""
        state_container: AppContainer = request.app.state.container
        try:
            restaurants = await state_container.restaurant_service.resolve(postcode)
        except BadRequestError as exc:
            return PlainTextResponse(exc.reason, status_code=400)
        except UpstreamError as exc:
            logger.warning(
                "Restaurant lookup failed: postcode=%s status=%s reason=%s",
                postcode,
                exc.status_code,
                exc.reason,
                extra={"postcode": postcode, "status_code": exc.status_code},
            )
            return PlainTextResponse(
                f"Error fetching restaurant data: {exc.reason}", status_code=500
            )

        if not restaurants:
            return PlainTextResponse(
                f"No restaurants found for postcode {postcode}", status_code=404
            )
        return JSONResponse([restaurant.to_dict() for restaurant in restaurants])

    return app
