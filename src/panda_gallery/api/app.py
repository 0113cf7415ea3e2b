"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from panda_gallery.api.carousels import router as carousels_router
from panda_gallery.api.galleries import router as galleries_router
from panda_gallery.api.models import FeedItemModel, SpotlightGroupModel
from panda_gallery.app_logging import configure_logging
from panda_gallery.containers import AppContainer
from panda_gallery.errors import (
    EntityNotFound,
    GalleryError,
    InvalidPageSize,
    ManifestEmpty,
    SessionNotFound,
)

_ERROR_STATUS: dict[type[GalleryError], int] = {
    EntityNotFound: status.HTTP_404_NOT_FOUND,
    SessionNotFound: status.HTTP_404_NOT_FOUND,
    InvalidPageSize: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ManifestEmpty: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = app.state.container.settings
        logger.info(
            "Gallery API starting: environment=%s page_size=%s shown_pages=%s",
            settings.environment,
            settings.page_size,
            settings.shown_pages,
        )
        yield
        open_sessions = len(app.state.container.carousel_service.sessions)
        if open_sessions:
            logger.info("Dropping %s open carousel sessions", open_sessions)
        app.state.container.carousel_service.sessions.clear()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(carousels_router)
    app.include_router(galleries_router)

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(
        request: Request, exc: GalleryError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.warning(
            "%s %s failed: %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc,
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/feed")
    async def feed(
        request: Request,
        photo_count: int | None = None,
        language: str = "en",
        seed: int | None = None,
    ) -> list[FeedItemModel]:
        """Return the front-page feed of recently updated photos."""
        state_container: AppContainer = request.app.state.container
        items = state_container.feed_service.build_feed(
            photo_count=photo_count, language=language, seed=seed
        )
        return [FeedItemModel.from_item(item) for item in items]

    @app.get("/spotlight")
    async def spotlight(  # noqa: PLR0913
        request: Request,
        entity_id: list[str] = Query(...),
        photo_count: int = 3,
        tag: str = "portrait",
        language: str = "en",
        seed: int | None = None,
    ) -> list[SpotlightGroupModel]:
        """Return a few tagged photos for each entity, e.g. for birthdays."""
        state_container: AppContainer = request.app.state.container
        groups = state_container.gallery_assembler.spotlight(
            entity_id, photo_count=photo_count, tag=tag, seed=seed
        )
        return [SpotlightGroupModel.from_group(group, language) for group in groups]

    return app


def _status_for(exc: GalleryError) -> int:
    """Map a gallery error to an HTTP status code."""
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
