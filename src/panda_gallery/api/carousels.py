"""Carousel API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from panda_gallery.api.models import CarouselViewModel, OpenCarouselRequest

if TYPE_CHECKING:
    from panda_gallery.containers import AppContainer

router = APIRouter(prefix="/carousels", tags=["carousels"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def open_carousel(
    body: OpenCarouselRequest, request: Request
) -> CarouselViewModel:
    """Open a carousel session on an entity's photos."""
    container: AppContainer = request.app.state.container
    session = container.carousel_service.open(body.entity_id, body.index)
    return CarouselViewModel.from_view(session.current())


@router.get("/{session_id}")
async def get_carousel(session_id: UUID, request: Request) -> CarouselViewModel:
    """Return what a carousel currently shows."""
    container: AppContainer = request.app.state.container
    session = container.carousel_service.get(session_id)
    return CarouselViewModel.from_view(session.current())


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_carousel(session_id: UUID, request: Request) -> Response:
    """Forget a carousel session."""
    container: AppContainer = request.app.state.container
    container.carousel_service.close(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/next")
async def next_photo(session_id: UUID, request: Request) -> CarouselViewModel:
    container: AppContainer = request.app.state.container
    session = container.carousel_service.get(session_id)
    session.next()
    return CarouselViewModel.from_view(session.current())


@router.post("/{session_id}/previous")
async def previous_photo(session_id: UUID, request: Request) -> CarouselViewModel:
    container: AppContainer = request.app.state.container
    session = container.carousel_service.get(session_id)
    session.previous()
    return CarouselViewModel.from_view(session.current())


@router.post("/{session_id}/random")
async def random_photo(session_id: UUID, request: Request) -> CarouselViewModel:
    container: AppContainer = request.app.state.container
    session = container.carousel_service.get(session_id)
    session.random()
    return CarouselViewModel.from_view(session.current())


@router.post("/{session_id}/goto/{index}")
async def goto_photo(
    session_id: UUID, index: int, request: Request
) -> CarouselViewModel:
    """Jump to a photo; out-of-range indices wrap around."""
    container: AppContainer = request.app.state.container
    session = container.carousel_service.get(session_id)
    session.goto(index)
    return CarouselViewModel.from_view(session.current())
