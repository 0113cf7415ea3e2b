"""Paged gallery API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from panda_gallery.api.models import (
    ContinuationModel,
    CreditGalleryRequest,
    GalleryPageModel,
    GroupGalleryRequest,
    PagingOptions,
    TagGalleryRequest,
)
from panda_gallery.domain.gallery import GalleryKind, GallerySource

if TYPE_CHECKING:
    from panda_gallery.containers import AppContainer

router = APIRouter(prefix="/galleries", tags=["galleries"])


def _open(
    request: Request, source: GallerySource, options: PagingOptions
) -> GalleryPageModel:
    container: AppContainer = request.app.state.container
    page = container.gallery_assembler.open(
        source,
        base_size=options.page_size,
        first_page_multiplier=options.first_page_multiplier,
        seed=options.seed,
        frame_id=options.frame_id,
    )
    return GalleryPageModel.from_page(page)


@router.post("/credit")
async def credit_gallery(
    body: CreditGalleryRequest, request: Request
) -> GalleryPageModel:
    """Every photo by one contributor, in catalog order."""
    source = GallerySource(kind=GalleryKind.CREDIT, subject=body.credit)
    return _open(request, source, body)


@router.post("/tag")
async def tag_gallery(body: TagGalleryRequest, request: Request) -> GalleryPageModel:
    """Tagged photos, optionally restricted to some entities."""
    source = GallerySource(
        kind=GalleryKind.TAG,
        subject=body.subject,
        entity_ids=tuple(body.entity_ids),
        tags=tuple(body.tags),
        parsed=body.mode,
    )
    return _open(request, source, body)


@router.post("/group")
async def group_gallery(
    body: GroupGalleryRequest, request: Request
) -> GalleryPageModel:
    """Group photos featuring any of the individuals."""
    source = GallerySource(kind=GalleryKind.GROUP, entity_ids=tuple(body.entity_ids))
    return _open(request, source, body)


@router.post("/group-intersection")
async def group_intersection_gallery(
    body: GroupGalleryRequest, request: Request
) -> GalleryPageModel:
    """Group photos featuring all of the individuals together."""
    source = GallerySource(
        kind=GalleryKind.GROUP_INTERSECTION, entity_ids=tuple(body.entity_ids)
    )
    return _open(request, source, body)


@router.post("/more")
async def more_photos(body: ContinuationModel, request: Request) -> GalleryPageModel:
    """Return the page a previously issued continuation points at."""
    container: AppContainer = request.app.state.container
    page = container.gallery_assembler.request_page(body.to_continuation())
    return GalleryPageModel.from_page(page)
