"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from panda_gallery.adapters.supabase_photo_catalog import SupabasePhotoCatalog
from panda_gallery.config import Settings, parse_reserved_credits
from panda_gallery.services.carousel import CarouselService
from panda_gallery.services.catalog import PhotoCatalog
from panda_gallery.services.feed import FeedService
from panda_gallery.services.gallery import GalleryAssembler


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: PhotoCatalog
    carousel_service: CarouselService
    gallery_assembler: GalleryAssembler
    feed_service: FeedService


def build_services(settings: Settings, catalog: PhotoCatalog) -> AppContainer:
    """Wire the gallery services around a catalog."""
    reserved_credits = parse_reserved_credits(settings.reserved_credits)
    return AppContainer(
        settings=settings,
        catalog=catalog,
        carousel_service=CarouselService(
            catalog=catalog,
            fallback_url=settings.fallback_photo_url,
            reserved_credits=reserved_credits,
            debug=settings.debug,
        ),
        gallery_assembler=GalleryAssembler(
            catalog=catalog,
            page_size=settings.page_size,
            shown_pages=settings.shown_pages,
            debug=settings.debug,
        ),
        feed_service=FeedService(
            catalog=catalog,
            reserved_credits=reserved_credits,
            photo_count=settings.feed_photo_count,
            debug=settings.debug,
        ),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return build_services(resolved_settings, SupabasePhotoCatalog(supabase_client))
