"""Carousel state machine for stepping through one entity's photos."""

import logging
from dataclasses import dataclass, field
from random import Random
from uuid import UUID, uuid4

from panda_gallery.domain.carousel import CarouselView
from panda_gallery.domain.photos import EntityKind, PhotoManifest
from panda_gallery.errors import EntityNotFound, ManifestEmpty, SessionNotFound
from panda_gallery.services.catalog import PhotoCatalog

_logger = logging.getLogger(__name__)


@dataclass
class CarouselSession:
    """Navigation state of a single rendered carousel widget.

    The manifest is re-read from the catalog on every call, so a widget whose
    entity has disappeared fails with ``EntityNotFound`` instead of showing
    stale photos. The index is only changed once the manifest resolved.
    """

    catalog: PhotoCatalog
    entity_id: str
    index: int = 1
    session_id: UUID = field(default_factory=uuid4)
    fallback_url: str = ""
    reserved_credits: frozenset[str] = frozenset()
    rng: Random = field(default_factory=Random)

    @property
    def kind(self) -> EntityKind:
        return EntityKind.for_id(self.entity_id)

    def next(self) -> int:
        """Step forward, wrapping from the last photo to the first."""
        count = len(self._manifest())
        if count > 1:
            self.index = (self.index % count) + 1
        return self.index

    def previous(self) -> int:
        """Step backward, wrapping from the first photo to the last."""
        count = len(self._manifest())
        if count > 1:
            self.index = _wrap_previous(self.index, count)
        return self.index

    def random(self) -> int:
        """Jump to a uniformly chosen photo other than the current one."""
        count = len(self._manifest())
        if count > 1:
            candidates = [i for i in range(1, count + 1) if i != self.index]
            self.index = self.rng.choice(candidates)
        return self.index

    def goto(self, index: int) -> int:
        """Jump to an index, wrapping it into the manifest range."""
        count = len(self._manifest())
        if count == 0:
            raise ManifestEmpty(self.entity_id)
        self.index = ((index - 1) % count) + 1
        return self.index

    def is_disabled(self) -> bool:
        """Return True when there is nothing to navigate between."""
        return len(self._manifest()) < 2

    def current(self) -> CarouselView:
        """Return the current photo, its neighbours to preload and credits."""
        manifest = self._manifest()
        count = len(manifest)
        record = manifest.get(self.index)
        placeholder = record is None or record.url is None
        credit = record.credit if record else None
        reserved = credit is None or credit in self.reserved_credits
        return CarouselView(
            session_id=self.session_id,
            entity_id=self.entity_id,
            kind=self.kind,
            index=self.index,
            count=count,
            url=self.fallback_url if placeholder else record.url,
            placeholder=placeholder,
            disabled=count < 2,
            preload_urls=_preload_urls(manifest, self.index),
            credit=credit,
            credit_link=None if reserved else record.link,
            credit_photo_count=(
                None if reserved else self.catalog.credit_photo_count(credit)
            ),
        )

    def _manifest(self) -> PhotoManifest:
        entity = self.catalog.get_entity(self.entity_id)
        if entity is None:
            raise EntityNotFound(self.entity_id)
        return entity.manifest


@dataclass
class CarouselService:
    """Opens carousel sessions and keeps them until their widget goes away."""

    catalog: PhotoCatalog
    fallback_url: str
    reserved_credits: frozenset[str] = frozenset()
    debug: bool = False
    sessions: dict[UUID, CarouselSession] = field(default_factory=dict)

    def open(self, entity_id: str, index: int | None = None) -> CarouselSession:
        """Create a session for an entity, starting at ``index`` or photo 1."""
        entity = self.catalog.get_entity(entity_id)
        if entity is None:
            raise EntityNotFound(entity_id)
        count = len(entity.manifest)
        if count == 0:
            start = 0
        elif index is None:
            start = 1
        else:
            start = ((index - 1) % count) + 1
        session = CarouselSession(
            catalog=self.catalog,
            entity_id=entity_id,
            index=start,
            fallback_url=self.fallback_url,
            reserved_credits=self.reserved_credits,
        )
        self.sessions[session.session_id] = session
        if self.debug:
            _logger.info(
                "Carousel opened: session=%s entity=%s photos=%s",
                session.session_id,
                entity_id,
                count,
            )
        return session

    def get(self, session_id: UUID) -> CarouselSession:
        """Return an open session."""
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def close(self, session_id: UUID) -> None:
        """Forget a session once its widget has been removed."""
        if self.sessions.pop(session_id, None) is None:
            raise SessionNotFound(session_id)


def _wrap_previous(index: int, count: int) -> int:
    previous = index - 1
    return count if previous < 1 else previous


def _wrap_next(index: int, count: int) -> int:
    following = index + 1
    return 1 if following > count else following


def _preload_urls(manifest: PhotoManifest, index: int) -> list[str]:
    """Urls of the photos either side of ``index``, skipping placeholders."""
    count = len(manifest)
    if count < 2:
        return []
    urls = []
    for neighbour in (_wrap_previous(index, count), _wrap_next(index, count)):
        record = manifest.get(neighbour)
        if record is not None and record.url is not None:
            urls.append(record.url)
    return urls
