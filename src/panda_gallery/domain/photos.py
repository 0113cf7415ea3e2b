"""Domain models for catalogued entities and their photos."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

NULL_PHOTO_INDEX = 0
GROUP_MEDIA_PREFIX = "media."


class EntityKind(str, Enum):
    """Kind of catalogued entity."""

    PANDA = "panda"
    ZOO = "zoo"
    GROUP_MEDIA = "group-media"

    @classmethod
    def for_id(cls, entity_id: str) -> "EntityKind":
        """Derive the entity kind from the id conventions of the catalog."""
        if entity_id.startswith(GROUP_MEDIA_PREFIX):
            return cls.GROUP_MEDIA
        try:
            numeric = int(entity_id)
        except ValueError:
            return cls.PANDA
        return cls.ZOO if numeric < 0 else cls.PANDA


@dataclass(frozen=True)
class PhotoRecord:
    """A single photo belonging to an entity's manifest."""

    entity_id: str
    index: int
    url: str | None
    credit: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    link: str | None = None

    @property
    def entity_kind(self) -> EntityKind:
        return EntityKind.for_id(self.entity_id)

    @property
    def is_placeholder(self) -> bool:
        return self.url is None


@dataclass(frozen=True)
class PhotoManifest:
    """Ordered 1-based photo list of one entity."""

    records: tuple[PhotoRecord, ...] = ()

    def __post_init__(self) -> None:
        for position, record in enumerate(self.records, start=1):
            if record.index != position:
                raise ValueError(
                    f"Manifest indices must be contiguous from 1, "
                    f"got {record.index} at position {position}"
                )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PhotoRecord]:
        return iter(self.records)

    def get(self, index: int) -> PhotoRecord | None:
        """Return the record at a 1-based index, if present."""
        if 1 <= index <= len(self.records):
            return self.records[index - 1]
        return None


@dataclass(frozen=True)
class Entity:
    """A catalogued individual, location or group photo set."""

    id: str
    names: dict[str, str] = field(default_factory=dict)
    manifest: PhotoManifest = field(default_factory=PhotoManifest)
    location_id: str | None = None
    member_ids: tuple[str, ...] = ()

    @property
    def kind(self) -> EntityKind:
        return EntityKind.for_id(self.id)

    def display_name(self, language: str = "en") -> str:
        """Return the name in a language, falling back to any known name."""
        if language in self.names:
            return self.names[language]
        for name in self.names.values():
            return name
        return self.id


@dataclass(frozen=True)
class PhotoLocator:
    """Pointer to one photo of one entity."""

    entity_id: str
    index: int


@dataclass(frozen=True)
class RecentUpdates:
    """Recently changed entities, contributors and photos."""

    entities: tuple[PhotoLocator, ...] = ()
    authors: tuple[PhotoLocator, ...] = ()
    photos: tuple[PhotoLocator, ...] = ()


@dataclass(frozen=True)
class ResultSet:
    """Read-only search output fed to the gallery assembler."""

    subject: str
    hits: tuple[Entity | PhotoRecord, ...]
    parsed: str
    tag: str | None = None
