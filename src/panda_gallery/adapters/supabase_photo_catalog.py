"""Supabase-backed photo catalog."""

from collections.abc import Sequence
from dataclasses import dataclass

from supabase import Client

from panda_gallery.domain.photos import (
    Entity,
    PhotoLocator,
    PhotoManifest,
    PhotoRecord,
    RecentUpdates,
)
from panda_gallery.services.catalog import PhotoCatalog

_UPDATE_SECTIONS = ("entities", "authors", "photos")


@dataclass
class SupabasePhotoCatalog(PhotoCatalog):
    """Supabase implementation of catalog lookups and searches."""

    client: Client

    def get_entity(self, entity_id: str) -> Entity | None:
        """Return an entity with its photo manifest, if present."""
        response = (
            self.client.table("entities")
            .select("*")
            .eq("id", entity_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self._with_photos(response.data)[0]

    def list_residents(self, location_id: str) -> list[Entity]:
        """Return individuals living at a location."""
        response = (
            self.client.table("entities")
            .select("*")
            .eq("location_id", location_id)
            .execute()
        )
        return self._with_photos(response.data or [])

    def search_credit(self, credit: str) -> list[Entity]:
        """Return entities with photos by a contributor, in first-photo order."""
        response = (
            self.client.table("photos")
            .select("entity_id")
            .eq("credit", credit)
            .execute()
        )
        entity_ids = list(
            dict.fromkeys(str(row["entity_id"]) for row in response.data or [])
        )
        if not entity_ids:
            return []
        entities_response = (
            self.client.table("entities").select("*").in_("id", entity_ids).execute()
        )
        entities = {
            entity.id: entity
            for entity in self._with_photos(entities_response.data or [])
        }
        return [
            entities[entity_id] for entity_id in entity_ids if entity_id in entities
        ]

    def search_photo_tags(
        self,
        tags: Sequence[str],
        entity_ids: Sequence[str] | None = None,
        intersect: bool = False,
    ) -> list[PhotoRecord]:
        """Return photos carrying any (or all, when intersecting) of the tags."""
        if not tags:
            return []
        query = self.client.table("photos").select("*")
        if intersect:
            query = query.contains("tags", list(tags))
        else:
            query = query.overlaps("tags", list(tags))
        if entity_ids:
            query = query.in_("entity_id", list(entity_ids))
        response = query.order("entity_id").order("photo_index").execute()
        return [_parse_photo(row) for row in response.data or []]

    def search_group_media(self, entity_id: str) -> list[Entity]:
        """Return group media entities that include an individual."""
        response = (
            self.client.table("entities")
            .select("*")
            .contains("member_ids", [entity_id])
            .execute()
        )
        return self._with_photos(response.data or [])

    def search_group_media_intersect(
        self, entity_ids: Sequence[str]
    ) -> list[Entity]:
        """Return group media entities that include every listed individual."""
        if not entity_ids:
            return []
        response = (
            self.client.table("entities")
            .select("*")
            .contains("member_ids", list(entity_ids))
            .execute()
        )
        return self._with_photos(response.data or [])

    def recent_updates(self) -> RecentUpdates:
        """Return update locators grouped by section."""
        response = (
            self.client.table("photo_updates")
            .select("section, entity_id, photo_index")
            .order("position")
            .execute()
        )
        sections: dict[str, list[PhotoLocator]] = {
            section: [] for section in _UPDATE_SECTIONS
        }
        for row in response.data or []:
            section = str(row.get("section", ""))
            if section not in sections:
                continue
            sections[section].append(
                PhotoLocator(
                    entity_id=str(row["entity_id"]), index=int(row["photo_index"])
                )
            )
        return RecentUpdates(
            entities=tuple(sections["entities"]),
            authors=tuple(sections["authors"]),
            photos=tuple(sections["photos"]),
        )

    def credit_photo_count(self, credit: str) -> int:
        """Return how many photos a contributor has in the catalog."""
        response = (
            self.client.table("photo_credit_counts")
            .select("photo_count")
            .eq("credit", credit)
            .limit(1)
            .execute()
        )
        if not response.data:
            return 0
        return int(response.data[0].get("photo_count", 0))

    def _with_photos(self, rows: list[dict[str, object]]) -> list[Entity]:
        """Attach photo manifests to entity rows."""
        if not rows:
            return []
        entity_ids = [str(row["id"]) for row in rows]
        response = (
            self.client.table("photos")
            .select("*")
            .in_("entity_id", entity_ids)
            .order("photo_index")
            .execute()
        )
        photos: dict[str, list[PhotoRecord]] = {
            entity_id: [] for entity_id in entity_ids
        }
        for row in response.data or []:
            photo = _parse_photo(row)
            photos.setdefault(photo.entity_id, []).append(photo)
        return [_parse_entity(row, photos[str(row["id"])]) for row in rows]


def _parse_photo(row: dict[str, object]) -> PhotoRecord:
    """Parse a photo row into a domain record."""
    return PhotoRecord(
        entity_id=str(row["entity_id"]),
        index=int(row.get("photo_index", 0)),
        url=row.get("url"),
        credit=row.get("credit"),
        tags=frozenset(row.get("tags") or ()),
        link=row.get("link"),
    )


def _parse_entity(row: dict[str, object], photos: list[PhotoRecord]) -> Entity:
    """Parse an entity row and its photos into a domain entity."""
    try:
        manifest = PhotoManifest(
            tuple(sorted(photos, key=lambda photo: photo.index))
        )
    except ValueError as exc:
        raise RuntimeError(f"Malformed photo manifest for entity {row['id']}") from exc
    return Entity(
        id=str(row["id"]),
        names=dict(row.get("names") or {}),
        manifest=manifest,
        location_id=(
            str(row["location_id"]) if row.get("location_id") is not None else None
        ),
        member_ids=tuple(str(member) for member in row.get("member_ids") or ()),
    )
