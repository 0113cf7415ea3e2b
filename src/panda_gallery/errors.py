"""Error types raised by the gallery core."""


class GalleryError(Exception):
    """Base class for gallery errors."""


class EntityNotFound(GalleryError):
    """Raised when an entity id does not resolve in the photo catalog."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"Entity {entity_id!r} not found")
        self.entity_id = entity_id


class SessionNotFound(GalleryError):
    """Raised when a carousel session id is unknown or already closed."""

    def __init__(self, session_id: object) -> None:
        super().__init__(f"Carousel session {session_id} not found")
        self.session_id = session_id


class InvalidPageSize(GalleryError):
    """Raised when a page size or first-page multiplier is out of range."""


class ManifestEmpty(GalleryError):
    """Raised when a jump is requested on an entity with no photos."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"Entity {entity_id!r} has no photos")
        self.entity_id = entity_id
