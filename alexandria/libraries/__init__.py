"""Library curation."""

from .service import MIN_CONTENT_FOR_APPROVAL, LibraryService

__all__ = ["MIN_CONTENT_FOR_APPROVAL", "LibraryService"]
