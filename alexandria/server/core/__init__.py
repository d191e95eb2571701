"""Server core: settings and constants."""

from .config import settings

__all__ = ["settings"]
