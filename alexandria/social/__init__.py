"""Follow, block and mute relations."""

from .service import SocialService

__all__ = ["SocialService"]
