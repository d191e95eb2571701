"""User accounts and bearer tokens."""

from .service import UserService
from .tokens import generate_token, hash_token

__all__ = ["UserService", "generate_token", "hash_token"]
