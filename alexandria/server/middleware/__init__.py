"""
Middleware modules for the Alexandria server.

This package contains custom middleware for request/response logging and
timing.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
