"""
Exception handlers for the Alexandria server.

This package contains the handlers for domain, HTTP, validation and
unhandled errors, and a setup function that registers them with the FastAPI
application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
