"""
Alexandria Server Package.

This package contains the web server implementation of the Alexandria
platform.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Settings and constants.
    exception_handlers: Error to HTTP response mapping.
    middleware: Request logging and timing.
    services: Authentication and dependency wiring.
"""
