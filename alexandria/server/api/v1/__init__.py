"""
Version 1 API routers.

Each module exposes a ``router`` that ``alexandria.server.main`` mounts under
``/api/v1``.
"""
