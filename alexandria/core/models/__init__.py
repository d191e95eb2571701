"""
Core models package.

- domain/: enums shared by every layer
- io/: Pydantic request/response schemas for the HTTP API
"""
