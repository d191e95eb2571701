"""
Server services: authentication and dependency wiring for the API layer.
"""
