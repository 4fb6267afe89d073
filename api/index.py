"""Serverless entry point.

The platform's Python runtime imports this module and serves the ASGI
``app`` it exposes; static files are served by the platform itself.
"""

from clubpro.main import app  # noqa: F401
