"""JSON HTTP layer over the rating engine."""

from api.app import create_app

__all__ = ["create_app"]
