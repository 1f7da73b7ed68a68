"""Routine composer backend.

``from fitlog import create_app`` returns a configured Flask application.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
