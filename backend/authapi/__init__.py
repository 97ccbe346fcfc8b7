"""Authentication and user-profile API."""

from __future__ import annotations

from authapi.factory import create_app

__all__ = ["create_app"]
