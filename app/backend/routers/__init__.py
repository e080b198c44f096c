"""
Routers package for FastAPI endpoints.

Organized by domain:
- photos: ID photo upload and identity extraction
"""

from . import photos

__all__ = ["photos"]
