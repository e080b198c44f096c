"""
Services package for the ID photo extraction application.

Contains:
- identity: Photo validation and OpenAI-based identity extraction
"""

from .identity import IdentityExtractor, process_photo

__all__ = ["IdentityExtractor", "process_photo"]
