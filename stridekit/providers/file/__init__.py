"""Track file (GPX) parsing."""

from .file_provider import FileProvider

__all__ = ["FileProvider"]
