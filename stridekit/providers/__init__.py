"""Activity source providers for stridekit."""

from .export.export_provider import ExportProvider
from .file.file_provider import FileProvider

__all__ = [
    "ExportProvider",
    "FileProvider",
]
