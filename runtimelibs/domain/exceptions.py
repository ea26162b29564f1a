"""Errors raised by the library loading pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class LibraryError(RuntimeError):
    """Base class for every fatal pipeline failure."""


class ConfigurationError(LibraryError, ValueError):
    """Raised at construction time when required configuration is missing or invalid."""


class ResolutionExhaustedError(LibraryError):
    """No candidate URL could be produced for an artifact."""

    def __init__(self, coordinate: object) -> None:
        super().__init__(f"Library '{coordinate}' couldn't be resolved, add a repository")
        self.coordinate = coordinate


class DownloadExhaustedError(LibraryError):
    """Every candidate URL failed to download or verify."""

    def __init__(self, coordinate: object, attempted: int) -> None:
        super().__init__(f"Failed to download library '{coordinate}' ({attempted} candidates tried)")
        self.coordinate = coordinate
        self.attempted = attempted


class CacheIOError(LibraryError):
    """Writing into the local library cache failed."""

    def __init__(self, message: str, coordinate: object, path: Optional[Path] = None) -> None:
        detail = f"{message} for '{coordinate}'"
        if path is not None:
            detail += f" at {path}"
        super().__init__(detail)
        self.coordinate = coordinate
        self.path = path


class RelocationError(LibraryError):
    """The jar could not be rewritten with the requested relocations."""


class InjectionError(LibraryError):
    """Raised by classpath injectors that cannot add a jar to the host."""
