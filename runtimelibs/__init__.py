"""Runtime dependency loading for plugins hosted in third-party runtimes."""

from __future__ import annotations

__version__ = "1.0.0"

from .classpath import ClasspathInjector, ClasspathList, IsolatedClasspath
from .domain import Coordinate, LogLevel, RelocationRule
from .service import LibraryManager
from .settings import LibrarySettings, get_settings

__all__ = [
    "__version__",
    "ClasspathInjector",
    "ClasspathList",
    "Coordinate",
    "IsolatedClasspath",
    "LibraryManager",
    "LibrarySettings",
    "LogLevel",
    "RelocationRule",
    "get_settings",
]
