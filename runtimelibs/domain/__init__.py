from .constants import Repositories
from .coordinate import Coordinate, CoordinateBuilder, normalize_repository_url
from .exceptions import (
    CacheIOError,
    ConfigurationError,
    DownloadExhaustedError,
    InjectionError,
    LibraryError,
    RelocationError,
    ResolutionExhaustedError,
)
from .log_level import LogLevel
from .relocation import RelocationRule, RelocationRuleBuilder

__all__ = [
    "CacheIOError",
    "ConfigurationError",
    "Coordinate",
    "CoordinateBuilder",
    "DownloadExhaustedError",
    "InjectionError",
    "LibraryError",
    "LogLevel",
    "RelocationError",
    "RelocationRule",
    "RelocationRuleBuilder",
    "Repositories",
    "ResolutionExhaustedError",
    "normalize_repository_url",
]
