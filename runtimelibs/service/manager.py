"""Library manager: resolve, download, relocate and load runtime libraries."""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import httpx

from runtimelibs.classpath import ClasspathInjector, IsolatedClasspath, IsolationRegistry
from runtimelibs.domain import ConfigurationError, Coordinate, LogLevel, Repositories
from runtimelibs.fileget import (
    ArtifactDownloader,
    ArtifactResolver,
    RepositoryRegistry,
    build_client,
)
from runtimelibs.relocation import RelocationHelper, Relocator
from runtimelibs.settings import LibrarySettings

_manager_ids = itertools.count(1)


def _flatten(items: tuple) -> list:
    """Accept both ``f(a, b)`` and ``f([a, b])``."""
    if len(items) == 1 and not isinstance(items[0], (str, Coordinate)) and isinstance(items[0], Iterable):
        return list(items[0])
    return list(items)


class LibraryManager:
    """Downloads libraries at runtime and adds them to the host classpath.

    Libraries are resolved against the direct URLs declared on each
    coordinate first and then against the configured repositories, in the
    order they were added. Downloaded jars are cached under
    ``settings.save_directory``; an existing file is always trusted.
    Transitive dependencies are not resolved, every library must be
    declared explicitly.
    """

    def __init__(
        self,
        settings: LibrarySettings,
        injector: ClasspathInjector,
        *,
        client: Optional[httpx.Client] = None,
        relocator: Optional[Relocator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if settings is None:
            raise ConfigurationError("settings is required")
        if injector is None:
            raise ConfigurationError("injector is required")
        self.settings = settings
        self.injector = injector
        self.save_directory = settings.save_directory
        # Child of "runtimelibs": handlers are inherited, the level is per manager.
        self.log = logger or logging.getLogger(f"runtimelibs.manager.{next(_manager_ids)}")
        self.log.setLevel(LogLevel.parse(settings.log_level).value)

        self._owns_client = client is None
        self._client = client or build_client(settings)
        self._repositories = RepositoryRegistry(settings.repositories)
        self._isolated = IsolationRegistry()
        self.resolver = ArtifactResolver(self._client, self.log)
        self.downloader = ArtifactDownloader(self.save_directory, self._client, self.log)
        self.relocation_helper = RelocationHelper(self.save_directory, relocator, self.log)

    # ------------------------------------------------------------------ logging
    @property
    def log_level(self) -> LogLevel:
        return LogLevel.from_logging(self.log.getEffectiveLevel())

    @log_level.setter
    def log_level(self, level: Union[LogLevel, str]) -> None:
        if isinstance(level, str):
            level = LogLevel.parse(level)
        self.log.setLevel(level.value)

    # ------------------------------------------------------------------ repositories
    @property
    def repositories(self) -> List[str]:
        return self._repositories.urls

    def add_repository(self, url: str) -> None:
        repo = self._repositories.add(url)
        self.log.debug("Added repository %s", repo)

    def add_repositories(self, *urls: Union[str, Iterable[str]]) -> None:
        for url in _flatten(urls):
            self.add_repository(url)

    def add_maven_central(self) -> None:
        self.add_repository(Repositories.MAVEN_CENTRAL)

    def add_sonatype(self, alt: Optional[int] = None) -> None:
        if alt is None:
            self.add_repository(Repositories.SONATYPE)
        else:
            self.add_repository(Repositories.SONATYPE_ALT.format(alt))

    def add_jitpack(self) -> None:
        self.add_repository(Repositories.JITPACK)

    def add_maven_local(self) -> None:
        self.add_repository((Path.home() / ".m2" / "repository").as_uri())

    # ------------------------------------------------------------------ isolation
    def get_isolated_classpath(self, isolation_id: str) -> Optional[IsolatedClasspath]:
        return self._isolated.get(isolation_id)

    # ------------------------------------------------------------------ pipeline
    def resolve_library(self, coordinate: Coordinate) -> List[str]:
        return self.resolver.resolve(coordinate, self._repositories.urls)

    def download_library(self, coordinate: Coordinate) -> Path:
        """Return the cached jar for ``coordinate``, downloading it when absent."""
        cached = self.downloader.local_path(coordinate)
        if cached.exists():
            return cached
        return self.downloader.fetch(coordinate, self.resolve_library(coordinate))

    def load_library(self, coordinate: Coordinate) -> None:
        """Download, relocate and hand one library to its classpath target."""
        if coordinate is None:
            raise ConfigurationError("coordinate is required")
        path = self.download_library(coordinate)
        if coordinate.has_relocations:
            path = self.relocation_helper.apply_relocations(path, coordinate)

        if coordinate.isolated_load:
            unit = self._isolated.get_or_create(coordinate.id)
            unit.add_path(path)
            self.log.debug("Loaded %s into isolated classpath %s", coordinate, coordinate.id)
        else:
            self.injector.inject(path)
            self.log.debug("Loaded %s into host classpath", coordinate)

    def load_libraries(self, *coordinates: Union[Coordinate, Iterable[Coordinate]]) -> None:
        """Load libraries one after another; the first failure stops the batch."""
        for coordinate in _flatten(coordinates):
            self.load_library(coordinate)

    # ------------------------------------------------------------------ lifecycle
    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "LibraryManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
