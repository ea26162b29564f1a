"""Maven-style artifact coordinates."""

from __future__ import annotations

import base64
import binascii
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from .constants import (
    JAR_EXTENSION,
    PACKAGE_PLACEHOLDER,
    RELOCATED_SUFFIX,
    SHA256_LENGTH,
    SNAPSHOT_SUFFIX,
)
from .exceptions import ConfigurationError
from .relocation import RelocationRule


def normalize_repository_url(url: str) -> str:
    """Return ``url`` with exactly one trailing slash."""
    if not url or not url.strip():
        raise ConfigurationError("repository url must not be empty")
    url = url.strip()
    return url if url.endswith("/") else url + "/"


def _dedupe(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class Coordinate:
    """Identifies one jar artifact and how it should be loaded.

    Instances are immutable; use :meth:`builder` to create them::

        gson = (
            Coordinate.builder()
            .group_id("com{}google{}code{}gson")
            .artifact_id("gson")
            .version("2.10.1")
            .relocate("com{}google{}gson", "my{}plugin{}gson")
            .build()
        )
    """

    group_id: str
    artifact_id: str
    version: str
    classifier: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)
    checksum: Optional[bytes] = field(default=None, repr=False)
    urls: Tuple[str, ...] = ()
    repositories: Tuple[str, ...] = ()
    relocations: Tuple[RelocationRule, ...] = ()
    isolated_load: bool = False

    def __post_init__(self) -> None:
        for name in ("group_id", "artifact_id", "version"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} is required")
        object.__setattr__(self, "group_id", self.group_id.replace(PACKAGE_PLACEHOLDER, "."))
        if self.checksum is not None and len(self.checksum) != SHA256_LENGTH:
            raise ConfigurationError(
                f"checksum must be a {SHA256_LENGTH}-byte SHA-256 digest, got {len(self.checksum)} bytes"
            )
        object.__setattr__(self, "urls", _dedupe(self.urls))
        object.__setattr__(self, "repositories", _dedupe(normalize_repository_url(r) for r in self.repositories))
        object.__setattr__(self, "relocations", tuple(self.relocations))

    @staticmethod
    def builder() -> "CoordinateBuilder":
        return CoordinateBuilder()

    @property
    def has_classifier(self) -> bool:
        return self.classifier is not None

    @property
    def has_checksum(self) -> bool:
        return self.checksum is not None

    @property
    def has_relocations(self) -> bool:
        return bool(self.relocations)

    @property
    def is_snapshot(self) -> bool:
        return self.version.endswith(SNAPSHOT_SUFFIX)

    @property
    def base_version(self) -> str:
        if self.is_snapshot:
            return self.version[: -len(SNAPSHOT_SUFFIX)]
        return self.version

    @property
    def gav(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def directory(self) -> str:
        """Repository-relative directory holding this version's files."""
        group_path = self.group_id.replace(".", "/")
        return f"{group_path}/{self.artifact_id}/{self.version}"

    @property
    def _file_stem(self) -> str:
        stem = f"{self.directory}/{self.artifact_id}-{self.version}"
        if self.has_classifier:
            stem += f"-{self.classifier}"
        return stem

    @property
    def path(self) -> str:
        return self._file_stem + JAR_EXTENSION

    @property
    def relocated_path(self) -> Optional[str]:
        if not self.has_relocations:
            return None
        return self._file_stem + RELOCATED_SUFFIX + JAR_EXTENSION

    def __str__(self) -> str:
        name = self.gav
        if self.has_classifier:
            name += f":{self.classifier}"
        return name


@dataclass
class CoordinateBuilder:
    """Mutable staging area for a :class:`Coordinate`; discarded after :meth:`build`."""

    _group_id: Optional[str] = None
    _artifact_id: Optional[str] = None
    _version: Optional[str] = None
    _classifier: Optional[str] = None
    _id: Optional[str] = None
    _checksum: Optional[bytes] = None
    _urls: List[str] = field(default_factory=list)
    _repositories: List[str] = field(default_factory=list)
    _relocations: List[RelocationRule] = field(default_factory=list)
    _isolated_load: bool = False

    def group_id(self, group_id: str) -> "CoordinateBuilder":
        self._group_id = group_id
        return self

    def artifact_id(self, artifact_id: str) -> "CoordinateBuilder":
        self._artifact_id = artifact_id
        return self

    def version(self, version: str) -> "CoordinateBuilder":
        self._version = version
        return self

    def classifier(self, classifier: str) -> "CoordinateBuilder":
        if not classifier:
            raise ConfigurationError("classifier must not be empty")
        self._classifier = classifier
        return self

    def id(self, library_id: Optional[str]) -> "CoordinateBuilder":
        self._id = library_id
        return self

    def checksum(self, checksum: Union[bytes, str]) -> "CoordinateBuilder":
        """Expected SHA-256 digest, as raw bytes or base64 text."""
        if isinstance(checksum, str):
            try:
                checksum = base64.b64decode(checksum, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ConfigurationError(f"checksum is not valid base64: {checksum!r}") from exc
        self._checksum = bytes(checksum)
        return self

    def url(self, url: str) -> "CoordinateBuilder":
        if not url:
            raise ConfigurationError("url must not be empty")
        self._urls.append(url)
        return self

    def repository(self, url: str) -> "CoordinateBuilder":
        self._repositories.append(normalize_repository_url(url))
        return self

    def isolated_load(self, isolated_load: bool = True) -> "CoordinateBuilder":
        self._isolated_load = isolated_load
        return self

    def relocate(
        self,
        rule_or_pattern: Union[RelocationRule, str],
        relocated_pattern: Optional[str] = None,
    ) -> "CoordinateBuilder":
        if isinstance(rule_or_pattern, RelocationRule):
            rule = rule_or_pattern
        else:
            rule = RelocationRule(rule_or_pattern, relocated_pattern or "")
        self._relocations.append(rule)
        return self

    def build(self) -> Coordinate:
        kwargs = {}
        if self._id is not None:
            kwargs["id"] = self._id
        return Coordinate(
            group_id=self._group_id or "",
            artifact_id=self._artifact_id or "",
            version=self._version or "",
            classifier=self._classifier,
            checksum=self._checksum,
            urls=tuple(self._urls),
            repositories=tuple(self._repositories),
            relocations=tuple(self._relocations),
            isolated_load=self._isolated_load,
            **kwargs,
        )
