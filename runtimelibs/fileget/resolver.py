"""Candidate URL resolution for artifacts."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, List, Optional

import httpx

from runtimelibs.domain import Coordinate
from runtimelibs.domain.constants import JAR_EXTENSION, MAVEN_METADATA_FILE

from .transport import is_file_url, read_file_url


@dataclass(frozen=True)
class SnapshotVersion:
    """Latest published build of a snapshot, as listed in ``maven-metadata.xml``."""

    timestamp: str
    build_number: str

    @classmethod
    def from_metadata(cls, document: bytes) -> Optional["SnapshotVersion"]:
        root = ET.fromstring(document)
        # Newer repositories publish the metadata with a default namespace.
        for element in root.iter():
            if isinstance(element.tag, str) and element.tag.startswith("{"):
                element.tag = element.tag.split("}", 1)[1]
        snapshot = root.find("versioning/snapshot")
        if snapshot is None:
            return None
        timestamp = (snapshot.findtext("timestamp") or "").strip()
        build_number = (snapshot.findtext("buildNumber") or "").strip()
        if not timestamp or not build_number:
            return None
        return cls(timestamp=timestamp, build_number=build_number)


class ArtifactResolver:
    """Produces the ordered download candidates for a coordinate.

    Direct URLs declared on the coordinate come first, followed by one URL
    per repository: the coordinate's own repositories, then the manager-wide
    ones. Snapshot versions are resolved through the repository metadata; a
    repository whose metadata cannot be read contributes no candidate.
    """

    def __init__(self, client: httpx.Client, logger: Optional[logging.Logger] = None) -> None:
        self._client = client
        self.log = logger or logging.getLogger(self.__class__.__name__)

    def resolve(self, coordinate: Coordinate, repositories: Iterable[str] = ()) -> List[str]:
        urls = dict.fromkeys(coordinate.urls)
        repos = dict.fromkeys([*coordinate.repositories, *repositories])
        for repository in repos:
            if coordinate.is_snapshot:
                url = self._snapshot_url(coordinate, repository)
            else:
                url = repository + coordinate.path
            if url:
                urls.setdefault(url, None)
        self.log.debug("Resolved %s to %d candidate(s)", coordinate, len(urls))
        return list(urls)

    def metadata_url(self, coordinate: Coordinate, repository: str) -> str:
        return f"{repository}{coordinate.directory}/{MAVEN_METADATA_FILE}"

    def _snapshot_url(self, coordinate: Coordinate, repository: str) -> Optional[str]:
        snapshot = self.fetch_snapshot_version(coordinate, repository)
        if snapshot is None:
            return None
        name = (
            f"{coordinate.artifact_id}-{coordinate.base_version}"
            f"-{snapshot.timestamp}-{snapshot.build_number}"
        )
        if coordinate.has_classifier:
            name += f"-{coordinate.classifier}"
        return f"{repository}{coordinate.directory}/{name}{JAR_EXTENSION}"

    def fetch_snapshot_version(self, coordinate: Coordinate, repository: str) -> Optional[SnapshotVersion]:
        url = self.metadata_url(coordinate, repository)
        document = self._get(url)
        if document is None:
            return None
        try:
            snapshot = SnapshotVersion.from_metadata(document)
        except ET.ParseError as exc:
            self.log.debug("Malformed snapshot metadata %s: %s", url, exc)
            return None
        if snapshot is None:
            self.log.debug("No snapshot build listed in %s", url)
        return snapshot

    def _get(self, url: str) -> Optional[bytes]:
        if is_file_url(url):
            try:
                return read_file_url(url)
            except OSError as exc:
                self.log.debug("Snapshot metadata unavailable %s: %s", url, exc)
                return None
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            self.log.debug("Snapshot metadata unavailable %s: %s", url, exc)
            return None
        if not response.is_success:
            self.log.debug("Snapshot metadata unavailable %s: HTTP %s", url, response.status_code)
            return None
        return response.content
