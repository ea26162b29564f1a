"""Downloads artifact jars into the local library cache."""

from __future__ import annotations

import base64
import hashlib
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Iterable, Optional

import httpx

from runtimelibs.domain import (
    CacheIOError,
    Coordinate,
    DownloadExhaustedError,
    ResolutionExhaustedError,
)

from .transport import is_file_url, read_file_url


def _b64(digest: bytes) -> str:
    return base64.b64encode(digest).decode("ascii")


def publish_atomically(target: Path, content: bytes) -> None:
    """Write ``content`` next to ``target`` and rename it into place.

    The rename is the only publication point, so readers never observe a
    partially written jar. The temporary file is gone on return or raise.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        os.replace(tmp, target)
    finally:
        if tmp.exists():
            tmp.unlink()


class ArtifactDownloader:
    """Fetches the first candidate URL that yields a (verified) jar."""

    def __init__(
        self,
        save_directory: Path,
        client: httpx.Client,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.save_directory = Path(save_directory)
        self._client = client
        self.log = logger or logging.getLogger(self.__class__.__name__)

    def local_path(self, coordinate: Coordinate) -> Path:
        return self.save_directory / coordinate.path

    def fetch(self, coordinate: Coordinate, urls: Iterable[str]) -> Path:
        target = self.local_path(coordinate)
        if target.exists():
            self.log.debug("Reusing cached library %s -> %s", coordinate, target)
            return target

        candidates = list(urls)
        if not candidates:
            raise ResolutionExhaustedError(coordinate)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError("Unable to create library directory", coordinate, target.parent) from exc

        for url in candidates:
            content = self.download_bytes(url)
            if content is None:
                continue
            if coordinate.has_checksum and not self._checksum_matches(coordinate, url, content):
                continue
            try:
                publish_atomically(target, content)
            except OSError as exc:
                raise CacheIOError("Unable to save library", coordinate, target) from exc
            self.log.info("Saved library %s -> %s (%d bytes)", coordinate, target, len(content))
            return target

        raise DownloadExhaustedError(coordinate, len(candidates))

    def download_bytes(self, url: str) -> Optional[bytes]:
        """Return the body at ``url`` or ``None`` when this candidate is unusable."""
        if is_file_url(url):
            return self._read_local(url)
        start_time = time.time()
        try:
            response = self._client.get(url)
        except httpx.TimeoutException as exc:
            self.log.debug("Connect timed out: %s (%s)", url, exc)
            return None
        except httpx.ConnectError as exc:
            self.log.debug("Unknown or unreachable host: %s (%s)", url, exc)
            return None
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            self.log.debug("Unexpected error downloading %s: %s", url, exc)
            return None
        if response.status_code == 404:
            self.log.debug("File not found: %s", url)
            return None
        if not response.is_success:
            self.log.debug("Download failed %s: HTTP %s", url, response.status_code)
            return None
        content = response.content
        elapsed = max(time.time() - start_time, 1e-3)
        self.log.info("Downloaded library %s (%d bytes, %.2fs)", url, len(content), elapsed)
        return content

    def _read_local(self, url: str) -> Optional[bytes]:
        try:
            content = read_file_url(url)
        except FileNotFoundError:
            self.log.debug("File not found: %s", url)
            return None
        except OSError as exc:
            self.log.debug("Unable to read %s: %s", url, exc)
            return None
        self.log.info("Copied library %s (%d bytes)", url, len(content))
        return content

    def _checksum_matches(self, coordinate: Coordinate, url: str, content: bytes) -> bool:
        actual = hashlib.sha256(content).digest()
        if actual == coordinate.checksum:
            return True
        self.log.warning(
            "*** INVALID CHECKSUM *** library=%s url=%s expected=%s actual=%s",
            coordinate,
            url,
            _b64(coordinate.checksum or b""),
            _b64(actual),
        )
        return False
