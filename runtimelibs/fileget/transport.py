"""HTTP client construction and local repository access."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from runtimelibs.settings import LibrarySettings


def is_file_url(url: str) -> bool:
    return url[:5].lower() == "file:"


def file_url_to_path(url: str) -> Path:
    return Path(url2pathname(urlparse(url).path))


def read_file_url(url: str) -> bytes:
    """Read a ``file:`` URL, e.g. an artifact in ``~/.m2/repository``.

    httpx only speaks HTTP, so local repositories are read from disk.
    Raises ``FileNotFoundError`` or another ``OSError``.
    """
    return file_url_to_path(url).read_bytes()


def build_client(settings: LibrarySettings) -> httpx.Client:
    """Create the client used for metadata lookups and jar downloads."""
    return httpx.Client(
        timeout=httpx.Timeout(settings.download_timeout),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )
