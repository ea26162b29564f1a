"""Ordered set of repository base URLs."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List

from runtimelibs.domain import ConfigurationError, normalize_repository_url


class RepositoryRegistry:
    """Insertion-ordered, de-duplicated repository URLs shared by one manager.

    The order of insertion is the fallback priority. Entries are never removed.
    """

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: Dict[str, None] = {}
        self._lock = threading.Lock()
        self.add_all(urls)

    def add(self, url: str) -> str:
        repo = normalize_repository_url(url)
        with self._lock:
            self._urls.setdefault(repo, None)
        return repo

    def add_all(self, urls: Iterable[str]) -> None:
        for url in urls:
            self.add(url)

    @property
    def urls(self) -> List[str]:
        with self._lock:
            return list(self._urls)

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        try:
            repo = normalize_repository_url(url)
        except ConfigurationError:
            return False
        with self._lock:
            return repo in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __iter__(self):
        return iter(self.urls)
