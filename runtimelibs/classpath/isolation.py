"""Isolated classpath units shared by libraries with the same id."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class IsolatedClasspath:
    """An independent classpath accumulating every jar loaded under one isolation id."""

    def __init__(self, isolation_id: str) -> None:
        self.isolation_id = isolation_id
        self._paths: List[Path] = []
        self._lock = threading.Lock()

    def add_path(self, path: Path) -> None:
        path = Path(path)
        with self._lock:
            if path not in self._paths:
                self._paths.append(path)

    @property
    def paths(self) -> Tuple[Path, ...]:
        with self._lock:
            return tuple(self._paths)

    def as_classpath(self) -> str:
        return os.pathsep.join(str(path) for path in self.paths)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and Path(path) in self.paths

    def __repr__(self) -> str:
        return f"IsolatedClasspath(id={self.isolation_id!r}, paths={len(self.paths)})"


class IsolationRegistry:
    """Maps isolation ids to their classpath unit; each unit is created once."""

    def __init__(self) -> None:
        self._units: Dict[str, IsolatedClasspath] = {}
        self._lock = threading.Lock()

    def get_or_create(self, isolation_id: str) -> IsolatedClasspath:
        with self._lock:
            unit = self._units.get(isolation_id)
            if unit is None:
                unit = IsolatedClasspath(isolation_id)
                self._units[isolation_id] = unit
            return unit

    def get(self, isolation_id: str) -> Optional[IsolatedClasspath]:
        with self._lock:
            return self._units.get(isolation_id)

    def __contains__(self, isolation_id: object) -> bool:
        with self._lock:
            return isolation_id in self._units

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)
