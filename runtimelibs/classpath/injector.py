"""Host classpath injection contract."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import List, Protocol, Tuple, runtime_checkable


@runtime_checkable
class ClasspathInjector(Protocol):
    """Makes the classes in a jar visible to the running host.

    Implementations are host specific. Errors raised from :meth:`inject`
    abort the load of that library and reach the caller unchanged.
    """

    def inject(self, path: Path) -> None:
        ...


class ClasspathList:
    """Injector for hosts that start the JVM themselves and need a ``-cp`` value."""

    def __init__(self) -> None:
        self._paths: List[Path] = []
        self._lock = threading.Lock()

    def inject(self, path: Path) -> None:
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
