"""Applies a coordinate's relocation rules to its downloaded jar."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from runtimelibs.domain import CacheIOError, Coordinate, RelocationError

from .relocator import JarRelocator, Relocator


class RelocationHelper:
    """Produces (or reuses) the relocated variant of a library jar."""

    def __init__(
        self,
        save_directory: Path,
        relocator: Optional[Relocator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.save_directory = Path(save_directory)
        self.log = logger or logging.getLogger(self.__class__.__name__)
        self.relocator = relocator or JarRelocator(self.log)

    def apply_relocations(self, input_path: Path, coordinate: Coordinate) -> Path:
        if not coordinate.has_relocations or coordinate.relocated_path is None:
            return input_path

        target = self.save_directory / coordinate.relocated_path
        if target.exists():
            self.log.debug("Reusing relocated library %s -> %s", coordinate, target)
            return target

        tmp: Optional[Path] = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
            os.close(fd)
            tmp = Path(tmp_name)
            self.relocator.relocate(input_path, tmp, coordinate.relocations)
            os.replace(tmp, target)
        except RelocationError:
            raise
        except OSError as exc:
            raise CacheIOError("Unable to write relocated library", coordinate, target) from exc
        except Exception as exc:
            raise RelocationError(f"Failed to relocate library '{coordinate}': {exc}") from exc
        finally:
            if tmp is not None and tmp.exists():
                try:
                    tmp.unlink()
                except OSError as exc:
                    self.log.debug("Failed to delete temporary file %s: %s", tmp, exc)

        self.log.info("Relocations applied to %s -> %s", coordinate, target)
        return target
