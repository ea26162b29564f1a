"""Structural jar rewriting."""

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import Optional, Protocol, Sequence, Set, Tuple
from zipfile import ZIP_DEFLATED, BadZipFile, ZipFile, ZipInfo

from runtimelibs.domain import RelocationError, RelocationRule

from .classfile import rewrite_utf8_constants
from .remapper import PackageRemapper

MANIFEST = "META-INF/MANIFEST.MF"
SERVICES_DIR = "META-INF/services/"
_SIGNATURE_SUFFIXES = (".SF", ".DSA", ".RSA", ".EC")


class Relocator(Protocol):
    def relocate(self, input_path: Path, output_path: Path, rules: Sequence[RelocationRule]) -> None:
        ...


def _is_signature_file(name: str) -> bool:
    if not name.startswith("META-INF/") or name.count("/") != 1:
        return False
    return name.upper().endswith(_SIGNATURE_SUFFIXES)


class JarRelocator:
    """Copies a jar while moving the packages named by the rules.

    Class files have their constant pools rewritten, resources are renamed,
    manifest and service-loader files are rewritten as text. Signature files
    are dropped because the rewritten classes no longer match them.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.log = logger or logging.getLogger(self.__class__.__name__)

    def relocate(self, input_path: Path, output_path: Path, rules: Sequence[RelocationRule]) -> None:
        remapper = PackageRemapper(rules)
        written: Set[str] = set()
        rewritten = 0
        try:
            with ZipFile(input_path, "r") as src, ZipFile(output_path, "w", ZIP_DEFLATED) as dst:
                for info in src.infolist():
                    if _is_signature_file(info.filename):
                        self.log.debug("Dropping signature file %s", info.filename)
                        continue
                    data = b"" if info.is_dir() else src.read(info)
                    name, new_data = self._transform(info.filename, data, remapper)
                    if name in written:
                        self.log.debug("Skipping duplicate entry %s (from %s)", name, info.filename)
                        continue
                    written.add(name)
                    if name != info.filename or new_data != data:
                        rewritten += 1
                    out_info = ZipInfo(name, date_time=info.date_time)
                    out_info.compress_type = ZIP_DEFLATED if info.compress_type != 0 else 0
                    out_info.external_attr = info.external_attr
                    dst.writestr(out_info, new_data)
        except (BadZipFile, zlib.error) as exc:
            raise RelocationError(f"{input_path} is not a valid jar: {exc}") from exc
        self.log.debug("Relocated %d of %d entries into %s", rewritten, len(written), output_path)

    def _transform(self, name: str, data: bytes, remapper: PackageRemapper) -> Tuple[str, bytes]:
        if name.endswith(".class"):
            try:
                data = rewrite_utf8_constants(data, remapper.remap)
            except RelocationError as exc:
                raise RelocationError(f"{name}: {exc}") from exc
            return remapper.remap_name(name), data
        if name == MANIFEST:
            return name, remapper.remap(data)
        if name.startswith(SERVICES_DIR) and not name.endswith("/"):
            service = name[len(SERVICES_DIR):]
            return SERVICES_DIR + remapper.remap(service.encode("utf-8")).decode("utf-8"), remapper.remap(data)
        return remapper.remap_name(name), data
