import hashlib
import struct
from pathlib import Path
from typing import Dict, Iterable, List
from zipfile import ZipFile

from runtimelibs.relocation import parse_constant_pool
from runtimelibs.settings import LibrarySettings


def build_settings(tmp_path: Path, **overrides) -> LibrarySettings:
    defaults = {
        "data_directory": tmp_path,
        "directory_name": "libs",
    }
    defaults.update(overrides)
    return LibrarySettings(_env_file=None, **defaults)


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


class _Pool:
    def __init__(self) -> None:
        self.entries: List[bytes] = []
        self.next_index = 1

    def add(self, raw: bytes, slots: int = 1) -> int:
        index = self.next_index
        self.entries.append(raw)
        self.next_index += slots
        return index

    def utf8(self, text: str) -> int:
        data = text.encode("utf-8")
        return self.add(struct.pack(">BH", 1, len(data)) + data)

    def class_ref(self, name: str) -> int:
        return self.add(struct.pack(">BH", 7, self.utf8(name)))

    def string(self, text: str) -> int:
        return self.add(struct.pack(">BH", 8, self.utf8(text)))

    def long(self, value: int) -> int:
        return self.add(struct.pack(">Bq", 5, value), slots=2)


def build_class_file(
    name: str,
    super_name: str = "java/lang/Object",
    utf8: Iterable[str] = (),
    strings: Iterable[str] = (),
) -> bytes:
    """A minimal but well-formed class file with no members."""
    pool = _Pool()
    this_index = pool.class_ref(name)
    super_index = pool.class_ref(super_name)
    pool.long(42)
    for text in utf8:
        pool.utf8(text)
    for text in strings:
        pool.string(text)
    header = struct.pack(">IHHH", 0xCAFEBABE, 0, 52, pool.next_index)
    # access flags, this, super, interfaces, fields, methods, attributes
    body = struct.pack(">HHHHHHH", 0x0021, this_index, super_index, 0, 0, 0, 0)
    return header + b"".join(pool.entries) + body


def utf8_values(class_file: bytes) -> List[str]:
    constants, _ = parse_constant_pool(class_file)
    return [constant.value.decode("utf-8") for constant in constants if constant.is_utf8]


def build_jar(path: Path, entries: Dict[str, bytes]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def read_jar(path: Path) -> Dict[str, bytes]:
    with ZipFile(path) as zf:
        return {info.filename: zf.read(info) for info in zf.infolist()}
