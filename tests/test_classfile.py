import struct

import pytest

from helpers import build_class_file, utf8_values
from runtimelibs.domain import RelocationError
from runtimelibs.relocation import parse_constant_pool, rewrite_utf8_constants


def test_parse_handles_two_slot_constants():
    data = build_class_file("com/example/Demo", utf8=["hello"])
    constants, end = parse_constant_pool(data)

    indexes = [constant.index for constant in constants]
    # Utf8(1) Class(2) Utf8(3) Class(4) Long(5, occupies 6) Utf8(7)
    assert indexes == [1, 2, 3, 4, 5, 7]
    assert utf8_values(data) == ["com/example/Demo", "java/lang/Object", "hello"]
    assert struct.unpack_from(">H", data, end)[0] == 0x0021


def test_rewrite_changes_lengths_and_keeps_tail():
    data = build_class_file("com/example/Demo", strings=["com.example.Demo"])

    rewritten = rewrite_utf8_constants(data, lambda value: value.replace(b"com", b"shaded/com"))

    assert utf8_values(rewritten) == [
        "shaded/com/example/Demo",
        "java/lang/Object",
        "shaded/com.example.Demo",
    ]
    _, old_end = parse_constant_pool(data)
    _, new_end = parse_constant_pool(rewritten)
    assert rewritten[new_end:] == data[old_end:]


def test_identity_rewrite_is_byte_identical():
    data = build_class_file("com/example/Demo", utf8=["(Lcom/example/Demo;)V"])
    assert rewrite_utf8_constants(data, lambda value: value) == data


def test_bad_magic_is_rejected():
    data = b"\x00" * 4 + build_class_file("a/B")[4:]
    with pytest.raises(RelocationError):
        parse_constant_pool(data)


def test_truncated_class_is_rejected():
    data = build_class_file("com/example/Demo")
    with pytest.raises(RelocationError):
        parse_constant_pool(data[:15])
