"""Jar relocation (package namespace rewriting)."""

from .classfile import parse_constant_pool, rewrite_utf8_constants
from .helper import RelocationHelper
from .relocator import JarRelocator, Relocator
from .remapper import PackageRemapper

__all__ = [
    "JarRelocator",
    "PackageRemapper",
    "RelocationHelper",
    "Relocator",
    "parse_constant_pool",
    "rewrite_utf8_constants",
]
