"""Package relocation rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .constants import PACKAGE_PLACEHOLDER
from .exceptions import ConfigurationError


def _normalize(value: Optional[str], name: str) -> str:
    if not value:
        raise ConfigurationError(f"{name} is required")
    return value.replace(PACKAGE_PLACEHOLDER, ".")


@dataclass(frozen=True)
class RelocationRule:
    """Rewrites every class and resource under ``pattern`` to ``relocated_pattern``.

    Both patterns are dotted package names. ``{}`` may be used instead of
    ``.`` so that shading plugins do not rewrite the literal at build time,
    e.g. ``RelocationRule("com{}google{}gson", "my{}plugin{}libs{}gson")``.
    """

    pattern: str
    relocated_pattern: str
    includes: Tuple[str, ...] = ()
    excludes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", _normalize(self.pattern, "pattern"))
        object.__setattr__(self, "relocated_pattern", _normalize(self.relocated_pattern, "relocated_pattern"))
        object.__setattr__(self, "includes", tuple(self.includes or ()))
        object.__setattr__(self, "excludes", tuple(self.excludes or ()))

    @property
    def path_pattern(self) -> str:
        return self.pattern.replace(".", "/")

    @property
    def relocated_path_pattern(self) -> str:
        return self.relocated_pattern.replace(".", "/")

    @staticmethod
    def builder() -> "RelocationRuleBuilder":
        return RelocationRuleBuilder()


@dataclass
class RelocationRuleBuilder:
    """Mutable staging area for a :class:`RelocationRule`."""

    _pattern: Optional[str] = None
    _relocated_pattern: Optional[str] = None
    _includes: List[str] = field(default_factory=list)
    _excludes: List[str] = field(default_factory=list)

    def pattern(self, pattern: str) -> "RelocationRuleBuilder":
        self._pattern = pattern
        return self

    def relocated_pattern(self, relocated_pattern: str) -> "RelocationRuleBuilder":
        self._relocated_pattern = relocated_pattern
        return self

    def include(self, *patterns: str) -> "RelocationRuleBuilder":
        self._includes.extend(_require_all(patterns, "include"))
        return self

    def exclude(self, *patterns: str) -> "RelocationRuleBuilder":
        self._excludes.extend(_require_all(patterns, "exclude"))
        return self

    def build(self) -> RelocationRule:
        return RelocationRule(
            self._pattern or "",
            self._relocated_pattern or "",
            tuple(self._includes),
            tuple(self._excludes),
        )


def _require_all(values: Iterable[str], name: str) -> List[str]:
    result = list(values)
    if any(not value for value in result):
        raise ConfigurationError(f"{name} pattern must not be empty")
    return result
