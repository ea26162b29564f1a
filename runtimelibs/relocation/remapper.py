"""Package-name matching and rewriting for relocation rules."""

from __future__ import annotations

import re
from typing import List, Pattern, Sequence

from runtimelibs.domain import RelocationRule

# A slashed name starts a token after a non-name character or at the leading
# ``/`` of an absolute resource path. Inside descriptors it follows the ``L``
# of an object type, which may come straight after a primitive type code as
# in ``(ILcom/x/A;)V``.
_SLASH_LEAD = r"(?:(?<![\w$./])|(?<=(?<![\w$./])L)|(?<=[BCDFIJSZ]L)|(?<=^/))"
_DOT_LEAD = r"(?<![\w$./])"
_TAIL = r"(?![\w$])"

_MULTI_RELEASE = re.compile(r"^(META-INF/versions/\d+/)(.*)$", re.DOTALL)


def _ant_regex(pattern: str) -> Pattern[str]:
    """Compile an Ant-style class pattern (``*``, ``**``, ``?``) over slashed names."""
    path = pattern.replace(".", "/")
    out: List[str] = []
    i = 0
    while i < len(path):
        if path.startswith("**", i):
            out.append(".*")
            i += 2
        elif path[i] == "*":
            out.append("[^/]*")
            i += 1
        elif path[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(path[i]))
            i += 1
    return re.compile("".join(out) + r"\Z")


class _RuleFilter:
    def __init__(self, rule: RelocationRule) -> None:
        self.includes = self._compile(rule.includes)
        self.excludes = self._compile(rule.excludes)

    @staticmethod
    def _compile(patterns: Sequence[str]) -> List[Pattern[str]]:
        compiled = []
        for pattern in patterns:
            compiled.append(_ant_regex(pattern))
            normalized = pattern.replace(".", "/")
            # "a.b.*" also names the package "a/b" itself
            for suffix in ("/**", "/*"):
                if normalized.endswith(suffix):
                    compiled.append(_ant_regex(normalized[: -len(suffix)]))
                    break
        return compiled

    def allows(self, name: str) -> bool:
        if name.endswith(".class"):
            name = name[: -len(".class")]
        if any(p.match(name) for p in self.excludes):
            return False
        return not self.includes or any(p.match(name) for p in self.includes)


class PackageRemapper:
    """Rewrites package references for a set of rules in a single pass.

    Both the slashed (``com/google/gson/Gson``) and the dotted
    (``com.google.gson.Gson``) forms are recognised. Each match is rewritten
    by exactly one rule; longer patterns are tried first.
    """

    def __init__(self, rules: Sequence[RelocationRule]) -> None:
        self.rules = sorted(rules, key=lambda rule: len(rule.pattern), reverse=True)
        self._filters = [_RuleFilter(rule) for rule in self.rules]
        alternatives = []
        for index, rule in enumerate(self.rules):
            slash = re.escape(rule.path_pattern)
            dot = re.escape(rule.pattern)
            alternatives.append(rf"(?P<s{index}>{_SLASH_LEAD}{slash}(?:/[\w$]+)*){_TAIL}")
            alternatives.append(rf"(?P<d{index}>{_DOT_LEAD}{dot}(?:\.[\w$]+)*){_TAIL}")
        self._regex = re.compile("|".join(alternatives).encode("utf-8")) if alternatives else None

    def remap(self, value: bytes) -> bytes:
        if self._regex is None:
            return value
        return self._regex.sub(self._replace, value)

    def remap_name(self, name: str) -> str:
        """Relocate a jar entry name, keeping any multi-release prefix."""
        prefix = ""
        match = _MULTI_RELEASE.match(name)
        if match:
            prefix, name = match.group(1), match.group(2)
        return prefix + self.remap(name.encode("utf-8")).decode("utf-8")

    def _replace(self, match: "re.Match[bytes]") -> bytes:
        group = match.lastgroup or ""
        rule_index = int(group[1:])
        rule = self.rules[rule_index]
        token = match.group(group)
        if group.startswith("s"):
            source, target = rule.path_pattern, rule.relocated_path_pattern
            name = token.decode("utf-8", errors="replace")
        else:
            source, target = rule.pattern, rule.relocated_pattern
            name = token.decode("utf-8", errors="replace").replace(".", "/")
        if not self._filters[rule_index].allows(name):
            return token
        return target.encode("utf-8") + token[len(source.encode("utf-8")):]
