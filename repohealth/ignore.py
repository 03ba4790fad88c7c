"""Gitignore-style exclusion rules for workspace walks."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, List, Sequence

ALWAYS_EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".venv",
        "node_modules",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
    }
)


@dataclass(frozen=True)
class ExcludeRule:
    """One exclude pattern such as ``build/``, ``/vendor`` or ``*.tmp``."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def build_rules(patterns: Iterable[str]) -> List[ExcludeRule]:
    rules: List[ExcludeRule] = []
    for pattern in patterns:
        rule = build_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def is_excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def should_descend(name: str, rel_path: str, rules: Sequence[ExcludeRule]) -> bool:
    """Return True when a walk should enter the directory ``name``."""
    if name.startswith(".") or name in ALWAYS_EXCLUDED_DIRS:
        return False
    return not is_excluded(rel_path, True, rules)


__all__ = [
    "ALWAYS_EXCLUDED_DIRS",
    "ExcludeRule",
    "build_rule",
    "build_rules",
    "is_excluded",
    "should_descend",
]
