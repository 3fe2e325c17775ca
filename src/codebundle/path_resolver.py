#!/usr/bin/env python3
"""Alias Resolver - Map module specifiers through tsconfig-style path aliases.

Aliases come from ``compilerOptions.paths`` and map a pattern to an ordered
list of targets. Patterns are either literal prefixes (``@lib/``) or globs
(``@/*``, ``#{app,lib}/*``, ``~[ab]/*``). Matching rules:

- Literal patterns are always tried before glob patterns.
- Within each class, longer patterns are tried first; ties keep
  declaration order.
- A literal pattern matches when the specifier starts with it.
- A glob pattern must match the whole specifier.
- The first matching alias wins. Only the literal prefix before the first
  wildcard is swapped for the target's prefix, the rest of the specifier is
  carried over unchanged.

Example:
    >>> resolver = PathResolver({"@/*": ["src/*"], "@lib/": ["lib/"]})
    >>> resolver.resolve("@/components/Button").resolved
    ['src/components/Button']
    >>> resolver.resolve("react").matched
    False
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Union

logger = logging.getLogger(__name__)

SEPARATOR = "/"
GLOB_CHARS = ("*", "?", "{", "[")


def normalize_separators(path: str) -> str:
    """Collapse runs of ``/`` or ``\\`` into a single ``/``."""
    return re.sub(r"[\\/]+", SEPARATOR, path)


def normalize_pattern(pattern: str) -> str:
    """Normalize separators and collapse a trailing run of ``*`` to one."""
    return re.sub(r"\*+$", "*", normalize_separators(pattern))


def is_glob_pattern(pattern: str) -> bool:
    return any(ch in pattern for ch in GLOB_CHARS)


def literal_prefix(pattern: str) -> str:
    """Return the part of a pattern before its first glob character."""
    for i, ch in enumerate(pattern):
        if ch in GLOB_CHARS:
            return pattern[:i]
    return pattern


def glob_to_regex(pattern: str) -> Pattern:
    """Compile a glob alias into an anchored regular expression.

    ``*`` becomes ``.*``, ``?`` becomes ``.``, ``[...]`` classes pass
    through and ``{a,b}`` becomes ``(a|b)``. Everything else is literal.
    """
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                out.append(pattern[i : end + 1])
                i = end
        elif ch == "{":
            end = pattern.find("}", i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                options = pattern[i + 1 : end].split(",")
                out.append("(" + "|".join(re.escape(opt) for opt in options) + ")")
                i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("^" + "".join(out) + "$")


@dataclass
class AliasConfig:
    """A single normalized alias entry.

    Attributes:
        pattern: Normalized alias pattern.
        targets: Normalized target patterns, in preference order.
        is_glob: Whether the pattern contains glob characters.
        prefix: Literal part of the pattern before the first glob character.
    """

    pattern: str
    targets: List[str]
    is_glob: bool = False
    prefix: str = ""
    _regex: Optional[Pattern] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        self.pattern = normalize_pattern(self.pattern)
        self.targets = [normalize_pattern(t) for t in self.targets]
        self.is_glob = is_glob_pattern(self.pattern)
        self.prefix = literal_prefix(self.pattern)
        if self.is_glob:
            try:
                self._regex = glob_to_regex(self.pattern)
            except re.error as e:
                logger.warning("Invalid alias pattern %r: %s", self.pattern, e)
                self._regex = None

    def matches(self, path: str) -> bool:
        """Check whether a normalized specifier is covered by this alias."""
        if not self.is_glob:
            return path.startswith(self.pattern)
        return self._regex is not None and self._regex.match(path) is not None

    def apply(self, path: str) -> List[str]:
        """Swap the alias prefix for each target's prefix.

        Args:
            path: A normalized specifier this alias matches.

        Returns:
            One candidate path per target, in target order.
        """
        remainder = path[len(self.prefix) :]
        return [literal_prefix(target) + remainder for target in self.targets]


@dataclass
class PathMatchResult:
    """Outcome of resolving one specifier.

    Attributes:
        original_path: The specifier with normalized separators.
        matched: Whether an alias matched.
        resolved: Candidate paths in order; ``[original_path]`` when
            nothing matched.
        used_alias: Pattern of the alias that matched, if any.
    """

    original_path: str
    matched: bool = False
    resolved: List[str] = field(default_factory=list)
    used_alias: Optional[str] = None


class PathResolver:
    """Resolve specifiers against a specificity-ordered alias table.

    Attributes:
        aliases: Alias entries in declaration order.

    Example:
        >>> resolver = PathResolver().add_alias("@components/*", ["src/components/*"])
        >>> resolver.resolve("@components/Button").resolved
        ['src/components/Button']
    """

    def __init__(self, alias_map: Dict[str, List[str]] = None):
        """Initialize the resolver.

        Args:
            alias_map: ``{pattern: [targets]}`` as found in
                ``compilerOptions.paths``. Missing or empty maps give a
                resolver that passes every specifier through unchanged.
        """
        self.aliases: List[AliasConfig] = []
        self._ordered: Optional[List[AliasConfig]] = None

        if alias_map and isinstance(alias_map, dict):
            for pattern, targets in alias_map.items():
                self.add_alias(pattern, targets)
        elif alias_map:
            logger.warning("Ignoring alias map of type %s", type(alias_map).__name__)

    def add_alias(self, pattern: str, targets: Union[str, List[str]]) -> "PathResolver":
        """Add or replace an alias.

        Args:
            pattern: Alias pattern (e.g. ``"@/*"``, ``"@lib/"``).
            targets: Target pattern(s) to try, in order.

        Returns:
            self, for method chaining.
        """
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(pattern, str) or not isinstance(targets, (list, tuple)):
            logger.warning("Skipping malformed alias %r -> %r", pattern, targets)
            return self
        targets = [t for t in targets if isinstance(t, str)]

        entry = AliasConfig(pattern=pattern, targets=targets)
        for i, existing in enumerate(self.aliases):
            if existing.pattern == entry.pattern:
                self.aliases[i] = entry
                break
        else:
            self.aliases.append(entry)

        self._ordered = None
        return self

    def clear_aliases(self) -> "PathResolver":
        """Remove all configured aliases."""
        self.aliases.clear()
        self._ordered = None
        return self

    def ordered_aliases(self) -> List[AliasConfig]:
        """Aliases in the order they are tried."""
        if self._ordered is None:
            # sorted() is stable, so ties keep declaration order
            self._ordered = sorted(self.aliases, key=lambda a: (a.is_glob, -len(a.pattern)))
        return self._ordered

    def resolve(self, specifier: str) -> PathMatchResult:
        """Resolve a module specifier to candidate paths.

        Args:
            specifier: The import specifier as written in source.

        Returns:
            PathMatchResult with the candidates to try.
        """
        normalized = normalize_separators(specifier)
        result = PathMatchResult(original_path=normalized)

        for alias in self.ordered_aliases():
            if alias.matches(normalized):
                result.matched = True
                result.used_alias = alias.pattern
                result.resolved = alias.apply(normalized)
                break

        if not result.matched:
            result.resolved = [normalized]

        return result
