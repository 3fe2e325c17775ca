#!/usr/bin/env python3
"""File Path Locator - Turn module specifiers into existing files.

Relative specifiers (``./foo``, ``../bar``) are resolved against the
importing file's directory. Everything else goes through the project's
alias table and is probed under a fixed set of base directories, using
the framework routing conventions for ``page`` and ``index`` files.

Probe order (all of it is part of the resolution contract):
    base directories: project root, ``src/``, ``app/``
    suffixes:         ``<path>``, ``<path>/page``, ``<path>/index``
    extensions:       ``.ts``, ``.tsx``, ``.js``, ``.jsx``

Example:
    >>> locator = ImportLocator('/my/project', load_tsconfig('/my/project'))
    >>> locator.locate('@/components/Button', '/my/project/src/app.tsx')
    '/my/project/src/components/Button.tsx'
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from .path_resolver import PathResolver

logger = logging.getLogger(__name__)

EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
BASE_DIRS = ("", "src", "app")
PROBE_SUFFIXES = ("", "page", "index")

CONFIG_FILES = ("tsconfig.json", "jsconfig.json")


def _strip_json_comments(content: str) -> str:
    """Remove comments and trailing commas so tsconfig parses as JSON."""
    # Strings are matched first so "//" inside e.g. URLs survives
    pattern = r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/'
    content = re.sub(pattern, lambda m: m.group(1) or "", content, flags=re.DOTALL)
    return re.sub(r",(\s*[}\]])", r"\1", content)


def _parse_config(config_path: Path, seen: Set[str]) -> Dict[str, Any]:
    """Parse one config file, following its ``extends`` chain.

    Args:
        config_path: Path to the config file.
        seen: Already-parsed paths (prevents cycles).

    Returns:
        Dict with ``paths`` and ``baseUrl`` keys.
    """
    config_str = str(config_path.resolve())
    if config_str in seen:
        logger.warning("Circular extends in %s", config_path)
        return {"paths": {}, "baseUrl": ""}
    seen.add(config_str)

    try:
        content = config_path.read_text(encoding="utf-8")
        config = json.loads(_strip_json_comments(content))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Failed to load %s: %s", config_path, e)
        return {"paths": {}, "baseUrl": ""}

    if not isinstance(config, dict):
        return {"paths": {}, "baseUrl": ""}

    compiler_options = config.get("compilerOptions") or {}
    paths = compiler_options.get("paths") or {}
    base_url = compiler_options.get("baseUrl", "")
    if not isinstance(paths, dict):
        logger.warning("Ignoring non-object compilerOptions.paths in %s", config_path)
        paths = {}

    extends = config.get("extends")
    if isinstance(extends, str) and extends:
        parent_path = Path(extends)
        if not parent_path.is_absolute():
            parent_path = config_path.parent / extends
        if not parent_path.suffix:
            parent_path = parent_path.with_suffix(".json")

        parent = _parse_config(parent_path, seen)

        # Child overrides parent
        merged = dict(parent["paths"])
        merged.update(paths)
        paths = merged
        if not base_url:
            base_url = parent["baseUrl"]

    return {"paths": paths, "baseUrl": base_url}


def load_tsconfig(root: str, config_path: str = None) -> Dict[str, Any]:
    """Load ``compilerOptions`` path settings from tsconfig/jsconfig.

    Args:
        root: Project root directory.
        config_path: Explicit config file (auto-detected if None).

    Returns:
        ``{"compilerOptions": {"paths": ..., "baseUrl": ...}}``, or ``{}``
        when no usable config exists.
    """
    if config_path:
        candidates = [Path(config_path)]
    else:
        candidates = [Path(root) / name for name in CONFIG_FILES]

    for path in candidates:
        if path.exists():
            parsed = _parse_config(path, set())
            return {"compilerOptions": parsed}

    logger.debug("No tsconfig found under %s", root)
    return {}


def find_project_root(file_path: str) -> str:
    """Walk up from a file to the nearest directory with a project marker.

    Markers are tsconfig.json, jsconfig.json and package.json. Falls back to
    the file's own directory.
    """
    start = Path(file_path).resolve().parent
    for directory in [start, *start.parents]:
        if any((directory / marker).exists() for marker in (*CONFIG_FILES, "package.json")):
            return str(directory)
    return str(start)


def try_extensions(base_path: str) -> Optional[str]:
    """Return the first ``base_path + ext`` that exists, in EXTENSIONS order."""
    for ext in EXTENSIONS:
        full_path = base_path + ext
        if os.path.isfile(full_path):
            logger.debug("Found matching file: %s", full_path)
            return full_path
    return None


class ImportLocator:
    """Locate the file a module specifier refers to.

    Attributes:
        root: Absolute project root.
        resolver: Alias resolver built from ``compilerOptions.paths``.
        base_url: ``compilerOptions.baseUrl`` applied to non-relative targets.

    Example:
        >>> locator = ImportLocator('/my/project')
        >>> locator.locate('./helpers', '/my/project/src/app.ts')
        '/my/project/src/helpers.ts'
        >>> locator.locate('@/missing', '/my/project/src/app.ts') is None
        True
    """

    def __init__(self, root: str, tsconfig: Dict[str, Any] = None):
        """Initialize the locator.

        Args:
            root: Path to the project root directory.
            tsconfig: Parsed compiler config. Missing ``paths`` give a
                passthrough resolver.

        Raises:
            ValueError: If root path doesn't exist.
        """
        self.root = os.path.abspath(root)
        if not os.path.isdir(self.root):
            raise ValueError(f"Root path does not exist: {self.root}")

        compiler_options = (tsconfig or {}).get("compilerOptions") or {}
        self.base_url = compiler_options.get("baseUrl") or ""
        paths = compiler_options.get("paths") or {}

        self.resolver = PathResolver()
        if isinstance(paths, dict):
            for pattern, targets in paths.items():
                self.resolver.add_alias(pattern, self._apply_base_url(targets))
        else:
            logger.warning("Ignoring malformed compilerOptions.paths: %r", paths)

    def _apply_base_url(self, targets: Any) -> Any:
        if not self.base_url or self.base_url in (".", "./"):
            return targets
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(targets, list):
            return targets
        return [
            t
            if not isinstance(t, str) or t.startswith(".") or os.path.isabs(t)
            else f"{self.base_url.rstrip('/')}/{t}"
            for t in targets
        ]

    def candidates(self, specifier: str) -> List[str]:
        """Base paths probed for a non-relative specifier, in order."""
        match = self.resolver.resolve(specifier)
        if not match.resolved:
            return []
        # Only the first target is probed
        target = match.resolved[0]

        bases = []
        for base_dir in BASE_DIRS:
            joined = os.path.normpath(os.path.join(self.root, base_dir, target))
            for suffix in PROBE_SUFFIXES:
                bases.append(os.path.join(joined, suffix) if suffix else joined)
        return bases

    def locate(self, specifier: str, importing_file: str) -> Optional[str]:
        """Find the file a specifier refers to.

        Args:
            specifier: The module specifier as written.
            importing_file: Path of the file containing the import.

        Returns:
            Absolute path of the first existing match, or None.
        """
        if specifier.startswith("."):
            base = os.path.normpath(
                os.path.join(os.path.dirname(os.path.abspath(importing_file)), specifier)
            )
            return try_extensions(base)

        for base in self.candidates(specifier):
            found = try_extensions(base)
            if found:
                return found

        logger.debug("No file found for %s", specifier)
        return None
