#!/usr/bin/env python3
"""Import Tree Builder - Expand a file's imports into a bounded-depth forest.

Every traversal threads one explicit ``processed_paths`` set through all
recursive calls. It is seeded with the starting file and each resolved path
is added before its own imports are expanded, so:

- a file reached from two branches is expanded only once, and
- import cycles (A -> B -> A) terminate at any depth.

A later statement that targets a file already in the forest adds no node,
but its bindings are merged into the existing node's ImportInfo so the
extractor still sees them (``import type { Props }`` followed by
``import { Button }`` from the same module).

Branches are expanded depth-first, one sibling at a time. ``max_depth=1``
resolves direct imports only; each extra level allows one more hop.

Example:
    >>> locator = ImportLocator('/my/project', load_tsconfig('/my/project'))
    >>> builder = ImportTreeBuilder(locator)
    >>> source = Path('/my/project/src/app.tsx').read_text()
    >>> trees = builder.resolve_import_paths(parse_imports(source), '/my/project/src/app.tsx', 2)
    >>> [t.path for t in trees]
    ['/my/project/src/components/Button.tsx']
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

import networkx as nx

from .import_parser import parse_imports as default_parse_imports
from .import_resolver import ImportLocator, load_tsconfig
from .models import ImportInfo, ResolvedImportTree

logger = logging.getLogger(__name__)

ParseImports = Callable[[str], List[ImportInfo]]
ReadFile = Callable[[str], Optional[str]]


def read_text_file(path: str) -> Optional[str]:
    """Read a UTF-8 source file, or None when it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def merge_declarations(target: ImportInfo, other: ImportInfo) -> None:
    """Append the bindings of ``other`` that ``target`` does not have yet."""
    for imp in other.imports:
        if imp not in target.imports:
            target.imports.append(imp)


class ImportTreeBuilder:
    """Resolve imports recursively into ResolvedImportTree nodes.

    Attributes:
        locator: Maps specifiers to files.
        parse_imports: ``source_text -> [ImportInfo]``.
        read_file: ``path -> text``, returning None (or raising OSError)
            when the file cannot be read.
    """

    def __init__(
        self,
        locator: ImportLocator,
        parse_imports: ParseImports = None,
        read_file: ReadFile = None,
    ):
        self.locator = locator
        self.parse_imports = parse_imports or default_parse_imports
        self.read_file = read_file or read_text_file

    def resolve_import_paths(
        self,
        imports: List[ImportInfo],
        current_file_path: str,
        max_depth: int = 1,
        processed_paths: Set[str] = None,
    ) -> List[ResolvedImportTree]:
        """Resolve a file's imports, expanding nested imports up to max_depth.

        Args:
            imports: Import statements of ``current_file_path``. Resolved
                entries get ``resolved_path`` filled in place.
            current_file_path: File the imports belong to.
            max_depth: Hops to follow; 1 means direct imports only.
            processed_paths: Paths already visited in this traversal. Pass the
                same set to continue a traversal; None starts a new one.

        Returns:
            Trees for the imports that resolved to a not-yet-visited file.
            A statement that resolves to a file already emitted in this
            call has its bindings merged into that file's node.
        """
        if processed_paths is None:
            processed_paths = set()
        if max_depth < 1:
            logger.warning("max_depth %d is below 1, using 1", max_depth)
            max_depth = 1

        return self._resolve(imports, current_file_path, max_depth, processed_paths, {})

    def _resolve(
        self,
        imports: List[ImportInfo],
        current_file_path: str,
        max_depth: int,
        processed_paths: Set[str],
        emitted: Dict[str, ImportInfo],
    ) -> List[ResolvedImportTree]:
        processed_paths.add(os.path.abspath(current_file_path))
        trees: List[ResolvedImportTree] = []

        for import_info in imports:
            resolved_path = self.locator.locate(import_info.source, current_file_path)
            if not resolved_path:
                logger.warning(
                    "Could not resolve import %r from %s", import_info.source, current_file_path
                )
                continue
            if resolved_path in processed_paths:
                logger.debug("Skipping already processed %s", resolved_path)
                import_info.resolved_path = resolved_path
                if resolved_path in emitted:
                    merge_declarations(emitted[resolved_path], import_info)
                continue

            # Mark before recursing so siblings and cycles see it
            processed_paths.add(resolved_path)
            import_info.resolved_path = resolved_path
            tree = ResolvedImportTree(import_info=import_info)

            nested = None
            if max_depth > 1:
                nested = self._nested_imports(resolved_path)
                if nested is None:
                    continue

            emitted[resolved_path] = import_info
            if nested is not None:
                tree.nested_imports = self._resolve(
                    nested, resolved_path, max_depth - 1, processed_paths, emitted
                )

            trees.append(tree)

        return trees

    def _nested_imports(self, path: str) -> Optional[List[ImportInfo]]:
        try:
            text = self.read_file(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", path, e)
            return None
        if text is None:
            logger.warning("Skipping unreadable import target %s", path)
            return None
        try:
            return self.parse_imports(text)
        except Exception as e:
            logger.warning("Failed to parse imports of %s: %s", path, e)
            return None


def build_graph(trees: Iterable[ResolvedImportTree], root_path: str) -> "nx.DiGraph":
    """Build a directed importer -> imported graph from a resolved forest.

    Args:
        trees: Forest returned by ``resolve_import_paths``.
        root_path: File whose imports the forest describes.

    Returns:
        NetworkX DiGraph with one node per file.
    """
    graph = nx.DiGraph()
    root = os.path.abspath(root_path)
    graph.add_node(root)

    def _add(parent: str, children: Iterable[ResolvedImportTree]) -> None:
        for child in children:
            graph.add_edge(parent, child.path, source=child.import_info.source)
            _add(child.path, child.nested_imports or [])

    _add(root, trees)
    return graph


def graph_stats(graph: "nx.DiGraph", root_path: str) -> Dict[str, Any]:
    """Summarize a graph produced by build_graph.

    Returns:
        Dict with file, edge and depth counts.
    """
    root = os.path.abspath(root_path)
    if root not in graph:
        return {"files": 0, "edges": 0, "max_depth": 0, "leaf_files": 0}

    distances = nx.single_source_shortest_path_length(graph, root)
    return {
        "files": graph.number_of_nodes(),
        "edges": graph.number_of_edges(),
        "max_depth": max(distances.values()),
        "leaf_files": sum(1 for n in graph if n != root and graph.out_degree(n) == 0),
    }


def resolve_import_tree(
    file_path: str,
    root: str,
    max_depth: int = 1,
    tsconfig_path: str = None,
) -> List[ResolvedImportTree]:
    """Resolve the import tree of one file.

    Convenience wrapper that loads the project's tsconfig, reads and parses
    the file and starts a fresh traversal.

    Args:
        file_path: File whose imports to resolve.
        root: Project root directory.
        max_depth: Hops to follow.
        tsconfig_path: Explicit tsconfig (auto-detected if None).

    Returns:
        Resolved import forest, or an empty list if the file can't be read.
    """
    locator = ImportLocator(root, load_tsconfig(root, tsconfig_path))
    builder = ImportTreeBuilder(locator)
    text = read_text_file(file_path)
    if text is None:
        return []
    return builder.resolve_import_paths(default_parse_imports(text), file_path, max_depth)
