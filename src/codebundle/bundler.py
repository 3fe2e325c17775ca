#!/usr/bin/env python3
"""Bundle a file with only the declarations it imports.

The bundle is plain text: the main file in full, followed by one block per
resolved import holding just the declarations that import references. Each
block is wrapped as::

    <file path="src/utils/format.ts">
    ...
    </file>

Example:
    >>> bundler = Bundler('/my/project')
    >>> result = bundler.bundle('/my/project/src/app.tsx', trees)
    >>> print(result.line_count, size_indicator(result.line_count).label)
    42 optimal
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from .code_extractor import CodeExtractor
from .dependency_tree import ReadFile, read_text_file
from .models import ResolvedImportTree

logger = logging.getLogger(__name__)

SIZE_LIMITS = {
    "optimal": 1000,
    "warning": 2000,
}


@dataclass
class SizeIndicator:
    """How comfortable a bundle size is for pasting into an assistant."""

    label: str
    message: str


def size_indicator(line_count: int) -> SizeIndicator:
    """Classify a bundle by its line count."""
    if line_count <= SIZE_LIMITS["optimal"]:
        return SizeIndicator("optimal", "Optimal size for AI assistance")
    if line_count <= SIZE_LIMITS["warning"]:
        return SizeIndicator("large", "Large file - Consider selecting specific sections")
    return SizeIndicator("very_large", "Very large file - AI assistance may be limited")


def add_file_delimiters(file_path: str, content: str) -> str:
    return f'<file path="{file_path}">\n{content}\n</file>\n'


@dataclass
class BundleResult:
    """A composed bundle.

    Attributes:
        text: The bundle text, trimmed.
        entity_count: Distinct declarations included.
        file_count: Imported files that contributed declarations.
        line_count: Lines in ``text``.
    """

    text: str
    entity_count: int = 0
    file_count: int = 0
    line_count: int = 0


class Bundler:
    """Compose bundles from a main file and its resolved import forest.

    Attributes:
        root: Project root; paths inside it are shown relative to it.
        extractor: Declaration extractor.
        read_file: ``path -> text`` or None.
    """

    def __init__(
        self,
        root: str,
        extractor: CodeExtractor = None,
        read_file: ReadFile = None,
    ):
        """Initialize the bundler.

        Raises:
            ValueError: If root path doesn't exist.
        """
        self.root = os.path.abspath(root)
        if not os.path.isdir(self.root):
            raise ValueError(f"Root path does not exist: {self.root}")
        self.extractor = extractor or CodeExtractor()
        self.read_file = read_file or read_text_file

    def display_path(self, path: str) -> str:
        abs_path = os.path.abspath(path)
        if abs_path == self.root or abs_path.startswith(self.root + os.sep):
            return os.path.relpath(abs_path, self.root).replace(os.sep, "/")
        return path

    def bundle(
        self,
        main_file: str,
        trees: Iterable[ResolvedImportTree] = None,
        select: Set[str] = None,
    ) -> BundleResult:
        """Build the bundle for a file.

        Args:
            main_file: The file being bundled; included in full.
            trees: Its resolved import forest. None bundles the file alone.
            select: If given, only imported files whose resolved path is in
                this set are included.

        Returns:
            BundleResult with the text and counts.

        Raises:
            ValueError: If the main file cannot be read.
        """
        main_text = self._read(main_file)
        if main_text is None:
            raise ValueError(f"Cannot read file: {main_file}")

        parts = [add_file_delimiters(self.display_path(main_file), main_text.strip())]
        processed: Dict[str, str] = {}
        contributing: Set[str] = set()

        for node in self._flatten(trees or []):
            path = node.path
            if select is not None and path not in select:
                continue

            block = self._extract_block(node, processed)
            if block:
                parts.append(add_file_delimiters(self.display_path(path), block))
                contributing.add(path)

        text = "".join(parts).strip()
        return BundleResult(
            text=text,
            entity_count=len(processed),
            file_count=len(contributing),
            line_count=len(text.split("\n")),
        )

    def _read(self, path: str) -> Optional[str]:
        try:
            return self.read_file(path)
        except OSError as e:
            logger.warning("Failed to read %s: %s", path, e)
            return None

    def _flatten(self, trees: Iterable[ResolvedImportTree]) -> List[ResolvedImportTree]:
        nodes = []
        for tree in trees:
            nodes.extend(tree.walk())
        return nodes

    def _extract_block(self, node: ResolvedImportTree, processed: Dict[str, str]) -> Optional[str]:
        """Return the declarations a node contributes, or None."""
        text = self._read(node.path)
        if text is None:
            logger.warning("Skipping %s: file could not be read", node.path)
            return None

        new_content = ""
        for entity in self.extractor.extract_imported_entities(text, node.import_info):
            key = f"{node.path}:{entity.name}"
            if key in processed:
                continue
            new_content += entity.content + "\n"
            processed[key] = entity.content

        new_content = new_content.strip()
        return new_content or None
