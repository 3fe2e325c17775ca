#!/usr/bin/env python3
"""Data records shared by the resolver, tree builder and extractor.

Example:
    >>> info = ImportInfo("@/utils/format", [ImportDeclaration("formatDate")])
    >>> info.resolved
    False
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass
class ImportDeclaration:
    """One binding introduced by an import statement.

    Attributes:
        name: Imported name (local name for default and namespace imports).
        alias: Local name when imported as ``{ name as alias }``.
        is_default: Whether this is a default import.
        is_namespace: Whether this is a ``* as ns`` import.
    """

    name: str
    alias: Optional[str] = None
    is_default: bool = False
    is_namespace: bool = False


@dataclass
class ImportInfo:
    """A single import statement.

    Attributes:
        source: The module specifier as written.
        imports: Bindings in statement order.
        resolved_path: Absolute path of the target file, empty until resolved.
    """

    source: str
    imports: List[ImportDeclaration] = field(default_factory=list)
    resolved_path: str = ""

    @property
    def resolved(self) -> bool:
        """Whether the specifier has been mapped to a file."""
        return bool(self.resolved_path)

    @property
    def is_namespace(self) -> bool:
        return any(imp.is_namespace for imp in self.imports)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "resolved_path": self.resolved_path,
            "imports": [
                {
                    "name": imp.name,
                    "alias": imp.alias,
                    "is_default": imp.is_default,
                    "is_namespace": imp.is_namespace,
                }
                for imp in self.imports
            ],
        }


@dataclass
class ExtractedContent:
    """A declaration pulled out of a source file.

    Attributes:
        name: Declared identifier.
        content: Formatted declaration text, wrapped in one leading and
            one trailing newline.
        start: 0-based line where the declaration starts.
        end: 0-based line where the closing token was found.
    """

    name: str
    content: str
    start: int = 0
    end: int = 0

    @property
    def location(self) -> Tuple[int, int]:
        return (self.start, self.end)


@dataclass
class ResolvedImportTree:
    """A resolved import and, when expanded, the imports of its target file.

    Attributes:
        import_info: The resolved import statement.
        nested_imports: Trees for the target file's own imports, or None
            when the depth limit stopped expansion.
    """

    import_info: ImportInfo
    nested_imports: Optional[List["ResolvedImportTree"]] = None

    @property
    def path(self) -> str:
        return self.import_info.resolved_path

    @property
    def depth(self) -> int:
        """Number of hops in the deepest branch (1 for a leaf)."""
        if not self.nested_imports:
            return 1
        return 1 + max(child.depth for child in self.nested_imports)

    def walk(self) -> Iterator["ResolvedImportTree"]:
        """Yield this node and all descendants, depth-first pre-order."""
        yield self
        for child in self.nested_imports or []:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data = self.import_info.to_dict()
        if self.nested_imports is not None:
            data["nested_imports"] = [child.to_dict() for child in self.nested_imports]
        return data
