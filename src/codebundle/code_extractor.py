#!/usr/bin/env python3
"""Declaration Extractor - Pull imported top-level declarations out of source.

This is a line-oriented scanner, not a parser. A declaration starts on a
line matching ``[export] [default] [async] function|class|interface|type|const
Name`` and ends on the first line where the running ``{``/``}`` balance is
back to zero and the line contains ``}`` or ``;``.

Known limitation: braces inside strings, template literals, comments and
regular expressions are counted like any other brace.

Example:
    >>> source = '''
    ... export function add(a: number, b: number) {
    ...   return a + b;
    ... }
    ... export const PI = 3.14;
    ... '''
    >>> info = ImportInfo("./math", [ImportDeclaration("add")])
    >>> [e.name for e in CodeExtractor().extract_imported_entities(source, info)]
    ['add']
"""

import logging
import re
from typing import List, Optional, Sequence, Set, Union

from .models import ExtractedContent, ImportInfo

logger = logging.getLogger(__name__)

DECLARATION_RE = re.compile(
    r"^(?:export\s+)?(default\s+)?(?:async\s+)?"
    r"(?:function|class|interface|type|const)\s+([A-Za-z0-9_]+)"
)
CLOSING_RE = re.compile(r"[};]")
EXPORT_DEFAULT_RE = re.compile(r"^\s*export\s+default\s+")
BLANK_RUN_RE = re.compile(r"\n\s*\n\s*\n")


def format_declaration(content: str) -> str:
    """Normalize extracted text for output.

    Collapses runs of blank lines to one, drops a leading ``export default``
    and wraps the result in exactly one leading and trailing newline.
    """
    content = BLANK_RUN_RE.sub("\n\n", content)
    content = EXPORT_DEFAULT_RE.sub("", content, count=1)
    return f"\n{content.strip()}\n"


def is_imported(name: str, imports: Sequence[ImportInfo], is_default_export: bool = False) -> bool:
    """Check whether a declared name is referenced by any import binding.

    Args:
        name: Declared identifier.
        imports: Import statements targeting the file.
        is_default_export: Whether the declaration was ``export default``.

    Returns:
        True if a binding names it, aliases it, default-imports it, or a
        namespace import covers the whole file.
    """
    for import_info in imports:
        for imp in import_info.imports:
            if imp.is_namespace:
                return True
            if imp.name == name or imp.alias == name:
                return True
            if imp.is_default and (is_default_export or name == "default"):
                return True
    return False


class CodeExtractor:
    """Extract the declarations an import actually uses.

    Attributes:
        seen_declarations: Names already emitted by the current call.
            Cleared at the start of every call.
    """

    def __init__(self):
        self.seen_declarations: Set[str] = set()

    def extract_imported_entities(
        self,
        source_text: str,
        import_info: Union[ImportInfo, Sequence[ImportInfo]],
    ) -> List[ExtractedContent]:
        """Extract the declarations referenced by an import.

        Args:
            source_text: Full text of the imported file.
            import_info: The import statement (or statements) targeting it.

        Returns:
            Declarations in source order, first occurrence of each name only.
        """
        self.seen_declarations.clear()
        imports = [import_info] if isinstance(import_info, ImportInfo) else list(import_info)
        return self._find_declarations(source_text, imports)

    def _find_declarations(
        self, source_text: str, imports: List[ImportInfo]
    ) -> List[ExtractedContent]:
        extracted: List[ExtractedContent] = []
        lines = source_text.split("\n")

        collecting = False
        buffer: List[str] = []
        depth = 0
        name: Optional[str] = None
        is_default = False
        start = 0

        def store(end: int) -> None:
            if (
                name
                and name not in self.seen_declarations
                and is_imported(name, imports, is_default)
            ):
                self.seen_declarations.add(name)
                extracted.append(
                    ExtractedContent(
                        name=name,
                        content=format_declaration("\n".join(buffer)),
                        start=start,
                        end=end,
                    )
                )

        for i, raw_line in enumerate(lines):
            line = raw_line.strip()

            if not collecting:
                match = DECLARATION_RE.match(line)
                if not match:
                    continue
                collecting = True
                is_default = match.group(1) is not None
                name = match.group(2)
                start = i
                buffer = [raw_line]
                depth = line.count("{") - line.count("}")
            else:
                buffer.append(raw_line)
                depth += line.count("{") - line.count("}")

            if depth == 0 and CLOSING_RE.search(line):
                store(i)
                collecting = False
                buffer = []
                name = None
                depth = 0

        if collecting:
            logger.warning(
                "Unterminated declaration %r starting at line %d, closing at end of file",
                name,
                start + 1,
            )
            store(len(lines) - 1)

        return extracted


def extract_imported_entities(
    source_text: str, import_info: Union[ImportInfo, Sequence[ImportInfo]]
) -> List[ExtractedContent]:
    """Convenience wrapper around CodeExtractor.extract_imported_entities."""
    return CodeExtractor().extract_imported_entities(source_text, import_info)
