"""Import statement parser for TypeScript and JavaScript using tree-sitter.

Only top-level ``import`` statements are read. The TSX grammar is used for
every file since it accepts plain TypeScript, JSX and JavaScript imports.

Example:
    >>> infos = parse_imports("import React, { useState as useS } from 'react';")
    >>> [(d.name, d.alias, d.is_default) for d in infos[0].imports]
    [('React', None, True), ('useState', 'useS', False)]

Installation:
    pip install tree-sitter tree-sitter-typescript
"""

from typing import TYPE_CHECKING, List, Optional

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from .models import ImportDeclaration, ImportInfo

if TYPE_CHECKING:
    from tree_sitter import Node

_parser: Optional[Parser] = None


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(Language(ts_typescript.language_tsx()))
    return _parser


class ImportParser:
    """Collects ImportInfo records from one source text.

    Attributes:
        source: Source bytes being parsed.
        imports: Parsed import statements, in source order.
    """

    def __init__(self, source_text: str):
        self.source = bytes(source_text, "utf-8")
        self.imports: List[ImportInfo] = []

    def parse(self) -> List[ImportInfo]:
        tree = _get_parser().parse(self.source)
        for node in tree.root_node.children:
            if node.type == "import_statement":
                info = self._parse_statement(node)
                if info is not None:
                    self.imports.append(info)
        return self.imports

    def _text(self, node: "Node") -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def _parse_statement(self, node: "Node") -> Optional[ImportInfo]:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return None

        info = ImportInfo(source=self._string_value(source_node))
        for child in node.children:
            if child.type == "import_clause":
                self._parse_clause(child, info)
        return info

    def _string_value(self, node: "Node") -> str:
        for child in node.children:
            if child.type == "string_fragment":
                return self._text(child)
        return self._text(node).strip("\"'`")

    def _parse_clause(self, clause: "Node", info: ImportInfo) -> None:
        for child in clause.children:
            if child.type == "identifier":
                # import Foo from "module"
                info.imports.append(ImportDeclaration(name=self._text(child), is_default=True))
            elif child.type == "named_imports":
                for spec in child.children:
                    if spec.type == "import_specifier":
                        self._parse_specifier(spec, info)
            elif child.type == "namespace_import":
                for ns_child in child.children:
                    if ns_child.type == "identifier":
                        info.imports.append(
                            ImportDeclaration(name=self._text(ns_child), is_namespace=True)
                        )

    def _parse_specifier(self, spec: "Node", info: ImportInfo) -> None:
        name_node = spec.child_by_field_name("name")
        alias_node = spec.child_by_field_name("alias")
        if name_node is None:
            return

        name = self._text(name_node)
        alias = self._text(alias_node) if alias_node is not None else None
        if name == "default" and alias:
            # import { default as Foo } from "module"
            info.imports.append(ImportDeclaration(name=alias, is_default=True))
            return
        info.imports.append(ImportDeclaration(name=name, alias=alias))


def parse_imports(source_text: str) -> List[ImportInfo]:
    """Parse the top-level import statements of a source file.

    Args:
        source_text: TypeScript/JavaScript source.

    Returns:
        One ImportInfo per import statement, unresolved.
    """
    return ImportParser(source_text).parse()
