#!/usr/bin/env python3
"""Command-line interface for codebundle.

Prints a file together with the declarations it imports, ready to paste
into an AI assistant.

Example:
    $ codebundle src/app/page.tsx
    $ codebundle src/app/page.tsx -d 2 -o bundle.txt --stats
    $ codebundle src/app/page.tsx --tree -d 3
    $ codebundle src/app/page.tsx --current-only
    $ codebundle src/app/page.tsx -d 2 --only src/lib/format.ts
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List

from . import __version__
from .bundler import Bundler, size_indicator
from .colors import Colors, get_colors
from .dependency_tree import ImportTreeBuilder, build_graph, graph_stats, read_text_file
from .import_parser import parse_imports
from .import_resolver import ImportLocator, find_project_root, load_tsconfig
from .models import ResolvedImportTree


def add_bundle_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the bundle command's arguments to a parser."""
    parser.add_argument("file", help="Source file to bundle")
    parser.add_argument(
        "-r",
        "--root",
        help="Project root (default: nearest directory with tsconfig.json or package.json)",
    )
    parser.add_argument("--tsconfig", help="Path to tsconfig.json (default: auto-detect)")
    parser.add_argument(
        "-d",
        "--depth",
        type=int,
        default=1,
        help="Import hops to follow (default: 1, direct imports only)",
    )
    parser.add_argument(
        "--current-only", action="store_true", help="Bundle only the file itself"
    )
    parser.add_argument(
        "--tree", action="store_true", help="Print the resolved import tree instead of a bundle"
    )
    parser.add_argument("--json", action="store_true", help="With --tree, output JSON")
    parser.add_argument(
        "--only",
        action="append",
        metavar="PATH",
        help="Include only this imported file in the bundle (repeatable)",
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print bundle and graph statistics to stderr"
    )
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")


def format_tree(trees: List[ResolvedImportTree], bundler: Bundler, c: Colors, level: int = 0) -> List[str]:
    """Render a resolved import forest as indented lines."""
    lines = []
    for tree in trees:
        indent = "  " * level
        lines.append(
            f"{indent}{c.path(bundler.display_path(tree.path))} "
            f"{c.dim('(' + tree.import_info.source + ')')}"
        )
        if tree.nested_imports:
            lines.extend(format_tree(tree.nested_imports, bundler, c, level + 1))
    return lines


def run_bundle(args: argparse.Namespace) -> None:
    """Execute the bundle command."""
    c = get_colors(args.no_color)
    err = get_colors(args.no_color, stream=sys.stderr)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    file_path = os.path.abspath(args.file)
    if not os.path.isfile(file_path):
        print(err.error(f"Error: file not found: {args.file}"), file=sys.stderr)
        sys.exit(1)

    root = os.path.abspath(args.root) if args.root else find_project_root(file_path)
    if not os.path.isdir(root):
        print(err.error(f"Error: root directory not found: {root}"), file=sys.stderr)
        sys.exit(1)

    source = read_text_file(file_path)
    if source is None:
        print(err.error(f"Error: cannot read {args.file}"), file=sys.stderr)
        sys.exit(1)

    trees: List[ResolvedImportTree] = []
    if not args.current_only:
        locator = ImportLocator(root, load_tsconfig(root, args.tsconfig))
        builder = ImportTreeBuilder(locator)
        trees = builder.resolve_import_paths(parse_imports(source), file_path, args.depth)

    bundler = Bundler(root)

    if args.tree:
        if args.json:
            output = json.dumps([t.to_dict() for t in trees], indent=2)
        else:
            header = c.bold(bundler.display_path(file_path))
            output = "\n".join([header] + format_tree(trees, bundler, c))
        print(output)
        return

    select = {os.path.abspath(p) for p in args.only} if args.only else None
    result = bundler.bundle(file_path, trees, select=select)

    if args.output:
        Path(args.output).write_text(result.text + "\n", encoding="utf-8")
    else:
        print(result.text)

    if args.stats or args.output:
        indicator = size_indicator(result.line_count)
        summary = (
            f"Bundled {result.entity_count} entities from {result.file_count} files "
            f"({result.line_count} lines)"
        )
        print(err.for_size(indicator.label, summary), file=sys.stderr)
        print(err.dim(indicator.message), file=sys.stderr)

    if args.stats:
        stats = graph_stats(build_graph(trees, file_path), file_path)
        for key, value in stats.items():
            print(f"  {key}: {value}", file=sys.stderr)


def main():
    """Entry point for the ``codebundle`` command.

    Usage:
        codebundle FILE [-r ROOT] [--tsconfig PATH] [-d DEPTH] [--current-only]
                        [--tree [--json]] [--only PATH]... [--stats] [-o OUTPUT]
                        [--no-color] [--debug]
    """
    parser = argparse.ArgumentParser(
        prog="codebundle",
        description="Bundle a source file with only the declarations it imports",
        epilog="Example: codebundle src/app/page.tsx -d 2 -o bundle.txt",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    add_bundle_arguments(parser)

    args = parser.parse_args()
    if args.json and not args.tree:
        parser.error("--json requires --tree")
    run_bundle(args)


if __name__ == "__main__":
    main()
