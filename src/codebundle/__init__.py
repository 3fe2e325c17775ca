"""codebundle - Bundle a source file with only the code it imports.

Given a TypeScript/JavaScript file, codebundle follows its imports to a
bounded depth and extracts, from each imported file, just the top-level
declarations that are actually imported. The result is a compact text
bundle for pasting into an AI assistant.

Components:
    - PathResolver: Maps specifiers through tsconfig ``paths`` aliases
    - ImportLocator: Probes the filesystem for the file a specifier names
    - ImportTreeBuilder: Expands imports into a cycle-free, depth-bounded forest
    - CodeExtractor: Extracts the imported declarations from source text
    - Bundler: Composes the final bundle

Example:
    >>> from codebundle import ImportLocator, ImportTreeBuilder, Bundler
    >>> from codebundle import load_tsconfig, parse_imports
    >>>
    >>> root = '/my/project'
    >>> locator = ImportLocator(root, load_tsconfig(root))
    >>> builder = ImportTreeBuilder(locator)
    >>>
    >>> main_file = '/my/project/src/app/page.tsx'
    >>> with open(main_file) as f:
    ...     imports = parse_imports(f.read())
    >>> trees = builder.resolve_import_paths(imports, main_file, max_depth=2)
    >>>
    >>> result = Bundler(root).bundle(main_file, trees)
    >>> print(result.text)
"""

from .bundler import BundleResult, Bundler, SizeIndicator, size_indicator
from .code_extractor import CodeExtractor, extract_imported_entities
from .dependency_tree import (
    ImportTreeBuilder,
    build_graph,
    graph_stats,
    merge_declarations,
    read_text_file,
    resolve_import_tree,
)
from .import_parser import parse_imports
from .import_resolver import (
    BASE_DIRS,
    EXTENSIONS,
    PROBE_SUFFIXES,
    ImportLocator,
    find_project_root,
    load_tsconfig,
    try_extensions,
)
from .models import ExtractedContent, ImportDeclaration, ImportInfo, ResolvedImportTree
from .path_resolver import AliasConfig, PathMatchResult, PathResolver

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__license__",
    # Models
    "ImportDeclaration",
    "ImportInfo",
    "ExtractedContent",
    "ResolvedImportTree",
    # Alias resolution
    "AliasConfig",
    "PathMatchResult",
    "PathResolver",
    # File location
    "ImportLocator",
    "load_tsconfig",
    "find_project_root",
    "try_extensions",
    "EXTENSIONS",
    "BASE_DIRS",
    "PROBE_SUFFIXES",
    # Import parsing
    "parse_imports",
    # Import tree
    "ImportTreeBuilder",
    "resolve_import_tree",
    "build_graph",
    "graph_stats",
    "merge_declarations",
    "read_text_file",
    # Extraction
    "CodeExtractor",
    "extract_imported_entities",
    # Bundling
    "Bundler",
    "BundleResult",
    "SizeIndicator",
    "size_indicator",
]
