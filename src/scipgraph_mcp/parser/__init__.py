"""Parser package for SCIP symbols and dependency trees."""

from .symbols import (
    Suffix,
    Descriptor,
    Package,
    ParsedSymbol,
    LocalSymbol,
    ParseFailure,
    SymbolParseResult,
    parse_symbol,
    format_symbol,
    is_local_symbol,
)
from .hierarchy import (
    DependencyTree,
    unique_occurrences,
    top_level_key,
    build_dependency_tree,
    flatten_tree,
    count_nodes,
)

__all__ = [
    "Suffix",
    "Descriptor",
    "Package",
    "ParsedSymbol",
    "LocalSymbol",
    "ParseFailure",
    "SymbolParseResult",
    "parse_symbol",
    "format_symbol",
    "is_local_symbol",
    "DependencyTree",
    "unique_occurrences",
    "top_level_key",
    "build_dependency_tree",
    "flatten_tree",
    "count_nodes",
]
