"""Build dependency tree hierarchy from a document's symbol occurrences."""

import logging
from typing import Iterable, Protocol

from .symbols import ParsedSymbol, parse_symbol


logger = logging.getLogger(__name__)

# Nested, insertion-ordered mapping; leaves are empty dicts.
DependencyTree = dict[str, "DependencyTree"]


class HasSymbol(Protocol):
    symbol: str


def unique_occurrences(occurrences: Iterable[HasSymbol]) -> list[HasSymbol]:
    """Keep the first occurrence of each symbol, preserving order."""
    first_seen: dict[str, HasSymbol] = {}
    for occurrence in occurrences:
        if occurrence.symbol not in first_seen:
            first_seen[occurrence.symbol] = occurrence
    return list(first_seen.values())


def top_level_key(parsed: ParsedSymbol) -> str:
    """Root key for a symbol: its namespace names joined with '/'."""
    return parsed.namespace_path


def build_dependency_tree(occurrences: Iterable[HasSymbol], document_path: str) -> DependencyTree:
    """Fold a document's occurrences into a nested dependency tree.

    Root keys are namespace paths of referenced symbols; nested keys are the
    containing types/terms down to, but not including, the referenced member
    itself. Symbols that fail to parse, local symbols, symbols without a
    namespace and symbols defined in `document_path` are skipped.
    """
    tree: DependencyTree = {}

    for occurrence in unique_occurrences(occurrences):
        parsed = parse_symbol(occurrence.symbol)
        if not isinstance(parsed, ParsedSymbol):
            # ParseFailure or LocalSymbol
            logger.debug("Skipping symbol %r: %s", occurrence.symbol, parsed)
            continue

        key = top_level_key(parsed)
        if not key or key == document_path:
            continue

        current = tree.setdefault(key, {})

        # The last structural descriptor is the referenced member; only its
        # containers become levels.
        for descriptor in parsed.structural_descriptors[:-1]:
            if not descriptor.name:
                continue
            current = current.setdefault(descriptor.name, {})

    return tree


def flatten_tree(tree: DependencyTree, depth: int = 0) -> list[tuple[str, int]]:
    """Flatten dependency tree with depth information.

    Returns list of (key, depth) tuples for indentation.
    """
    result = []
    for key, children in tree.items():
        result.append((key, depth))
        result.extend(flatten_tree(children, depth + 1))
    return result


def count_nodes(tree: DependencyTree) -> int:
    """Total number of keys at every level."""
    return sum(1 + count_nodes(children) for children in tree.values())
