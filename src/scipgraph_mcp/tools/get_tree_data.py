"""Dependency tree lookup for one document."""

from typing import Optional

from ..parser import DependencyTree, build_dependency_tree
from ..storage import DocumentProvider


def get_tree_data(path: str, provider: DocumentProvider) -> Optional[DependencyTree]:
    """Build the dependency tree for `path`.

    Returns None when the provider has no document for `path`.
    """
    document = provider.lookup(path)

    if document is None:
        return None

    return build_dependency_tree(document.occurrences, path)


async def fetch_tree_data(path: str, provider) -> Optional[DependencyTree]:
    """Async variant of get_tree_data for providers with an async lookup.

    ProviderTransportError from the provider propagates unchanged.
    """
    document = await provider.lookup(path)

    if document is None:
        return None

    return build_dependency_tree(document.occurrences, path)
