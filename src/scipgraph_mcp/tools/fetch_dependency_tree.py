"""Get the dependency tree of a file from a remote document service."""

import os
from typing import Optional

from ..parser import count_nodes
from ..providers import HttpDocumentProvider, ProviderTransportError
from .get_tree_data import fetch_tree_data


async def fetch_dependency_tree(
    file_path: str,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    provider: Optional[HttpDocumentProvider] = None
) -> dict:
    """Fetch a document remotely and build its dependency tree.

    Args:
        file_path: Path of the document
        base_url: Service URL (default: $SCIPGRAPH_REMOTE_URL)
        token: API token (default: $SCIPGRAPH_TOKEN)
        provider: Preconfigured provider, overrides base_url and token

    Returns:
        Dict with nested tree, a not-found error, or a fetch error
    """
    if provider is None:
        base_url = base_url or os.environ.get("SCIPGRAPH_REMOTE_URL")
        if not base_url:
            return {"error": "No remote URL configured. Set SCIPGRAPH_REMOTE_URL."}
        provider = HttpDocumentProvider(base_url, token=token or os.environ.get("SCIPGRAPH_TOKEN"))

    try:
        tree = await fetch_tree_data(file_path, provider)
    except ProviderTransportError as e:
        return {"error": str(e), "fetch_failed": True, "status_code": e.status_code}

    if tree is None:
        return {"error": f"Document not found: {file_path}", "fetch_failed": False}

    return {
        "file": file_path,
        "dependency_count": len(tree),
        "node_count": count_nodes(tree),
        "tree": tree,
    }
