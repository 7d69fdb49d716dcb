"""Get the dependency tree of a file in a stored index."""

from typing import Optional

from ..parser import count_nodes, flatten_tree
from ..storage import IndexDocumentProvider, IndexStore
from .get_tree_data import get_tree_data


def get_dependency_tree(
    index: str,
    file_path: str,
    flat: bool = False,
    storage_path: Optional[str] = None
) -> dict:
    """Get the namespaces and containers a file depends on.

    Args:
        index: Name of a stored index
        file_path: Path of the document within the index (e.g. 'src/insights.ts')
        flat: Also return an indented text rendering of the tree
        storage_path: Custom storage path

    Returns:
        Dict with nested tree structure
    """
    store = IndexStore(base_path=storage_path)
    scip_index = store.load_index(index)

    if not scip_index:
        return {"error": f"Index not found: {index}"}

    tree = get_tree_data(file_path, IndexDocumentProvider(scip_index))

    if tree is None:
        return {"error": f"Document not found: {file_path}", "index": index}

    result = {
        "index": index,
        "file": file_path,
        "dependency_count": len(tree),
        "node_count": count_nodes(tree),
        "tree": tree,
    }

    if flat:
        result["lines"] = ["  " * depth + key for key, depth in flatten_tree(tree)]

    return result
