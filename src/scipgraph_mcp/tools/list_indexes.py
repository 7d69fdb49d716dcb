"""List stored SCIP indexes."""

from typing import Optional

from ..storage import IndexStore


def list_indexes(storage_path: Optional[str] = None) -> dict:
    """List all stored indexes.

    Returns:
        Dict with count and list of indexes
    """
    store = IndexStore(base_path=storage_path)
    indexes = store.list_indexes()

    return {
        "count": len(indexes),
        "indexes": indexes
    }
