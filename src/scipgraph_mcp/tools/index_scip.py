"""Index tool - load a SCIP JSON index and save it to the store."""

import logging
from pathlib import Path
from typing import Optional

from ..storage import IndexFormatError, IndexStore, load_scip_json


logger = logging.getLogger(__name__)


def index_scip(
    path: str,
    name: Optional[str] = None,
    storage_path: Optional[str] = None
) -> dict:
    """Load a SCIP index in JSON form and store it.

    Args:
        path: Path to the JSON file (e.g. output of `scip print --json`)
        name: Index name; defaults to the file name without extension
        storage_path: Custom storage path (default: ~/.scip-index/)

    Returns:
        Dict with indexing results
    """
    index_file = Path(path).expanduser().resolve()

    if not index_file.exists():
        return {"success": False, "error": f"File not found: {path}"}

    if not index_file.is_file():
        return {"success": False, "error": f"Path is not a file: {path}"}

    try:
        index = load_scip_json(index_file, name=name)
    except IndexFormatError as e:
        return {"success": False, "error": str(e)}

    if not index.documents:
        return {"success": False, "error": "Index contains no documents"}

    store = IndexStore(base_path=storage_path)
    store.save_index(index)

    files = [d.relative_path for d in index.documents]

    return {
        "success": True,
        "name": index.name,
        "indexed_at": index.indexed_at,
        "tool": index.tool,
        "document_count": len(index.documents),
        "occurrence_count": sum(len(d.occurrences) for d in index.documents),
        "files": files[:20],  # Limit files in response
    }
