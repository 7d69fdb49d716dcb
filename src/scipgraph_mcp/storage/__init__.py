"""Storage package for SCIP index save/load operations."""

from .index_store import (
    Occurrence,
    Document,
    DocumentProvider,
    IndexDocumentProvider,
    IndexFormatError,
    ScipIndex,
    IndexStore,
    load_scip_json,
)

__all__ = [
    "Occurrence",
    "Document",
    "DocumentProvider",
    "IndexDocumentProvider",
    "IndexFormatError",
    "ScipIndex",
    "IndexStore",
    "load_scip_json",
]
