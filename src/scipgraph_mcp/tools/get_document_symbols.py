"""List the distinct symbols referenced by a document."""

from typing import Optional

from ..parser import parse_symbol, unique_occurrences
from ..storage import IndexStore
from .parse_symbol import symbol_to_dict


def get_document_symbols(
    index: str,
    file_path: str,
    include_local: bool = False,
    storage_path: Optional[str] = None
) -> dict:
    """Get the distinct symbols of a document with their decoded structure.

    Args:
        index: Name of a stored index
        file_path: Path of the document within the index
        include_local: Include document-local symbols
        storage_path: Custom storage path

    Returns:
        Dict with one entry per distinct symbol, in order of first occurrence
    """
    store = IndexStore(base_path=storage_path)
    document = store.get_document(index, file_path)

    if document is None:
        return {"error": f"Document not found: {index}/{file_path}"}

    symbols = []
    invalid = 0

    for occurrence in unique_occurrences(document.occurrences):
        entry = symbol_to_dict(parse_symbol(occurrence.symbol))
        if entry["kind"] == "local" and not include_local:
            continue
        if entry["kind"] == "error":
            invalid += 1
        entry["symbol"] = occurrence.symbol
        symbols.append(entry)

    return {
        "index": index,
        "file": file_path,
        "language": document.language,
        "symbol_count": len(symbols),
        "invalid_count": invalid,
        "symbols": symbols,
    }
