"""SCIP index storage with save/load and per-document lookup."""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Protocol, Union


logger = logging.getLogger(__name__)


class IndexFormatError(ValueError):
    """Raised when index JSON does not have the expected SCIP shape."""


@dataclass(frozen=True)
class Occurrence:
    """One reference to a symbol inside a document."""
    symbol: str
    range: tuple[int, ...] = ()     # [startLine, startChar, (endLine,) endChar]
    symbol_roles: int = 0           # Bitset: 1 = definition, 2 = import, ...


@dataclass
class Document:
    """All occurrences recorded for one source file."""
    relative_path: str
    occurrences: list[Occurrence] = field(default_factory=list)
    language: str = ""


class DocumentProvider(Protocol):
    """Anything that can look up a Document by its relative path."""

    def lookup(self, path: str) -> Optional[Document]:
        ...


@dataclass
class ScipIndex:
    """A SCIP index for one project."""
    name: str
    indexed_at: str                 # ISO timestamp
    project_root: str = ""
    tool: str = ""                  # Indexer name and version, e.g. "scip-typescript 0.3.3"
    documents: list[Document] = field(default_factory=list)

    def get_document(self, path: str) -> Optional[Document]:
        """Find a document by relative path."""
        for document in self.documents:
            if document.relative_path == path:
                return document
        return None


@dataclass
class IndexDocumentProvider:
    """Document provider backed by an in-memory ScipIndex."""
    index: ScipIndex

    def lookup(self, path: str) -> Optional[Document]:
        return self.index.get_document(path)


def _first(data: dict, *keys: str, default: Any = None) -> Any:
    """Read a field that may be spelled snake_case or camelCase."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def occurrence_from_dict(data: dict) -> Occurrence:
    if not isinstance(data, dict):
        raise IndexFormatError(f"Occurrence must be an object, got {type(data).__name__}")
    symbol = data.get("symbol")
    if not isinstance(symbol, str):
        raise IndexFormatError(f"Occurrence without a symbol string: {data!r}")
    range_ = data.get("range", [])
    if not isinstance(range_, list):
        raise IndexFormatError(f"Occurrence range must be a list: {data!r}")
    return Occurrence(
        symbol=symbol,
        range=tuple(range_),
        symbol_roles=_first(data, "symbol_roles", "symbolRoles", default=0) or 0,
    )


def document_from_dict(data: dict) -> Document:
    if not isinstance(data, dict):
        raise IndexFormatError(f"Document must be an object, got {type(data).__name__}")
    relative_path = _first(data, "relative_path", "relativePath")
    if not isinstance(relative_path, str):
        raise IndexFormatError(f"Document without a relative path: {list(data)!r}")
    occurrences = data.get("occurrences", [])
    if not isinstance(occurrences, list):
        raise IndexFormatError(f"Occurrences of {relative_path} must be a list")
    return Document(
        relative_path=relative_path,
        occurrences=[occurrence_from_dict(o) for o in occurrences],
        language=data.get("language") or "",
    )


def load_scip_json(source: Union[str, Path, dict], name: Optional[str] = None) -> ScipIndex:
    """Build a ScipIndex from SCIP JSON (a file path or already-decoded data).

    Accepts the shape produced by `scip print --json` and by the protobuf
    `Index.toObject()` helper: `metadata` plus a `documents` list.
    """
    if isinstance(source, dict):
        data = source
    else:
        path = Path(source).expanduser()
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise IndexFormatError(f"Invalid JSON in {path}: {e}") from e
        if name is None:
            name = path.stem

    if not isinstance(data, dict) or not isinstance(data.get("documents"), list):
        raise IndexFormatError("SCIP index must be an object with a 'documents' list")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise IndexFormatError("SCIP index metadata must be an object")
    tool_info = _first(metadata, "tool_info", "toolInfo", default={}) or {}
    if not isinstance(tool_info, dict):
        raise IndexFormatError("SCIP index tool_info must be an object")
    tool = " ".join(p for p in (tool_info.get("name", ""), tool_info.get("version", "")) if p)

    return ScipIndex(
        name=name or "index",
        indexed_at=datetime.now().isoformat(),
        project_root=_first(metadata, "project_root", "projectRoot", default="") or "",
        tool=tool,
        documents=[document_from_dict(d) for d in data["documents"]],
    )


class IndexStore:
    """Storage for SCIP indexes, one JSON file per index."""

    def __init__(self, base_path: Optional[str] = None):
        """Initialize store.

        Args:
            base_path: Base directory for storage. Defaults to $SCIP_INDEX_PATH
                or ~/.scip-index/
        """
        if base_path:
            self.base_path = Path(base_path)
        elif os.environ.get("SCIP_INDEX_PATH"):
            self.base_path = Path(os.environ["SCIP_INDEX_PATH"])
        else:
            self.base_path = Path.home() / ".scip-index"

        self.base_path.mkdir(parents=True, exist_ok=True)

    def _index_path(self, name: str) -> Path:
        """Path to index JSON file."""
        slug = name.replace("/", "-").replace("\\", "-")
        return self.base_path / f"{slug}.json"

    def save_index(self, index: ScipIndex) -> ScipIndex:
        """Save an index to storage, replacing any index with the same name."""
        index_path = self._index_path(index.name)
        with open(index_path, "w", encoding="utf-8") as f:
            json.dump(self._index_to_dict(index), f, indent=2)

        logger.info("Saved index %s (%d documents) to %s", index.name, len(index.documents), index_path)
        return index

    def load_index(self, name: str) -> Optional[ScipIndex]:
        """Load index from storage."""
        index_path = self._index_path(name)

        if not index_path.exists():
            return None

        with open(index_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return ScipIndex(
            name=data["name"],
            indexed_at=data["indexed_at"],
            project_root=data.get("project_root", ""),
            tool=data.get("tool", ""),
            documents=[document_from_dict(d) for d in data["documents"]],
        )

    def get_document(self, name: str, path: str) -> Optional[Document]:
        """Look up one document of a stored index."""
        index = self.load_index(name)
        if not index:
            return None
        return index.get_document(path)

    def list_indexes(self) -> list[dict]:
        """List all stored indexes."""
        indexes = []

        for index_file in sorted(self.base_path.glob("*.json")):
            try:
                with open(index_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                indexes.append({
                    "name": data["name"],
                    "indexed_at": data["indexed_at"],
                    "tool": data.get("tool", ""),
                    "document_count": len(data["documents"]),
                    "occurrence_count": sum(len(d.get("occurrences", [])) for d in data["documents"]),
                })
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning("Skipping unreadable index file %s: %s", index_file, e)
                continue

        return indexes

    def delete_index(self, name: str) -> bool:
        """Delete an index."""
        index_path = self._index_path(name)

        if index_path.exists():
            index_path.unlink()
            logger.info("Deleted index %s", name)
            return True

        return False

    def _document_to_dict(self, document: Document) -> dict:
        """Convert Document to dict."""
        return {
            "relative_path": document.relative_path,
            "language": document.language,
            "occurrences": [
                {
                    "symbol": o.symbol,
                    "range": list(o.range),
                    "symbol_roles": o.symbol_roles,
                }
                for o in document.occurrences
            ],
        }

    def _index_to_dict(self, index: ScipIndex) -> dict:
        """Convert ScipIndex to dict."""
        return {
            "name": index.name,
            "indexed_at": index.indexed_at,
            "project_root": index.project_root,
            "tool": index.tool,
            "documents": [self._document_to_dict(d) for d in index.documents],
        }
