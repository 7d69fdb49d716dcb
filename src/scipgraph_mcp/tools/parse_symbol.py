"""Decode a single SCIP symbol string."""

from ..parser import LocalSymbol, ParseFailure, SymbolParseResult, format_symbol, parse_symbol as parse


def symbol_to_dict(result: SymbolParseResult) -> dict:
    """Convert a parse result to a JSON-friendly dict."""
    if isinstance(result, ParseFailure):
        return {"kind": "error", "error": result.message, "symbol": result.symbol}

    if isinstance(result, LocalSymbol):
        return {"kind": "local", "id": result.id}

    return {
        "kind": "global",
        "scheme": result.scheme,
        "package": {
            "manager": result.package.manager,
            "name": result.package.name,
            "version": result.package.version,
        },
        "descriptors": [
            {
                "name": d.name,
                "suffix": d.suffix.name.lower(),
                "disambiguator": d.disambiguator,
            }
            for d in result.descriptors
        ],
        "namespace": result.namespace_path,
        "normalized": format_symbol(result),
    }


def parse_symbol(symbol: str) -> dict:
    """Parse a SCIP symbol and describe its structure.

    Args:
        symbol: Raw symbol string, e.g. "npm lodash 4.17.21 lodash/uniqBy()."

    Returns:
        Dict with scheme, package and descriptors, or an error
    """
    result = symbol_to_dict(parse(symbol))

    if result["kind"] == "error":
        return {"error": f"Invalid symbol: {result['error']}", "symbol": symbol}

    return result
