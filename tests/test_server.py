"""End-to-end server tests."""

import pytest
import json

from scipgraph_mcp.server import server, list_tools, call_tool


@pytest.mark.asyncio
async def test_server_lists_six_tools():
    """Test that server lists all 6 tools."""
    tools = await list_tools()

    assert len(tools) == 6

    names = {t.name for t in tools}
    expected = {
        "index_scip", "list_indexes", "get_dependency_tree",
        "fetch_dependency_tree", "get_document_symbols", "parse_symbol"
    }
    assert names == expected


@pytest.mark.asyncio
async def test_get_dependency_tree_tool_schema():
    """Test get_dependency_tree tool has correct schema."""
    tools = await list_tools()

    tree_tool = next(t for t in tools if t.name == "get_dependency_tree")

    props = tree_tool.inputSchema["properties"]
    assert "index" in props
    assert "file_path" in props
    assert "flat" in props
    assert set(tree_tool.inputSchema["required"]) == {"index", "file_path"}


@pytest.mark.asyncio
async def test_call_tool_end_to_end(tmp_path, monkeypatch, scip_file):
    """Test indexing and querying through call_tool."""
    monkeypatch.setenv("SCIP_INDEX_PATH", str(tmp_path / "store"))

    indexed = await call_tool("index_scip", {"path": str(scip_file), "name": "codecov"})
    assert json.loads(indexed[0].text)["success"] is True

    response = await call_tool("get_dependency_tree", {"index": "codecov", "file_path": "src/insights.ts"})
    result = json.loads(response[0].text)

    assert result["tree"] == {"lodash": {}, "src/uri.ts": {"Endpoint": {}}}


@pytest.mark.asyncio
async def test_call_tool_parse_symbol():
    """Test parse_symbol through call_tool."""
    response = await call_tool("parse_symbol", {"symbol": "local 9"})

    assert json.loads(response[0].text) == {"kind": "local", "id": "9"}


@pytest.mark.asyncio
async def test_call_tool_errors():
    """Test unknown tools and missing arguments are reported as errors."""
    unknown = json.loads((await call_tool("nope", {}))[0].text)
    assert unknown["error"] == "Unknown tool: nope"

    missing = json.loads((await call_tool("parse_symbol", {}))[0].text)
    assert "error" in missing
