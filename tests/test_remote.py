"""Tests for the HTTP document provider."""

import httpx
import pytest

from scipgraph_mcp.providers import HttpDocumentProvider, ProviderTransportError
from scipgraph_mcp.tools.get_tree_data import fetch_tree_data


def provider_for(handler):
    return HttpDocumentProvider("https://scip.example.com/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_lookup_returns_document():
    """Test a successful document fetch."""
    def handler(request):
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={
            "relativePath": "lib/a.py",
            "occurrences": [{"symbol": "local 1", "range": [0, 0, 1]}],
        })

    document = await provider_for(handler).lookup("lib/a.py")

    assert document.relative_path == "lib/a.py"
    assert document.occurrences[0].range == (0, 0, 1)


@pytest.mark.asyncio
async def test_lookup_not_found_is_none():
    """Test a 404 is reported as an absent document."""
    assert await provider_for(lambda r: httpx.Response(404)).lookup("x.py") is None


@pytest.mark.asyncio
async def test_lookup_http_error_raises():
    """Test non-404 errors raise ProviderTransportError."""
    with pytest.raises(ProviderTransportError) as excinfo:
        await provider_for(lambda r: httpx.Response(500)).lookup("x.py")

    assert excinfo.value.status_code == 500
    assert excinfo.value.path == "x.py"


@pytest.mark.asyncio
async def test_lookup_connection_error_raises():
    """Test transport failures raise ProviderTransportError."""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderTransportError) as excinfo:
        await provider_for(handler).lookup("x.py")

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_lookup_malformed_body_raises():
    """Test an unparseable document raises ProviderTransportError."""
    with pytest.raises(ProviderTransportError):
        await provider_for(lambda r: httpx.Response(200, text="<html>")).lookup("x.py")


@pytest.mark.asyncio
async def test_fetch_tree_data_propagates_transport_error():
    """Test the async tree lookup does not swallow fetch failures."""
    with pytest.raises(ProviderTransportError):
        await fetch_tree_data("x.py", provider_for(lambda r: httpx.Response(502)))


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    5,
    ["src/a.py"],
    {"relative_path": "a.py", "occurrences": None},
    {"relative_path": "a.py", "occurrences": [{"symbol": "local 1", "range": None}]},
])
async def test_lookup_wrong_shape_raises(body):
    """Test valid JSON of the wrong shape is a fetch failure, not a crash."""
    with pytest.raises(ProviderTransportError) as excinfo:
        await provider_for(lambda r: httpx.Response(200, json=body)).lookup("a.py")

    assert excinfo.value.status_code is None
