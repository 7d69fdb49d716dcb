"""Shared fixtures."""

import json

import pytest


SAMPLE_SCIP = {
    "metadata": {
        "version": 0,
        "tool_info": {"name": "scip-typescript", "version": "0.3.3", "arguments": []},
        "project_root": "file:///home/user/sourcegraph-codecov",
        "text_document_encoding": 1,
    },
    "documents": [
        {
            "language": "typescript",
            "relative_path": "src/insights.ts",
            "occurrences": [
                {
                    "range": [0, 9, 15],
                    "symbol": "scip-typescript npm lodash 4.17.21 lodash/uniqBy().",
                    "symbol_roles": 2,
                },
                {
                    "range": [12, 4, 10],
                    "symbol": "scip-typescript npm lodash 4.17.21 lodash/uniqBy().",
                },
                {
                    "range": [3, 9, 20],
                    "symbol": "scip-typescript npm sourcegraph-codecov 1.0.0 src/`uri.ts`/Endpoint#url.",
                },
                {
                    "range": [5, 16, 34],
                    "symbol": "scip-typescript npm sourcegraph-codecov 1.0.0 src/`insights.ts`/codecovToDecorations().",
                    "symbol_roles": 1,
                },
                {
                    "range": [6, 8, 9],
                    "symbol": "local 0",
                },
            ],
        },
        {
            "language": "typescript",
            "relative_path": "src/uri.ts",
            "occurrences": [],
        },
    ],
}


@pytest.fixture
def scip_data():
    return json.loads(json.dumps(SAMPLE_SCIP))


@pytest.fixture
def scip_file(tmp_path, scip_data):
    path = tmp_path / "codecov.json"
    path.write_text(json.dumps(scip_data), encoding="utf-8")
    return path
