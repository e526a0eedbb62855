"""Shared fixtures: a MagicMock standing in for requests.Session."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from ccindex.cdx_client import CDXClient
from ccindex.fetcher import Fetcher


def make_response(status: int = 200, body: bytes | str = b"") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.content = body.encode("utf-8") if isinstance(body, str) else body
    return resp


def record_dict(i: int = 0) -> dict:
    return {
        "urlkey": f"org,example)/page{i}",
        "timestamp": f"202403011200{i % 60:02d}",
        "url": f"https://example.org/page{i}",
        "mime": "text/html",
        "mime-detected": "text/html",
        "status": "200",
        "digest": f"DIGEST{i}",
        "length": "1234",
        "offset": str(1000 * i),
        "filename": "crawl-data/CC-MAIN-2024-10/segments/1/warc/CC-MAIN-0001.warc.gz",
        "languages": "eng",
        "charset": "UTF-8",
    }


def ndjson(rows) -> str:
    return "".join(json.dumps(r) + "\n" for r in rows)


@pytest.fixture
def session() -> MagicMock:
    sess = MagicMock()
    sess.headers = {}
    sess.get.return_value = make_response(200, b"")
    return sess


@pytest.fixture
def client(session: MagicMock) -> CDXClient:
    return CDXClient(fetcher=Fetcher(session=session))
