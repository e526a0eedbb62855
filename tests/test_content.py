"""Tests for Accept header negotiation values."""

from __future__ import annotations

import pytest

from ccindex.content import Charset, ContentType
from ccindex.errors import InvalidCharset, InvalidContentType


def test_header_strings() -> None:
    assert ContentType.JSON.to_string() == "application/json"
    assert ContentType.text(Charset.UTF8).to_string() == "text/plain; charset=utf-8"
    assert ContentType.text(Charset.UTF16).to_string() == "text/plain; charset=utf-16"


@pytest.mark.parametrize("ct", list(ContentType))
def test_from_string_inverts_to_string(ct: ContentType) -> None:
    assert ContentType.from_string(ct.to_string()) is ct


def test_charset_property() -> None:
    assert ContentType.JSON.charset is None
    assert ContentType.TEXT_UTF16.charset is Charset.UTF16


@pytest.mark.parametrize("raw", ["text/html", "application/json; charset=utf-8", "TEXT/PLAIN; charset=utf-8", ""])
def test_unknown_content_type(raw: str) -> None:
    with pytest.raises(InvalidContentType):
        ContentType.from_string(raw)


def test_charset_round_trip_and_rejection() -> None:
    assert Charset.from_string("utf-16") is Charset.UTF16
    with pytest.raises(InvalidCharset) as exc:
        Charset.from_string("latin-1")
    assert exc.value.kind == "invalid_charset"
