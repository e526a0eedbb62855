"""Tests for the two-host resource locator."""

from __future__ import annotations

import pytest

from ccindex.errors import InvalidDomain
from ccindex.locator import Host, Locator, host


class TestFromString:
    def test_cdx_host(self) -> None:
        loc = Locator.from_string("https://index.commoncrawl.org/collinfo.json")
        assert loc == Locator(Host.CDX, "collinfo.json")

    def test_warc_host(self) -> None:
        loc = Locator.from_string("https://data.commoncrawl.org/crawl-data/CC-MAIN-2024-10/x.warc.gz")
        assert loc.host is Host.WARC
        assert loc.path == "crawl-data/CC-MAIN-2024-10/x.warc.gz"

    def test_query_string_kept(self) -> None:
        loc = Locator.from_string("https://index.commoncrawl.org/CC-MAIN-2024-10-index?url=example.org&output=json")
        assert loc.path == "CC-MAIN-2024-10-index?url=example.org&output=json"

    def test_host_is_case_insensitive(self) -> None:
        assert Locator.from_string("https://INDEX.CommonCrawl.org/a").host is Host.CDX

    @pytest.mark.parametrize("raw", [
        "https://example.org/collinfo.json",
        "https://web.archive.org/cdx/search/cdx",
        "https://index.commoncrawl.org.evil.com/x",
        "not a url",
        "",
    ])
    def test_unknown_host_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidDomain) as exc:
            Locator.from_string(raw)
        assert exc.value.kind == "invalid_domain"
        assert exc.value.retryable is False


class TestToString:
    def test_renders_https(self) -> None:
        assert Locator.cdx("collinfo.json").to_string() == "https://index.commoncrawl.org/collinfo.json"
        assert str(Locator.warc("a/b.warc.gz")) == "https://data.commoncrawl.org/a/b.warc.gz"

    def test_leading_slash_normalized(self) -> None:
        assert Locator.warc("/a/b").path == "a/b"

    def test_only_one_leading_slash_dropped(self) -> None:
        assert Locator.cdx("//double").path == "/double"
        assert Locator.from_string("https://index.commoncrawl.org//double").path == "/double"

    def test_path_params_kept(self) -> None:
        loc = Locator.from_string("https://data.commoncrawl.org/crawl-data/a;b.warc.gz")
        assert loc.path == "crawl-data/a;b.warc.gz"

    @pytest.mark.parametrize("raw", [
        "https://index.commoncrawl.org/collinfo.json",
        "https://index.commoncrawl.org/CC-MAIN-2024-10-index?url=example.org%2F%2A&output=json",
        "https://data.commoncrawl.org/crawl-data/CC-MAIN-2024-10/segments/1/warc/f.warc.gz",
        "https://data.commoncrawl.org/crawl-data/a;b.warc.gz",
        "https://index.commoncrawl.org//double",
        "https://index.commoncrawl.org/a//b;c?x=1",
    ])
    def test_round_trip(self, raw: str) -> None:
        loc = Locator.from_string(raw)
        assert loc.to_string() == raw
        assert Locator.from_string(loc.to_string()) == loc


def test_host_helper() -> None:
    assert host("https://Data.CommonCrawl.org/x") == "data.commoncrawl.org"
    assert host("nohost") is None
