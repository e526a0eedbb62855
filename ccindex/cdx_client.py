# ccindex/cdx_client.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Union

from .content import ContentType
from .fetcher import Fetcher
from .locator import Locator
from .logger import RunLogger
from .models import (
    CDXRecordPage, CollectionCatalog, CollectionInfo, PageCount,
    RECORD_REQUIRED, decode_json_lines,
)
from .query import DEFAULT_PAGE_SIZE, QueryBuilder, QuerySpec

COLLINFO_PATH = "collinfo.json"


class CDXClient:
    def __init__(self, fetcher: Fetcher | None = None, logger: RunLogger | None = None):
        self.fetcher = fetcher or Fetcher(logger=logger)
        self.logger = logger

    def fetch_catalog(self) -> CollectionCatalog:
        """Fetch collinfo.json: every crawl collection and its CDX API url."""
        body = self.fetcher.execute(Locator.cdx(COLLINFO_PATH), ContentType.JSON)
        return CollectionCatalog.from_json(body)

    def execute(self, spec: QuerySpec) -> CDXRecordPage:
        """
        Run one CDX query and decode the records it returns.
        A field projection only requires the projected field to be present.
        """
        if spec.metadata_only:
            raise ValueError("spec requests page metadata; use num_pages() or paged_index()")
        body = self.fetcher.execute(spec.locator(), ContentType.JSON)
        required = (spec.field,) if spec.field else RECORD_REQUIRED
        page = CDXRecordPage.from_bytes(body, required)
        if self.logger:
            self.logger.count("PAGES")
            self.logger.count("RECORDS", len(page))
        return page

    def num_pages(self, spec: QuerySpec) -> PageCount:
        spec = spec.with_options(show_num_pages=True, show_paged_index=False, page=None)
        return PageCount.from_bytes(self.fetcher.execute(spec.locator(), ContentType.JSON))

    def paged_index(self, spec: QuerySpec) -> List[Dict[str, Any]]:
        """Secondary-index blocks (urlkey, part, offset, length, ...) the query touches."""
        spec = spec.with_options(show_num_pages=False, show_paged_index=True)
        return decode_json_lines(self.fetcher.execute(spec.locator(), ContentType.JSON))

    def iter_pages(self, spec: QuerySpec, count: PageCount | None = None) -> Iterable[CDXRecordPage]:
        """Yield every page of a query, one request per page. Pass `count` to skip the count request."""
        spec = spec.with_options(show_num_pages=False, show_paged_index=False)
        if count is None:
            count = self.num_pages(spec)
        for n in range(count.pages):
            yield self.execute(spec.with_options(page=n))

    def fetch_archive_segment(self, path: str) -> bytes:
        """
        Raw bytes of a WARC file on the data host. The caller decompresses and
        slices CDXRecord.byte_range() out of it.
        """
        return self.fetcher.execute(Locator.warc(path), ContentType.JSON)

    def query(self, collection: Union[CollectionInfo, str], url: str, **options) -> CDXRecordPage:
        b = QueryBuilder(collection, url)
        if "from_" in options or "to" in options:
            b.with_time_range(options.pop("from_", None), options.pop("to", None))
        if "page" in options or "page_size" in options:
            b.with_page(options.pop("page", 0), options.pop("page_size", DEFAULT_PAGE_SIZE))
        filters = options.pop("filters", ())
        if isinstance(filters, str):
            filters = (filters,)
        for f in filters:
            b.with_filter(f)
        setters = {
            "limit": b.with_limit,
            "sort": b.with_sort,
            "closest": b.with_closest,
            "match_type": b.with_match_type,
            "field": b.with_field,
        }
        for k, v in options.items():
            if k not in setters:
                raise TypeError(f"unknown query option {k!r}")
            setters[k](v)
        return self.execute(b.build())
