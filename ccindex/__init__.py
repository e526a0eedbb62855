# ccindex/__init__.py
"""Typed client for the CommonCrawl CDX index."""
from .cdx_client import CDXClient, COLLINFO_PATH
from .content import Charset, ContentType
from .errors import (
    CCIndexError, DecodeFailed, InvalidCharset, InvalidContentType, InvalidDomain,
    InvalidLimit, InvalidPageSize, InvalidRange, TransportError, UnexpectedStatus,
)
from .fetcher import Fetcher
from .locator import CDX_HOST, WARC_HOST, Host, Locator
from .models import CDXRecord, CDXRecordPage, CollectionCatalog, CollectionInfo, PageCount
from .query import QueryBuilder, QuerySpec, pad_timestamp

__version__ = "0.1.0"
__all__ = [
    "CDXClient", "COLLINFO_PATH",
    "Charset", "ContentType",
    "CCIndexError", "DecodeFailed", "InvalidCharset", "InvalidContentType", "InvalidDomain",
    "InvalidLimit", "InvalidPageSize", "InvalidRange", "TransportError", "UnexpectedStatus",
    "Fetcher",
    "CDX_HOST", "WARC_HOST", "Host", "Locator",
    "CDXRecord", "CDXRecordPage", "CollectionCatalog", "CollectionInfo", "PageCount",
    "QueryBuilder", "QuerySpec", "pad_timestamp",
]
