# ccindex/query.py
from __future__ import annotations
import calendar
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union
from urllib.parse import urlencode

from .errors import InvalidDomain, InvalidLimit, InvalidPageSize, InvalidRange
from .locator import Host, Locator
from .models import CollectionInfo

DEFAULT_OUTPUT = "json"
TIMESTAMP_DIGITS = 14
DEFAULT_PAGE_SIZE = 5  # blocks per page, the index default

SORT_REVERSE = "reverse"
SORT_CLOSEST = "closest"

MATCH_EXACT = "exact"
MATCH_PREFIX = "prefix"
MATCH_HOST = "host"
MATCH_DOMAIN = "domain"

# Field slices of YYYYMMDDhhmmss: (start, end, min, max)
_FIELDS = (
    (4, 6, 1, 12),   # month
    (6, 8, 1, 31),   # day (max fixed up per month)
    (8, 10, 0, 23),  # hour
    (10, 12, 0, 59),  # minute
    (12, 14, 0, 59),  # second
)


def _digits(name: str, v: Union[int, str]) -> str:
    s = str(v).strip()
    if not s.isdigit() or not 1 <= len(s) <= TIMESTAMP_DIGITS:
        raise InvalidRange(f"{name} must be 1-{TIMESTAMP_DIGITS} digits, got {v!r}")
    return s


def pad_timestamp(prefix: Union[int, str], latest: bool = False) -> str:
    """
    Expand a 1-14 digit timestamp prefix to 14 digits.
    The earliest instant matching the prefix by default, the latest with latest=True:
      "2019"   -> "20190101000000" / "20191231235959"
      "201902" -> "20190201000000" / "20190228235959"
    A month, day, hour, minute or second (or its leading digit) that no real
    instant can have raises InvalidRange: "201913", "20190230", "2019023".
    """
    s = _digits("timestamp", prefix)
    year = s[:4]
    if len(year) < 4:
        year = year + ("9" if latest else "0") * (4 - len(year))
    out = year
    for start, end, lo, hi in _FIELDS:
        given = s[start:end]
        if start == 6:
            hi = _month_days(int(out[:4]), int(out[4:6]))
        if len(given) == 2:
            v = int(given)
            if not lo <= v <= hi:
                raise InvalidRange(f"timestamp {s!r} has an impossible field {given!r}")
        elif len(given) == 1:
            tens = int(given) * 10
            if tens > hi or tens + 9 < lo:
                raise InvalidRange(f"timestamp {s!r} has an impossible field {given!r}")
            v = min(tens + 9, hi) if latest else max(tens, lo)
        else:
            v = hi if latest else lo
        out += f"{v:02d}"
    return out


def _month_days(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        return 31
    if month == 2:
        return 29 if calendar.isleap(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


@dataclass(frozen=True)
class QuerySpec:
    """A frozen CDX query, ready to render as a locator on the index host."""
    collection_path: str
    url: str
    from_: Optional[str] = None
    to: Optional[str] = None
    limit: Optional[int] = None
    sort: Optional[str] = None
    closest: Optional[str] = None
    match_type: Optional[str] = None
    filters: Tuple[str, ...] = ()
    field: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None
    show_num_pages: bool = False
    show_paged_index: bool = False
    output: str = DEFAULT_OUTPUT

    @property
    def metadata_only(self) -> bool:
        return self.show_num_pages or self.show_paged_index

    def params(self) -> List[Tuple[str, str]]:
        p: List[Tuple[str, str]] = [("url", self.url), ("output", self.output)]
        if self.from_ is not None:
            p.append(("from", self.from_))
        if self.to is not None:
            p.append(("to", self.to))
        if self.match_type:
            p.append(("matchType", self.match_type))
        if self.limit is not None:
            p.append(("limit", str(self.limit)))
        if self.sort:
            p.append(("sort", self.sort))
        if self.closest:
            p.append(("closest", self.closest))
        for f in self.filters:
            p.append(("filter", f))
        if self.field:
            p.append(("fl", self.field))
        if self.page is not None:
            p.append(("page", str(self.page)))
        if self.page_size is not None:
            p.append(("pageSize", str(self.page_size)))
        if self.show_num_pages:
            p.append(("showNumPages", "true"))
        if self.show_paged_index:
            p.append(("showPagedIndex", "true"))
        return p

    def query_string(self) -> str:
        return urlencode(self.params())

    def locator(self) -> Locator:
        return Locator.cdx(f"{self.collection_path}?{self.query_string()}")

    def with_options(self, **changes) -> "QuerySpec":
        return replace(self, **changes)


def collection_path(collection: Union[CollectionInfo, str]) -> str:
    """CDX API path for a collection given as CollectionInfo, id, or API url."""
    if isinstance(collection, CollectionInfo):
        raw = collection.cdx_api_url
    else:
        raw = collection.strip()
    if "://" in raw:
        loc = Locator.from_string(raw)
        if loc.host is not Host.CDX:
            raise InvalidDomain(f"cdx api must live on {Host.CDX.value}: {raw}")
        return loc.path.split("?", 1)[0]
    raw = raw.strip("/")
    return raw if raw.endswith("-index") else f"{raw}-index"


@dataclass
class QueryBuilder:
    """
    Accumulates CDX options, validating each as it is set.
    Setters return the builder so calls can be chained; build() freezes a QuerySpec.
    """
    collection: Union[CollectionInfo, str]
    url: str
    _from: Optional[str] = field(default=None, init=False)
    _to: Optional[str] = field(default=None, init=False)
    _limit: Optional[int] = field(default=None, init=False)
    _sort: Optional[str] = field(default=None, init=False)
    _closest: Optional[str] = field(default=None, init=False)
    _match_type: Optional[str] = field(default=None, init=False)
    _filters: List[str] = field(default_factory=list, init=False)
    _field: Optional[str] = field(default=None, init=False)
    _page: Optional[int] = field(default=None, init=False)
    _page_size: Optional[int] = field(default=None, init=False)
    _num_pages: bool = field(default=False, init=False)
    _paged_index: bool = field(default=False, init=False)

    def __post_init__(self):
        self._path = collection_path(self.collection)

    def with_time_range(self, from_: Union[int, str, None] = None, to: Union[int, str, None] = None) -> "QueryBuilder":
        lo = pad_timestamp(from_) if from_ is not None else None
        hi = pad_timestamp(to, latest=True) if to is not None else None
        if lo is not None and hi is not None and lo > hi:
            raise InvalidRange(f"from {from_} is after to {to}")
        self._from, self._to = lo, hi
        return self

    def with_limit(self, n: int) -> "QueryBuilder":
        if n < 0:
            raise InvalidLimit(f"limit must be non-negative, got {n}")
        self._limit = n
        return self

    def with_sort(self, mode: str) -> "QueryBuilder":
        self._sort = mode
        return self

    def with_closest(self, timestamp: Union[int, str]) -> "QueryBuilder":
        self._closest = pad_timestamp(timestamp)
        return self

    def with_match_type(self, kind: str) -> "QueryBuilder":
        self._match_type = kind
        return self

    def with_filter(self, expr: str) -> "QueryBuilder":
        self._filters.append(expr)
        return self

    def with_field(self, name: str) -> "QueryBuilder":
        self._field = name
        return self

    def with_page(self, page: int, page_size: int) -> "QueryBuilder":
        if page_size <= 0:
            raise InvalidPageSize(f"page size must be positive, got {page_size}")
        if page < 0:
            raise InvalidPageSize(f"page must be non-negative, got {page}")
        self._page, self._page_size = page, page_size
        return self

    def show_num_pages(self) -> "QueryBuilder":
        self._num_pages, self._paged_index = True, False
        return self

    def show_paged_index(self) -> "QueryBuilder":
        self._num_pages, self._paged_index = False, True
        return self

    def build(self) -> QuerySpec:
        return QuerySpec(
            collection_path=self._path,
            url=self.url,
            from_=self._from,
            to=self._to,
            limit=self._limit,
            sort=self._sort,
            closest=self._closest,
            match_type=self._match_type,
            filters=tuple(self._filters),
            field=self._field,
            page=self._page,
            page_size=self._page_size,
            show_num_pages=self._num_pages,
            show_paged_index=self._paged_index,
        )
