# ccindex/models.py
from __future__ import annotations
import json
from collections import abc
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from .errors import DecodeFailed

# Keys the live collinfo.json and CDX API use where ours differ.
_COLLECTION_ALIASES = {"timegate": "timegate_url", "cdx-api": "cdx_api_url"}
_RECORD_ALIASES = {"mime-detected": "mime_detected"}

RECORD_REQUIRED = ("urlkey", "timestamp", "url", "filename", "offset", "length")
_RECORD_INTS = ("length", "status", "offset")


def _loads(data: str | bytes) -> Any:
    try:
        return json.loads(data)
    except (ValueError, TypeError) as e:
        raise DecodeFailed(f"invalid json: {e}") from e


def _unalias(d: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    out = dict(d)
    for remote, local in aliases.items():
        if remote in out and local not in out:
            out[local] = out.pop(remote)
    return out


def _as_str(name: str, v: Any) -> str:
    if not isinstance(v, str):
        raise DecodeFailed(f"field {name} is not a string: {v!r}")
    return v


def _as_int(name: str, v: Any) -> int:
    if isinstance(v, bool) or (isinstance(v, float) and not v.is_integer()):
        raise DecodeFailed(f"field {name} is not an integer: {v!r}")
    try:
        return int(v)
    except (ValueError, TypeError) as e:
        raise DecodeFailed(f"field {name} is not an integer: {v!r}") from e


@dataclass(frozen=True)
class CollectionInfo:
    id: str
    name: str
    timegate_url: str
    cdx_api_url: str

    @classmethod
    def from_dict(cls, d: Any) -> "CollectionInfo":
        if not isinstance(d, dict):
            raise DecodeFailed(f"collection entry is not an object: {d!r}")
        d = _unalias(d, _COLLECTION_ALIASES)
        try:
            return cls(**{f.name: _as_str(f.name, d[f.name]) for f in fields(cls)})
        except KeyError as e:
            raise DecodeFailed(f"collection entry missing {e.args[0]!r}") from e

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: str | bytes) -> "CollectionInfo":
        return cls.from_dict(_loads(data))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


class CollectionCatalog(abc.Sequence):
    """Crawl collections in the order collinfo.json lists them (newest first)."""

    def __init__(self, collections: Iterable[CollectionInfo] = ()):
        self._items: List[CollectionInfo] = list(collections)
        self._by_id: Dict[str, CollectionInfo] = {}
        for c in self._items:
            if c.id in self._by_id:
                raise DecodeFailed(f"duplicate collection id {c.id!r}")
            self._by_id[c.id] = c

    def __getitem__(self, i):
        return self._items[i]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CollectionInfo]:
        return iter(self._items)

    def __contains__(self, item) -> bool:
        if isinstance(item, str):
            return item in self._by_id
        return item in self._items

    def __eq__(self, other) -> bool:
        return isinstance(other, CollectionCatalog) and self._items == other._items

    def __repr__(self) -> str:
        return f"CollectionCatalog({self._items!r})"

    def get(self, collection_id: str) -> Optional[CollectionInfo]:
        return self._by_id.get(collection_id)

    def ids(self) -> List[str]:
        return [c.id for c in self._items]

    def latest(self) -> Optional[CollectionInfo]:
        return self._items[0] if self._items else None

    @classmethod
    def from_json(cls, data: str | bytes) -> "CollectionCatalog":
        raw = _loads(data)
        if not isinstance(raw, list):
            raise DecodeFailed("collection catalog is not a json array")
        return cls(CollectionInfo.from_dict(d) for d in raw)

    def to_json(self) -> str:
        return json.dumps([c.to_dict() for c in self._items], ensure_ascii=False)


@dataclass(frozen=True)
class CDXRecord:
    urlkey: str = ""
    timestamp: str = ""
    mime: str = ""
    length: int = 0
    status: int = 0
    filename: str = ""
    languages: str = ""
    charset: str = ""
    url: str = ""
    mime_detected: str = ""
    offset: int = 0
    digest: str = ""

    @classmethod
    def from_dict(cls, d: Any, required: Sequence[str] = RECORD_REQUIRED) -> "CDXRecord":
        """
        Build a record from one CDX json object. Numeric fields arrive as strings
        from the index and are coerced, and an integer timestamp is accepted; every
        other field must be a json string. Anything missing outside `required` stays empty.
        """
        if not isinstance(d, dict):
            raise DecodeFailed(f"cdx line is not an object: {d!r}")
        d = _unalias(d, _RECORD_ALIASES)
        missing = [k for k in required if _RECORD_ALIASES.get(k, k) not in d]
        if missing:
            raise DecodeFailed(f"cdx record missing {', '.join(missing)}")
        kw: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in d:
                continue
            v = d[f.name]
            if f.name in _RECORD_INTS:
                kw[f.name] = _as_int(f.name, v)
            elif f.name == "timestamp" and isinstance(v, int) and not isinstance(v, bool):
                kw[f.name] = str(v)
            else:
                kw[f.name] = _as_str(f.name, v)
        ts = kw.get("timestamp", "")
        if ts and not (ts.isdigit() and len(ts) <= 14):
            raise DecodeFailed(f"bad timestamp {ts!r}")
        return cls(**kw)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: str | bytes) -> "CDXRecord":
        return cls.from_dict(_loads(data))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def byte_range(self) -> tuple[int, int]:
        return self.offset, self.offset + self.length


class CDXRecordPage(list):
    """Records of one CDX query, in the order the index returned them."""

    @classmethod
    def from_bytes(cls, body: str | bytes, required: Sequence[str] = RECORD_REQUIRED) -> "CDXRecordPage":
        return cls(CDXRecord.from_dict(d, required) for d in decode_json_lines(body))

    def to_jsonl(self) -> str:
        return "".join(r.to_json() + "\n" for r in self)


@dataclass(frozen=True)
class PageCount:
    pages: int
    page_size: int
    blocks: int

    @classmethod
    def from_bytes(cls, body: str | bytes) -> "PageCount":
        d = _loads(body)
        if not isinstance(d, dict):
            raise DecodeFailed(f"page count is not an object: {d!r}")
        try:
            return cls(
                pages=_as_int("pages", d["pages"]),
                page_size=_as_int("pageSize", d["pageSize"]),
                blocks=_as_int("blocks", d.get("blocks", 0)),
            )
        except KeyError as e:
            raise DecodeFailed(f"page count missing {e.args[0]!r}") from e


def decode_json_lines(body: str | bytes) -> List[Any]:
    """Accept a json array or newline-delimited json; empty body -> []."""
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeFailed(f"body is not utf-8: {e}") from e
    else:
        text = body
    text = text.strip()
    if not text:
        return []
    if text.startswith("["):
        rows = _loads(text)
        if not isinstance(rows, list):
            raise DecodeFailed("expected a json array")
        return rows
    return [_loads(line) for line in text.splitlines() if line.strip()]
