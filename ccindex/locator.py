# ccindex/locator.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from .errors import InvalidDomain

CDX_HOST = "index.commoncrawl.org"
WARC_HOST = "data.commoncrawl.org"


class Host(Enum):
    CDX = CDX_HOST
    WARC = WARC_HOST


def host(url: str) -> str | None:
    try:
        h = urlsplit(url).hostname
        return h.lower() if h else None
    except ValueError:
        return None


@dataclass(frozen=True)
class Locator:
    """
    A path on one of the two CommonCrawl hosts.
    The path is kept without the one leading slash and carries the query string, if any.
    """
    host: Host
    path: str = ""

    def __post_init__(self):
        if not isinstance(self.host, Host):
            raise InvalidDomain(f"not a known host: {self.host!r}")
        # to_string puts back exactly one separator
        if self.path.startswith("/"):
            object.__setattr__(self, "path", self.path[1:])

    @classmethod
    def cdx(cls, path: str) -> "Locator":
        return cls(Host.CDX, path)

    @classmethod
    def warc(cls, path: str) -> "Locator":
        return cls(Host.WARC, path)

    @classmethod
    def from_string(cls, raw: str) -> "Locator":
        h = host(raw)
        for known in Host:
            if h == known.value:
                parsed = urlsplit(raw)
                path = parsed.path
                if parsed.query:
                    path = f"{path}?{parsed.query}"
                return cls(known, path)
        raise InvalidDomain(f"host {h!r} is neither {CDX_HOST} nor {WARC_HOST}: {raw}")

    def to_string(self) -> str:
        return f"https://{self.host.value}/{self.path}"

    def __str__(self) -> str:
        return self.to_string()
