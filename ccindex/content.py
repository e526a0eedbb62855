# ccindex/content.py
from __future__ import annotations
from enum import Enum

from .errors import InvalidCharset, InvalidContentType


class Charset(Enum):
    UTF8 = "utf-8"
    UTF16 = "utf-16"

    @classmethod
    def from_string(cls, s: str) -> "Charset":
        for cs in cls:
            if cs.value == s:
                return cs
        raise InvalidCharset(f"unsupported charset: {s!r}")

    def to_string(self) -> str:
        return self.value


class ContentType(Enum):
    """Accept header values. The enum value is the exact header string."""
    JSON = "application/json"
    TEXT_UTF8 = "text/plain; charset=utf-8"
    TEXT_UTF16 = "text/plain; charset=utf-16"

    @classmethod
    def text(cls, charset: Charset = Charset.UTF8) -> "ContentType":
        if charset is Charset.UTF8:
            return cls.TEXT_UTF8
        if charset is Charset.UTF16:
            return cls.TEXT_UTF16
        raise InvalidCharset(f"unsupported charset: {charset!r}")

    @classmethod
    def from_string(cls, s: str) -> "ContentType":
        for ct in cls:
            if ct.value == s:
                return ct
        raise InvalidContentType(f"unsupported content type: {s!r}")

    @property
    def charset(self) -> Charset | None:
        if self is ContentType.TEXT_UTF8:
            return Charset.UTF8
        if self is ContentType.TEXT_UTF16:
            return Charset.UTF16
        return None

    def to_string(self) -> str:
        return self.value
