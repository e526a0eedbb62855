# ccindex/errors.py
from __future__ import annotations


class CCIndexError(Exception):
    """Base class for every error the client raises. `kind` is a stable tag."""
    kind = "ccindex_error"

    @property
    def retryable(self) -> bool:
        return False


class InvalidDomain(CCIndexError):
    kind = "invalid_domain"


class InvalidCharset(CCIndexError):
    kind = "invalid_charset"


class InvalidContentType(CCIndexError):
    kind = "invalid_content_type"


class InvalidRange(CCIndexError):
    kind = "invalid_range"


class InvalidPageSize(CCIndexError):
    kind = "invalid_page_size"


class InvalidLimit(CCIndexError):
    kind = "invalid_limit"


class UnexpectedStatus(CCIndexError):
    kind = "unexpected_status"

    def __init__(self, status: int, url: str = ""):
        self.status = status
        self.url = url
        msg = f"unexpected status {status}"
        if url:
            msg += f" for {url}"
        super().__init__(msg)

    @property
    def retryable(self) -> bool:
        return self.status == 429 or 500 <= self.status < 600


class DecodeFailed(CCIndexError):
    kind = "decode_failed"


class TransportError(CCIndexError):
    kind = "transport_error"

    @property
    def retryable(self) -> bool:
        return True
