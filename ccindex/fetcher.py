# ccindex/fetcher.py
from __future__ import annotations
import requests

from .content import ContentType
from .errors import TransportError, UnexpectedStatus
from .locator import Locator
from .logger import RunLogger


class Fetcher:
    """
    One GET per call against a CommonCrawl locator.
    No retries and no throttling: a non-200 or a transport failure is raised as is.
    """
    def __init__(
        self,
        session: requests.Session | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        logger: RunLogger | None = None,
    ):
        self.sess = session or requests.Session()
        if user_agent:
            self.sess.headers.update({"User-Agent": user_agent})
        self.timeout = timeout
        self.logger = logger

    def execute(self, locator: Locator, content_type: ContentType = ContentType.JSON) -> bytes:
        url = locator.to_string()
        self._count("REQUESTS")
        try:
            r = self.sess.get(url, headers={"Accept": content_type.to_string()}, timeout=self.timeout)
        except requests.RequestException as e:
            self._count("REQUESTS_FAILED")
            self._log("WARN", "FETCH_FAIL", url, error=type(e).__name__)
            raise TransportError(f"{url}: {e}") from e
        if r.status_code != 200:
            self._count("REQUESTS_FAILED")
            self._log("WARN", "FETCH_FAIL", url, status=r.status_code)
            raise UnexpectedStatus(r.status_code, url)
        data = r.content
        self._count("REQUESTS_OK")
        self._log("INFO", "FETCH", url, status=r.status_code, bytes=len(data))
        return data

    def _count(self, key: str):
        if self.logger:
            self.logger.count(key)

    def _log(self, level: str, phase: str, url: str, **kv):
        if self.logger:
            self.logger.log(level, phase, url=url, **kv)
