# ccindex/logger.py
from __future__ import annotations
from datetime import datetime
import sys


class RunLogger:
    """
    Plain-text run log: one `[ts] LEVEL PHASE url=.. k=v` line per event,
    plus request/record counters written as a [SUMMARY] line on close.
    """
    def __init__(self, path: str = "ccindex.log", mirror_stdout: bool = False):
        self.path = path
        self._fh = open(path, "w", encoding="utf-8", errors="replace")
        self._mirror = mirror_stdout
        self._counters = {
            "REQUESTS": 0, "REQUESTS_OK": 0, "REQUESTS_FAILED": 0,
            "PAGES": 0, "RECORDS": 0,
        }

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, *exc):
        self.close()

    def log(self, level: str, phase: str, url: str = "", **kv):
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        parts = [f"[{ts}] {level} {phase}"]
        if url:
            parts.append(f"url={url}")
        for k, v in kv.items():
            parts.append(f"{k}={v}")
        line = " ".join(parts) + "\n"
        self._fh.write(line)
        if self._mirror:
            sys.stderr.write(line)

    def count(self, key: str, inc: int = 1):
        if key in self._counters:
            self._counters[key] += inc

    @property
    def counters(self) -> dict:
        return dict(self._counters)

    def summary(self):
        s = " ".join(f"{k}={v}" for k, v in self._counters.items())
        self._fh.write(f"[SUMMARY] {s}\n")
        if self._mirror:
            sys.stderr.write(f"[SUMMARY] {s}\n")

    def close(self):
        if self._fh.closed:
            return
        try:
            self.summary()
        finally:
            self._fh.close()
