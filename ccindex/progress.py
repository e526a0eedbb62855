# ccindex/progress.py
from __future__ import annotations
import sys
from dataclasses import dataclass

@dataclass
class Counters:
    pages_total: int = 0
    page_idx: int = 0
    records: int = 0

class Progress:
    """
    Minimal single-line progress for paged queries. Call .render() after you bump counters.
    Prints: [page 3/12] records: 4500
    """
    def __init__(self, enabled: bool = True, stream = sys.stderr):
        self.enabled = enabled
        self.stream = stream
        self.c = Counters()

    def set_pages_total(self, n: int):
        self.c.pages_total = max(0, n)

    def next_page(self):
        self.c.page_idx += 1

    def inc_records(self, n: int = 1): self.c.records += n

    def render(self):
        if not self.enabled:
            return
        msg = f"[page {self.c.page_idx}/{self.c.pages_total}] records: {self.c.records}"
        # single-line live update
        self.stream.write("\r" + msg + " " * 8)
        self.stream.flush()

    def done(self):
        if not self.enabled:
            return
        self.stream.write("\n")
        self.stream.flush()
