# ccindex/exporters.py
from __future__ import annotations
import csv, sys
from contextlib import contextmanager
from typing import Iterable

from .models import CDXRecord, CollectionCatalog

RECORD_COLS = ["urlkey", "timestamp", "url", "mime", "mime_detected", "status", "digest",
               "length", "offset", "filename", "languages", "charset"]
CATALOG_COLS = ["id", "name", "timegate_url", "cdx_api_url"]


@contextmanager
def _open_out(path: str, newline: str | None = None):
    """`-` means stdout."""
    if path == "-":
        yield sys.stdout
        return
    with open(path, "w", newline=newline, encoding="utf-8", errors="replace") as fh:
        yield fh


def write_records_jsonl(path: str, records: Iterable[CDXRecord]) -> int:
    n = 0
    with _open_out(path) as fh:
        for r in records:
            fh.write(r.to_json() + "\n")
            n += 1
    return n


def write_records_csv(path: str, records: Iterable[CDXRecord]) -> int:
    n = 0
    with _open_out(path, newline="") as fh:
        w = csv.DictWriter(fh, fieldnames=RECORD_COLS)
        w.writeheader()
        for r in records:
            w.writerow(r.to_dict())
            n += 1
    return n


def write_catalog_csv(path: str, catalog: CollectionCatalog) -> int:
    with _open_out(path, newline="") as fh:
        w = csv.DictWriter(fh, fieldnames=CATALOG_COLS)
        w.writeheader()
        for c in catalog:
            w.writerow(c.to_dict())
    return len(catalog)
