# ccindex/cli.py
from __future__ import annotations

import argparse
import os
import sys
from typing import List

from .cdx_client import CDXClient
from .errors import CCIndexError
from .exporters import write_catalog_csv, write_records_csv, write_records_jsonl
from .fetcher import Fetcher
from .logger import RunLogger
from .models import CDXRecord
from .progress import Progress
from .query import DEFAULT_PAGE_SIZE, QueryBuilder

DEFAULT_USER_AGENT = "ccindex/0.1 (+https://commoncrawl.org)"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("ccindex")
    p.add_argument("--user-agent", default=DEFAULT_USER_AGENT)
    p.add_argument("--timeout", type=float, default=None)
    p.add_argument("--log-file", default=os.devnull)
    p.add_argument("--mirror-log", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("collections", help="list crawl collections")
    c.add_argument("--csv", default="-")

    q = sub.add_parser("query", help="query a collection's CDX index")
    q.add_argument("--collection", required=True, help="collection id, e.g. CC-MAIN-2024-10")
    q.add_argument("--url", required=True)
    q.add_argument("--from", dest="date_from")
    q.add_argument("--to", dest="date_to")
    q.add_argument("--limit", type=int)
    q.add_argument("--sort")
    q.add_argument("--closest")
    q.add_argument("--match-type")
    q.add_argument("--filter", action="append", default=[])
    q.add_argument("--field")
    q.add_argument("--page", type=int)
    q.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE)
    q.add_argument("--num-pages", action="store_true", help="print the page count and exit")
    q.add_argument("--all-pages", action="store_true")
    q.add_argument("--json", default="-")
    q.add_argument("--csv", default="")
    q.add_argument("--no-progress", action="store_true")

    s = sub.add_parser("segment", help="download a WARC segment")
    s.add_argument("path")
    s.add_argument("--out", required=True)
    return p


def _builder(args) -> QueryBuilder:
    b = QueryBuilder(args.collection, args.url)
    if args.date_from or args.date_to:
        b.with_time_range(args.date_from, args.date_to)
    if args.limit is not None:
        b.with_limit(args.limit)
    if args.sort:
        b.with_sort(args.sort)
    if args.closest:
        b.with_closest(args.closest)
    if args.match_type:
        b.with_match_type(args.match_type)
    for f in args.filter:
        b.with_filter(f)
    if args.field:
        b.with_field(args.field)
    if args.page is not None:
        b.with_page(args.page, args.page_size)
    return b


def _run_query(client: CDXClient, runlog: RunLogger, args) -> int:
    spec = _builder(args).build()
    if args.num_pages:
        count = client.num_pages(spec)
        print(f"pages={count.pages} page_size={count.page_size} blocks={count.blocks}")
        return 0

    records: List[CDXRecord] = []
    if args.all_pages:
        progress = Progress(enabled=not args.no_progress)
        if spec.page_size is None:
            spec = spec.with_options(page_size=args.page_size)
        count = client.num_pages(spec)
        progress.set_pages_total(count.pages)
        for page in client.iter_pages(spec, count=count):
            records.extend(page)
            progress.next_page()
            progress.inc_records(len(page))
            progress.render()
        progress.done()
    else:
        records.extend(client.execute(spec))

    runlog.log("INFO", "QUERY_DONE", url=spec.locator().to_string(), records=len(records))
    if args.json:
        write_records_jsonl(args.json, records)
    if args.csv:
        write_records_csv(args.csv, records)
    return 0


def main(argv=None):
    args = _build_parser().parse_args(argv)
    runlog = RunLogger(args.log_file, mirror_stdout=args.mirror_log)
    fetch = Fetcher(user_agent=args.user_agent, timeout=args.timeout, logger=runlog)
    client = CDXClient(fetcher=fetch, logger=runlog)

    try:
        if args.command == "collections":
            catalog = client.fetch_catalog()
            write_catalog_csv(args.csv, catalog)
        elif args.command == "query":
            _run_query(client, runlog, args)
        elif args.command == "segment":
            data = client.fetch_archive_segment(args.path)
            with open(args.out, "wb") as fh:
                fh.write(data)
            runlog.log("INFO", "SAVE_SEGMENT", url=args.path, path=args.out, bytes=len(data))
    except CCIndexError as e:
        runlog.log("ERROR", e.kind.upper(), error=str(e))
        sys.stderr.write(f"ccindex: {e.kind}: {e}\n")
        return 2
    finally:
        runlog.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
