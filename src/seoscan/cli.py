# src/seoscan/cli.py

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .scoring.analyzer import analyze_multiple_urls, summarize_failures
from .scoring.cache import ReportCache
from .scoring.log_utils import configure_logging
from .scoring.schemas import to_wire

log = logging.getLogger(__name__)


def _read_urls(args: argparse.Namespace) -> List[str]:
    urls = list(args.urls or [])
    if args.input_file:
        with open(args.input_file, "r", encoding="utf-8") as f:
            urls.extend(line.strip() for line in f if line.strip() and not line.startswith("#"))
    return urls


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seoscan", description="Kør en SEO-analyse på en eller flere URLs.")
    parser.add_argument("urls", nargs="*", help="URL(s) der skal analyseres.")
    parser.add_argument(
        "-i", "--input-file",
        type=Path,
        help="Sti til en tekstfil med én URL pr. linje."
    )
    parser.add_argument(
        "-o", "--output-file",
        type=Path,
        help="Skriv JSON-resultatet hertil i stedet for stdout."
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=4,
        help="Antal samtidige analyser. Standard: 4"
    )
    parser.add_argument(
        "--no-cache",
        action="store_false",
        dest="use_cache",
        help="Slå rapport-cachen fra."
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING ...")
    parser.set_defaults(use_cache=True)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Hovedfunktionen for kommandolinje-interfacet."""
    args = build_parser().parse_args(argv)
    # stdout er forbeholdt JSON-output
    configure_logging(args.log_level, stream=sys.stderr)

    try:
        urls = _read_urls(args)
    except FileNotFoundError:
        log.error("Input-filen '%s' blev ikke fundet.", args.input_file)
        return 1
    if not urls:
        log.error("Ingen URLs angivet.")
        return 1

    cache = ReportCache() if args.use_cache else None
    try:
        results = asyncio.run(analyze_multiple_urls(urls, workers=args.workers, cache=cache))
    finally:
        if cache is not None:
            cache.close()

    payload = [
        {"url": r["url"], "seo": to_wire(r["report"])} if "report" in r
        else {"url": r["url"], "error": r["fetch_error"]}
        for r in results
    ]
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output_file:
        args.output_file.write_text(text, encoding="utf-8")
        log.info("Resultat gemt → %s", args.output_file)
    else:
        sys.stdout.write(text + "\n")

    failures = summarize_failures(results)
    for url, err in failures.items():
        log.warning("Fejlede: %s (%s)", url, err)
    return 1 if len(failures) == len(results) else 0


if __name__ == "__main__":
    sys.exit(main())
