# SPDX-License-Identifier: MIT
"""
expirytrack - Command Line Interface

This CLI provides:
- expirytrack version
- expirytrack extract [FILE] --format {text,json} [--explain]
- expirytrack classify EXPIRY [--window N] [--lifetime N]
- expirytrack report RECORDS [--status {expired,expiring,valid}]
- expirytrack init-config
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from pydantic import ValidationError

from . import __version__
from .core.exceptions import ExpiryTrackError


def main(argv=None):
    argv = argv if argv is not None else sys.argv[1:]
    p = argparse.ArgumentParser(prog="expirytrack", description="Expiry date extraction and status tracking")
    p.add_argument("-v", "--version", action="store_true", help="print version and exit")
    p.add_argument("--config", help="path to .expirytrack.yml")
    p.add_argument("--verbose", action="store_true", help="log extraction decisions")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")
    sub.add_parser("init-config", help="print a commented default config")

    ep = sub.add_parser("extract", help="find the expiry date in scanned text")
    ep.add_argument("file", nargs="?", default="-", help="text file to read (default: stdin)")
    ep.add_argument("--now", help="reference date for the plausibility window (default: today)")
    ep.add_argument("--explain", action="store_true", help="list every pattern match considered")
    ep.add_argument("--format", choices=["text", "json"], default="text", help="output format (default: text)")

    cp = sub.add_parser("classify", help="classify a single expiry date")
    cp.add_argument("expiry", help="expiry date, e.g. 2026-12-31 or 31/12/2026")
    cp.add_argument("--now", help="evaluation date (default: now)")
    cp.add_argument("--window", type=int, help="expiring-soon window in days")
    cp.add_argument("--lifetime", type=int, help="total lifetime in days, enables progress")
    cp.add_argument("--format", choices=["text", "json"], default="text", help="output format (default: text)")

    rp = sub.add_parser("report", help="enrich and summarize a records file")
    rp.add_argument("records", help="JSON or YAML file with certificates/subscriptions")
    rp.add_argument("--now", help="evaluation date (default: now)")
    rp.add_argument("--status", choices=["expired", "expiring", "valid"], help="only show records in this state")
    rp.add_argument("--format", choices=["text", "json"], default="text", help="output format (default: text)")

    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.version or args.cmd == "version":
        print(__version__)
        return 0

    if args.cmd == "init-config":
        from .config.loader import create_default_config_template

        print(create_default_config_template(), end="")
        return 0

    handlers = {
        "extract": handle_extract_command,
        "classify": handle_classify_command,
        "report": handle_report_command,
    }
    if args.cmd in handlers:
        try:
            return handlers[args.cmd](args)
        except (ExpiryTrackError, ValidationError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    p.print_help()
    return 0


def _load_config(args):
    from .config.loader import load_config

    return load_config(args.config)


def _parse_now(value, day_first=True):
    from .dates import to_datetime

    if not value:
        return datetime.now()
    now = to_datetime(value, day_first=day_first)
    if now is None:
        raise ExpiryTrackError(f"Unrecognized --now date: {value}")
    return now


def handle_extract_command(args):
    """Handle the extract subcommand."""
    from .extract import extract_expiry_date, iter_candidates
    from .dates import format_expiry_date

    config = _load_config(args)
    now = _parse_now(args.now, config["day_first"])

    if args.file == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(args.file, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            raise ExpiryTrackError(f"Cannot read {args.file}: {e}") from e

    result = extract_expiry_date(text, now=now, plausibility_years=config["plausibility_years"])
    candidates = list(iter_candidates(text)) if args.explain else []

    if args.format == "json":
        output = result.to_dict()
        if args.explain:
            output["candidates"] = [c.to_dict() for c in candidates]
        print(json.dumps(output, indent=2))
    else:
        if result.found:
            print(f"Expiry date: {format_expiry_date(result.date)}")
            print(f"Confidence: {result.confidence:.0%}")
            print(f"Matched: {result.candidate.matched!r} ({result.candidate.pattern})")
        else:
            print("No expiry date found; enter the date manually.")
        if args.explain:
            print("\nCandidates:")
            if not candidates:
                print("  (none)")
            for c in candidates:
                print(f"  {c.pattern:<28} {c.text}")

    return 0 if result.found else 1


def handle_classify_command(args):
    """Handle the classify subcommand."""
    from .classify import classify
    from .dates import to_datetime, format_expiry_date

    config = _load_config(args)
    now = _parse_now(args.now, config["day_first"])

    expiry = to_datetime(args.expiry, day_first=config["day_first"])
    if expiry is None:
        raise ExpiryTrackError(f"Unrecognized expiry date: {args.expiry}")

    window = args.window if args.window is not None else config["collection_window_days"]
    status = classify(expiry, now, window, total_days=args.lifetime)

    if args.format == "json":
        print(json.dumps({"expiry_date": expiry.isoformat(), **status.to_dict()}, indent=2))
        return 0

    print(f"Expiry date: {format_expiry_date(expiry)}")
    print(f"Status: {status.label}")
    if status.is_expired:
        print(f"Days overdue: {status.days_overdue}")
    else:
        print(f"Days remaining: {status.days_remaining}")
    if status.progress_percentage is not None:
        print(f"Progress: {round(status.progress_percentage)}%")
    return 0


def handle_report_command(args):
    """Handle the report subcommand."""
    from .classify import ExpiryState, filter_by_state, sort_by_urgency, summarize
    from .records import enrich_certificate, enrich_subscription, load_records

    config = _load_config(args)
    now = _parse_now(args.now, config["day_first"])
    window = config["collection_window_days"]

    certificates, subscriptions = load_records(args.records, day_first=config["day_first"])

    def cert_key(c):
        return c.expiry_date

    def sub_key(s):
        return s.end_date

    if args.status:
        state = ExpiryState(args.status)
        certificates = filter_by_state(certificates, state, cert_key, now, window)
        subscriptions = filter_by_state(subscriptions, state, sub_key, now, window)

    report = {
        "certificates": {
            "stats": summarize(map(cert_key, certificates), now, window).to_dict(),
            "items": [enrich_certificate(c, now, config) for c in sort_by_urgency(certificates, cert_key)],
        },
        "subscriptions": {
            "stats": summarize(map(sub_key, subscriptions), now, window).to_dict(),
            "items": [enrich_subscription(s, now, config) for s in sort_by_urgency(subscriptions, sub_key)],
        },
    }

    if args.format == "json":
        print(json.dumps(report, indent=2, default=str))
    else:
        print_text_report(report)
    return 0


def print_text_report(report):
    """Print a text summary of an enriched records report."""
    for section, title_field in (("certificates", "name"), ("subscriptions", "title")):
        block = report[section]
        stats = block["stats"]
        print(f"\n{section.capitalize()}")
        print("=" * 50)
        print(
            f"Total: {stats['total']}  Valid: {stats['valid']}  "
            f"Expiring soon: {stats['expiring']}  Expired: {stats['expired']}"
        )
        for item in block["items"]:
            line = f"  [{item['status']:<8}] {item[title_field]}: {item['label']}"
            if "progress_percentage" in item:
                line += f" ({round(item['progress_percentage'])}% used)"
            print(line)


if __name__ == "__main__":
    raise SystemExit(main())
