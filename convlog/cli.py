"""
Export conversation records from chat-bot logs.

Usage:
    convlog "logs/2017*/**/*.log" out.csv
    HEROKU=1 convlog "heroku-*.log" out.jsonl --jsonl
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from convlog.pipeline.export import export_csv, export_jsonl
from convlog.pipeline.source import resolve_files
from convlog.pipeline.timestamps import TimestampError

USAGE = "Usage: convlog <input file glob> <output file> [--jsonl] [--isolate-files]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="convlog",
        description="Extract conversation records from chat-bot log files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
By default only turns that changed the selected article are written, as CSV.
Set HEROKU=1 for Heroku drain logs and USER_ID=1 to include raw user ids.
        """,
    )
    parser.add_argument("input_glob", nargs="?", help="Glob of log files to read (quote it)")
    parser.add_argument("output", nargs="?", type=Path, help="Output file")
    parser.add_argument(
        "--jsonl",
        action="store_true",
        help="Write every record as JSON lines instead of filtered CSV",
    )
    parser.add_argument(
        "--isolate-files",
        action="store_true",
        help="Give each input file its own message buffer",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for convlog."""
    args = build_parser().parse_args(argv)

    if not args.input_glob or not args.output:
        print("Please provide input filename.")
        print(USAGE)
        return 1

    print(f"Processing {len(resolve_files(args.input_glob))} files to {args.output}...")

    try:
        if args.jsonl:
            stats = asyncio.run(export_jsonl(args.input_glob, args.output, isolate_files=args.isolate_files))
        else:
            stats = export_csv(args.input_glob, args.output, isolate_files=args.isolate_files)
    except TimestampError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: I/O failure: {e}", file=sys.stderr)
        return 1

    print(f"Done. Wrote {stats.records} records from {stats.files} files to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
