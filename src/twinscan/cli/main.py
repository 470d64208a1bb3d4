from __future__ import annotations

import argparse

from twinscan.cli.commands.scan import ScanOptions, run_scan
from twinscan.core.logging import set_verbosity


def _kinds(value: str) -> list[str]:
    kinds = [part.strip() for part in value.split(",") if part.strip()]
    if not kinds:
        raise argparse.ArgumentTypeError("expected at least one of Method, Lambda, Block")
    return kinds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twinscan")
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Find structurally identical code fragments")
    scan.add_argument("path", nargs="*", default=["."])
    scan.add_argument("--format", choices=["text", "json", "markdown", "md"], default=None)
    scan.add_argument("--out", default=None)
    scan.add_argument("--top", type=int, default=None)
    scan.add_argument("--min-group-size", type=int, default=None)
    scan.add_argument("--min-tokens", type=int, default=None)
    scan.add_argument("--min-lines", type=int, default=None)
    scan.add_argument("--extract-min-lines", type=int, default=None)
    scan.add_argument("--preview-lines", type=int, default=None)
    scan.add_argument("--kinds", type=_kinds, default=None, help="e.g. Method,Lambda,Block")
    scan.add_argument("--jobs", type=int, default=None)
    scan.add_argument("--progress", action="store_true")
    scan.add_argument("--include-globs", action="append", default=None)
    scan.add_argument("--exclude-globs", action="append", default=None)
    scan.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    scan.add_argument("--verbose", action="store_true", help="Log per-stage timings")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "scan":
        set_verbosity(quiet=args.quiet, verbose=args.verbose)
        return run_scan(
            ScanOptions(
                paths=args.path,
                fmt=args.format,
                out_path=args.out,
                top=args.top,
                min_group_size=args.min_group_size,
                min_tokens=args.min_tokens,
                min_lines=args.min_lines,
                extract_min_lines=args.extract_min_lines,
                preview_lines=args.preview_lines,
                kinds=args.kinds,
                jobs=args.jobs,
                progress=args.progress,
                include_globs=args.include_globs,
                exclude_globs=args.exclude_globs,
            )
        )
    return 1
