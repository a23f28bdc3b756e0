#!/usr/bin/env python3
"""
CLI for small-cycle checks of contracted ring configurations.

Usage:
    python main.py check -c confs/0001.conf -e 3 7 12        # One configuration
    python main.py check -c confs/0001.conf -e 3 -o out.json  # ... and export findings
    python main.py batch --confdir confs --summary summary.csv
    python main.py batch --confdir confs --summary summary.csv -o results.csv -v 1

Report lines go to stderr; grep them for "dangerous".
"""

import argparse
import logging
import sys
from pathlib import Path

from ringcut.batch import run_summary
from ringcut.checker import CheckReport, check_file
from ringcut.configuration import ConfigurationError
from ringcut.export import export_findings_csv, export_findings_json


def configure_logging(verbosity: int):
    """0: report stream only, 1: debug, 2: everything including trace-level detail."""
    level = logging.INFO if verbosity <= 0 else logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def export_reports(reports: list[CheckReport], output: str):
    """Export reports by file extension (.json or .csv)."""
    path = Path(output)
    if path.suffix == ".csv":
        export_findings_csv(reports, path)
    elif path.suffix == ".json":
        export_findings_json(reports, path)
    else:
        raise ValueError(f"Unsupported output format: {path.suffix} (use .json or .csv)")
    print(f"Saved to {path}")


def print_report(report: CheckReport):
    print(f"{report.source}: n={report.n}, r={report.r}, contracted {len(report.contraction)} edges")
    for c, vs in report.erased.items():
        if vs:
            print(f"  erased by {c}: {', '.join(str(v) for v in vs)}")
    if report.dangerous:
        print(f"  {len(report.findings)} dangerous findings")
    else:
        print("  no dangerous findings")


def cmd_check(args):
    """Check one configuration under a contraction."""
    report = check_file(args.conf, args.edge_ids)
    print_report(report)
    if args.output:
        export_reports([report], args.output)


def cmd_batch(args):
    """Check every contraction row of a summary table."""
    def progress(i, total, report):
        status = "DANGEROUS" if report.dangerous else "ok"
        print(f"  [{i:3d}/{total}] {report.source}: {status} ({len(report.findings)} findings)")

    print(f"Checking {args.summary} against {args.confdir}")
    reports = run_summary(args.confdir, args.summary, progress_callback=progress)

    dangerous = sum(1 for r in reports if r.dangerous)
    print()
    print(f"{len(reports)} configurations checked, {dangerous} with dangerous findings")
    if args.output:
        export_reports(reports, args.output)


def main():
    parser = argparse.ArgumentParser(
        description="Small-cycle checks for contracted ring configurations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--verbosity", "-v", type=int, default=0, help="1 for debug, 2 for trace")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # check command
    check_parser = subparsers.add_parser("check", help="Check one configuration")
    check_parser.add_argument("--conf", "-c", required=True, help="A configuration file")
    check_parser.add_argument("--edge-ids", "-e", type=int, nargs="+", required=True,
                              help="Contraction edge ids (in dual form)")
    check_parser.add_argument("--output", "-o", help="Export findings (.json or .csv)")
    check_parser.add_argument("--verbosity", "-v", type=int, default=argparse.SUPPRESS,
                              help="1 for debug, 2 for trace")

    # batch command
    batch_parser = subparsers.add_parser("batch", help="Check every contraction row of a summary table")
    batch_parser.add_argument("--confdir", required=True, help="Directory containing the .conf files")
    batch_parser.add_argument("--summary", required=True, help="Summary CSV (file,status,csize,edge ids)")
    batch_parser.add_argument("--output", "-o", help="Export findings (.json or .csv)")
    batch_parser.add_argument("--verbosity", "-v", type=int, default=argparse.SUPPRESS,
                              help="1 for debug, 2 for trace")

    args = parser.parse_args()
    configure_logging(args.verbosity)

    try:
        if args.command == "check":
            cmd_check(args)
        elif args.command == "batch":
            cmd_batch(args)
        else:
            parser.print_help()
    except (ConfigurationError, FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
