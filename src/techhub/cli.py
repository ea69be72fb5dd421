"""Command line interface for the TechHub attachee tracker."""
from __future__ import annotations

import argparse
from datetime import datetime

from .config import load_config
from .examples import build_example_roster
from .loader import load_roster
from .logging_utils import setup_logging
from .report import PerformanceReport, export_report, format_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TechHub attachee performance reports")
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Path to config file (YAML or JSON)",
    )

    subparsers = parser.add_subparsers(dest="command")

    report = subparsers.add_parser("report", help="Print the performance report for a seed workbook")
    report.add_argument(
        "workbook",
        nargs="?",
        help="Path to the seed Excel workbook (defaults to config seed_path)",
    )
    report.add_argument(
        "--output",
        dest="output_path",
        default=None,
        help="Directory to write the Excel report to",
    )
    report.add_argument(
        "--export",
        action="store_true",
        help="Export the Excel report to config report_path",
    )

    demo = subparsers.add_parser("demo", help="Print the report for the built-in example roster")
    demo.add_argument("--output", dest="output_path", default=None)

    parser.set_defaults(command="report", workbook=None, output_path=None, export=False)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config_path) if args.config_path else load_config()
    logger = setup_logging(config)

    def clock() -> datetime:
        return datetime.now(tz=config.timezone)

    if args.command == "demo":
        report = build_example_roster(clock=clock).generate_report()
    else:
        workbook_path = args.workbook or config.seed_path
        if workbook_path is None:
            parser.error("no workbook given and no seed_path configured")
        seed = load_roster(workbook_path, clock=clock)
        for msg in seed.warnings:
            logger.warning(msg)
        report = seed.roster.generate_report()

    _log_stats(logger, report)
    print(format_report(report))

    output_path = args.output_path
    if output_path is None and args.export:
        output_path = config.report_path
    if output_path is not None:
        report_file = export_report(report, output_path, config)
        print(f"\nReport written to {report_file}")

    return 0


def _log_stats(logger, report: PerformanceReport) -> None:
    stats = report.overall_stats
    logger.info(
        "Report covers %d attachees (average %d, highest %d, lowest %d)",
        stats.total_attachees,
        stats.average_score,
        stats.highest_score,
        stats.lowest_score,
    )


if __name__ == "__main__":
    raise SystemExit(main())
