"""Performance report aggregation, rendering and export."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd
from filelock import FileLock, Timeout

from .attachee import Attachee, Division, PerformanceSummary, round_half_up
from .config import AppConfig

logger = logging.getLogger("techhub.report")

SUMMARY_COLUMNS = [
    "division",
    "name",
    "performance_score",
    "tasks_assigned",
    "tasks_completed",
    "tasks_pending",
    "feedback_count",
]


@dataclass(frozen=True)
class OverallStats:
    total_attachees: int
    average_score: int
    highest_score: int
    lowest_score: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_attachees": self.total_attachees,
            "average_score": self.average_score,
            "highest_score": self.highest_score,
            "lowest_score": self.lowest_score,
        }


@dataclass(frozen=True)
class PerformanceReport:
    divisions: Mapping[Division, List[PerformanceSummary]]
    overall_stats: OverallStats

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            division.value: [summary.to_dict() for summary in summaries]
            for division, summaries in self.divisions.items()
        }
        data["overall_stats"] = self.overall_stats.to_dict()
        return data


def generate_report(attachees: Iterable[Attachee]) -> PerformanceReport:
    """Group summaries by division and fold the overall score statistics.

    Every division is present in the result, empty ones as ``[]``. The running
    extremes start at 0 (highest) and 100 (lowest); an empty roster reports
    zeros for all statistics.
    """

    divisions: Dict[Division, List[PerformanceSummary]] = {division: [] for division in Division}
    total_score = 0
    count = 0
    highest = 0
    lowest = 100

    for attachee in attachees:
        summary = attachee.performance_summary()
        divisions[summary.division].append(summary)

        total_score += summary.performance_score
        count += 1
        if summary.performance_score > highest:
            highest = summary.performance_score
        if summary.performance_score < lowest:
            lowest = summary.performance_score

    if count > 0:
        average = round_half_up(total_score / count)
    else:
        average = highest = lowest = 0

    stats = OverallStats(
        total_attachees=count,
        average_score=average,
        highest_score=highest,
        lowest_score=lowest,
    )
    logger.debug("Report generated for %d attachees", count)
    return PerformanceReport(divisions=divisions, overall_stats=stats)


def format_report(report: PerformanceReport, title: str = "TECH INNOVATION HUB PERFORMANCE REPORT") -> str:
    lines: List[str] = [f"=== {title} ==="]

    for division, summaries in report.divisions.items():
        if not summaries:
            continue
        lines.append("")
        lines.append(f"--- {division.value.upper()} DIVISION ({len(summaries)} attachees) ---")
        for summary in summaries:
            lines.append("")
            lines.append(f"Name: {summary.name}")
            lines.append(f"Performance Score: {summary.performance_score}/100")
            lines.append(f"Tasks: {summary.tasks_completed}/{summary.tasks_assigned} completed")
            lines.append(f"Feedback Entries: {summary.feedback_count}")

    stats = report.overall_stats
    lines.append("")
    lines.append("=== OVERALL STATISTICS ===")
    lines.append(f"Total Attachees: {stats.total_attachees}")
    lines.append(f"Average Performance Score: {stats.average_score}")
    lines.append(f"Highest Score: {stats.highest_score}")
    lines.append(f"Lowest Score: {stats.lowest_score}")
    return "\n".join(lines)


def report_to_frame(report: PerformanceReport) -> pd.DataFrame:
    rows = [
        summary.to_dict()
        for summaries in report.divisions.values()
        for summary in summaries
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def export_report(
    report: PerformanceReport,
    output_path: str | Path,
    config: AppConfig,
    generated_at: datetime | None = None,
) -> Path:
    """Write the report to an Excel workbook (and CSV files when enabled)."""

    if generated_at is None:
        generated_at = datetime.now(tz=config.timezone)
    stamp = generated_at.strftime("%Y-%m-%d")

    report_dir = Path(output_path)
    report_dir.mkdir(parents=True, exist_ok=True)
    report_file = report_dir / f"performance_report_{stamp}.xlsx"

    summaries = report_to_frame(report)
    stats = pd.DataFrame([report.overall_stats.to_dict()])

    lock = FileLock(str(report_file) + ".lock", timeout=config.lock_timeout)
    try:
        with lock:
            with pd.ExcelWriter(report_file, engine="openpyxl") as writer:
                summaries.to_excel(writer, sheet_name="Summaries", index=False)
                stats.to_excel(writer, sheet_name="OverallStats", index=False)
            if config.csv_export:
                _export_csv(summaries, stats, report_dir, stamp)
    except Timeout as exc:
        raise TimeoutError(
            f"Unable to acquire lock for report {report_file} within {config.lock_timeout} seconds"
        ) from exc

    logger.info("Excel report written to %s", report_file)
    return report_file


def _export_csv(summaries: pd.DataFrame, stats: pd.DataFrame, report_dir: Path, stamp: str) -> None:
    summaries_csv = report_dir / f"performance_report_{stamp}_Summaries.csv"
    stats_csv = report_dir / f"performance_report_{stamp}_OverallStats.csv"
    summaries.to_csv(summaries_csv, index=False, encoding="utf-8-sig")
    stats.to_csv(stats_csv, index=False, encoding="utf-8-sig")
    logger.info("CSV reports written: %s, %s", summaries_csv, stats_csv)


__all__ = [
    "OverallStats",
    "PerformanceReport",
    "export_report",
    "format_report",
    "generate_report",
    "report_to_frame",
]
