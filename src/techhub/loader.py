"""Seed workbook loading: builds a roster from Excel sheets."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

import pandas as pd

from .attachee import Clock
from .roster import Roster

logger = logging.getLogger("techhub.loader")

ATTACHEES_SHEET = "Attachees"
TASKS_SHEET = "Tasks"
FEEDBACK_SHEET = "Feedback"

ATTACHEE_COLUMNS = ("Name", "Email", "Division")
TASK_COLUMNS = ("Email", "Description", "Deadline", "Priority")
FEEDBACK_COLUMNS = ("Email", "Text", "Score", "Reviewer")


class ValidationError(Exception):
    """Raised when a seed workbook does not have the expected shape."""


@dataclass
class SeedResult:
    roster: Roster
    warnings: List[str] = field(default_factory=list)


def load_roster(path: str | Path, clock: Optional[Clock] = None) -> SeedResult:
    """Load attachees, their tasks and feedback from a seed workbook.

    ``Attachees`` is required, ``Tasks`` and ``Feedback`` are optional. Rows
    that point at an unknown email or lack a numeric Priority/Score are
    skipped and reported in ``warnings``. An invalid division aborts loading
    with InvalidDivisionError.
    """

    workbook_path = Path(path)
    if not workbook_path.exists():
        raise FileNotFoundError(f"Workbook not found: {workbook_path}")

    with pd.ExcelFile(workbook_path) as xl:
        if ATTACHEES_SHEET not in xl.sheet_names:
            raise ValidationError(f"Workbook must contain an {ATTACHEES_SHEET} sheet")
        attachees = _parse_sheet(xl, ATTACHEES_SHEET, ATTACHEE_COLUMNS)
        tasks = _parse_sheet(xl, TASKS_SHEET, TASK_COLUMNS) if TASKS_SHEET in xl.sheet_names else None
        feedback = _parse_sheet(xl, FEEDBACK_SHEET, FEEDBACK_COLUMNS) if FEEDBACK_SHEET in xl.sheet_names else None

    result = SeedResult(roster=Roster(clock=clock))
    roster = result.roster

    for _, row in attachees.iterrows():
        roster.add_attachee(_text(row["Name"]), _text(row["Email"]), _text(row["Division"]))

    if tasks is not None:
        for index, row in tasks.iterrows():
            email = _text(row["Email"])
            priority = _number(row["Priority"])
            if priority is None:
                result.warnings.append(f"{TASKS_SHEET} row {index + 2}: missing or invalid Priority; skipped")
                continue
            task = roster.assign_task_to_attachee(
                email,
                _text(row["Description"]),
                _text(row["Deadline"]),
                int(priority),
            )
            if task is None:
                result.warnings.append(f"{TASKS_SHEET} row {index + 2}: unknown attachee {email}; skipped")
                continue
            completion = row.get("CompletionDate")
            if completion is not None and not pd.isna(completion):
                roster.complete_task_for_attachee(email, task.task_id, _text(completion))

    if feedback is not None:
        for index, row in feedback.iterrows():
            email = _text(row["Email"])
            score = _number(row["Score"])
            if score is None:
                result.warnings.append(f"{FEEDBACK_SHEET} row {index + 2}: missing or invalid Score; skipped")
                continue
            entry = roster.add_feedback_to_attachee(email, _text(row["Text"]), score, _text(row["Reviewer"]))
            if entry is None:
                result.warnings.append(f"{FEEDBACK_SHEET} row {index + 2}: unknown attachee {email}; skipped")

    logger.info("Seed workbook %s loaded with %d attachees", workbook_path, len(roster))
    return result


def _parse_sheet(xl: pd.ExcelFile, sheet: str, required: Sequence[str]) -> pd.DataFrame:
    df = xl.parse(sheet).copy()
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise ValidationError(f"{sheet} sheet is missing columns: {', '.join(missing)}")
    return df.dropna(subset=list(required), how="all")


def _number(value: Any) -> Optional[float]:
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number) or math.isinf(number):
        return None
    return float(number)


def _text(value: Any) -> str:
    if pd.isna(value):
        return ""
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    return str(value).strip()


__all__ = ["SeedResult", "ValidationError", "load_roster"]
