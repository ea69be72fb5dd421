from __future__ import annotations

from datetime import datetime, timezone

import pandas as pd
import pytest

from techhub.attachee import InvalidDivisionError
from techhub.loader import ValidationError, load_roster


def write_workbook(path, **sheets):
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, frame in sheets.items():
            frame.to_excel(writer, sheet_name=name, index=False)
    return path


def attachees_frame(*rows):
    return pd.DataFrame(list(rows), columns=["Name", "Email", "Division"])


def test_load_full_workbook(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        Attachees=attachees_frame(
            ("Omar Haitham", "omar@example.com", "Engineering"),
            ("Mary Brown", "maryb@example.com", "Tech Programs"),
        ),
        Tasks=pd.DataFrame(
            [
                ("omar@example.com", "Develop API", "2023-06-15", 4, "2023-06-08"),
                ("omar@example.com", "Review code", "2023-06-10", 3, None),
                ("ghost@example.com", "Haunt", "2023-06-10", 1, None),
            ],
            columns=["Email", "Description", "Deadline", "Priority", "CompletionDate"],
        ),
        Feedback=pd.DataFrame(
            [
                ("omar@example.com", "Great", 95, "Supervisor A"),
                ("maryb@example.com", "Outstanding", 98, "Supervisor C"),
            ],
            columns=["Email", "Text", "Score", "Reviewer"],
        ),
    )
    moment = datetime(2024, 2, 1, tzinfo=timezone.utc)

    result = load_roster(path, clock=lambda: moment)

    omar = result.roster.find_by_email("omar@example.com")
    assert [t.task_id for t in omar.tasks] == [1, 2]
    assert omar.tasks[0].completed and omar.tasks[0].completion_date == "2023-06-08"
    assert omar.tasks[1].completed is False
    assert omar.performance_score == 95
    assert omar.feedback[0].created_at == moment
    assert result.warnings == ["Tasks row 4: unknown attachee ghost@example.com; skipped"]

    stats = result.roster.generate_report().overall_stats
    assert (stats.total_attachees, stats.highest_score, stats.lowest_score) == (2, 98, 95)


def test_attachees_only_workbook(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        Attachees=attachees_frame(("Diana Charles", "diana@example.com", "Radio Support")),
    )

    result = load_roster(path)

    assert len(result.roster) == 1
    assert result.warnings == []


def test_missing_attachees_sheet(tmp_path):
    path = write_workbook(tmp_path / "roster.xlsx", Other=pd.DataFrame({"a": [1]}))

    with pytest.raises(ValidationError, match="Attachees"):
        load_roster(path)


def test_missing_columns(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        Attachees=pd.DataFrame({"Name": ["Omar"], "Email": ["omar@example.com"]}),
    )

    with pytest.raises(ValidationError, match="Division"):
        load_roster(path)


def test_invalid_division_propagates(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        Attachees=attachees_frame(("Someone", "someone@example.com", "Marketing")),
    )

    with pytest.raises(InvalidDivisionError):
        load_roster(path)


def test_missing_workbook(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_roster(tmp_path / "nope.xlsx")


def test_blank_priority_row_is_skipped_with_warning(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        Attachees=attachees_frame(("Omar Haitham", "omar@example.com", "Engineering")),
        Tasks=pd.DataFrame(
            [
                ("omar@example.com", "Develop API", "2023-06-15", None),
                ("omar@example.com", "Review code", "2023-06-10", 3),
            ],
            columns=["Email", "Description", "Deadline", "Priority"],
        ),
    )

    result = load_roster(path)

    omar = result.roster.find_by_email("omar@example.com")
    assert [(t.task_id, t.description) for t in omar.tasks] == [(1, "Review code")]
    assert result.warnings == ["Tasks row 2: missing or invalid Priority; skipped"]


def test_blank_score_row_is_skipped_with_warning(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        Attachees=attachees_frame(("Mary Brown", "maryb@example.com", "Tech Programs")),
        Feedback=pd.DataFrame(
            [
                ("maryb@example.com", "Outstanding", 98, "Supervisor C"),
                ("maryb@example.com", "No score given", None, "Supervisor D"),
            ],
            columns=["Email", "Text", "Score", "Reviewer"],
        ),
    )

    result = load_roster(path)

    mary = result.roster.find_by_email("maryb@example.com")
    assert len(mary.feedback) == 1
    assert mary.performance_score == 98
    assert result.warnings == ["Feedback row 3: missing or invalid Score; skipped"]
