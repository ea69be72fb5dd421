from __future__ import annotations

from datetime import datetime, timezone

import pytest

from techhub.attachee import Division, InvalidDivisionError
from techhub.roster import Roster


def fixed_clock() -> datetime:
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def roster() -> Roster:
    roster = Roster(clock=fixed_clock)
    roster.add_attachee("Omar Haitham", "omar@example.com", "Engineering")
    roster.add_attachee("Martin John", "martin@example.com", "Engineering")
    roster.add_attachee("Mary Brown", "maryb@example.com", "Tech Programs")
    return roster


def test_add_attachee_returns_record_and_shares_clock(roster):
    diana = roster.add_attachee("Diana Charles", "diana@example.com", Division.RADIO_SUPPORT)

    assert len(roster) == 4
    assert roster.find_by_email("diana@example.com") is diana
    entry = diana.add_feedback("Good", 70, "Supervisor D")
    assert entry.created_at == fixed_clock()


def test_add_attachee_propagates_invalid_division(roster):
    with pytest.raises(InvalidDivisionError):
        roster.add_attachee("Someone", "someone@example.com", "Marketing")

    assert len(roster) == 3


def test_remove_attachee(roster):
    roster.remove_attachee("martin@example.com")

    assert len(roster) == 2
    assert "martin@example.com" not in roster
    assert [a.name for a in roster.by_division("Engineering")] == ["Omar Haitham"]


def test_remove_unknown_attachee_is_noop(roster):
    before = roster.attachees

    roster.remove_attachee("nobody@example.com")

    assert roster.attachees == before


def test_by_division_keeps_roster_order(roster):
    assert [a.email for a in roster.by_division(Division.ENGINEERING)] == [
        "omar@example.com",
        "martin@example.com",
    ]
    assert roster.by_division("Hub Support") == []
    assert roster.by_division("Marketing") == []


def test_find_by_email_returns_none_when_missing(roster):
    assert roster.find_by_email("nobody@example.com") is None
    assert roster.find_by_email("maryb@example.com").name == "Mary Brown"


def test_assign_task_to_division_gives_each_member_id_one(roster):
    touched = roster.assign_task_to_division("Engineering", "Develop API endpoint", "2023-06-15", 4)

    assert touched == 2
    for email in ("omar@example.com", "martin@example.com"):
        tasks = roster.find_by_email(email).tasks
        assert [t.task_id for t in tasks] == [1]
    assert roster.find_by_email("maryb@example.com").tasks == ()


def test_task_ids_are_per_attachee(roster):
    roster.assign_task_to_attachee("maryb@example.com", "Plan event", "2023-06-01", 2)
    roster.assign_task_to_attachee("omar@example.com", "Review code", "2023-06-10", 3)
    roster.assign_task_to_attachee("omar@example.com", "Fix bug", "2023-06-11", 5)

    assert [t.task_id for t in roster.find_by_email("omar@example.com").tasks] == [1, 2]
    assert [t.task_id for t in roster.find_by_email("maryb@example.com").tasks] == [1]


def test_unknown_email_operations_are_noops(roster):
    before = [a.performance_summary() for a in roster.attachees]

    assert roster.assign_task_to_attachee("nobody@example.com", "Task", "2023-06-10", 3) is None
    assert roster.add_feedback_to_attachee("nobody@example.com", "Hi", 90, "Supervisor") is None
    assert roster.complete_task_for_attachee("nobody@example.com", 1, "2023-06-10") is None

    assert len(roster) == 3
    assert [a.performance_summary() for a in roster.attachees] == before


def test_feedback_and_completion_via_roster(roster):
    roster.assign_task_to_attachee("omar@example.com", "Review code", "2023-06-10", 3)

    task = roster.complete_task_for_attachee("omar@example.com", 1, "2023-06-09")
    roster.add_feedback_to_attachee("omar@example.com", "Great", 95, "Supervisor A")

    omar = roster.find_by_email("omar@example.com")
    assert task is omar.tasks[0]
    assert task.completed and task.completion_date == "2023-06-09"
    assert omar.performance_score == 95


def test_attachees_snapshot_is_not_live(roster):
    snapshot = roster.attachees

    roster.add_attachee("Cynthia Adams", "cyadams@example.com", "Hub Support")

    assert len(snapshot) == 3
    assert len(list(roster)) == 4
