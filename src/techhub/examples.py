"""Built-in example roster used by the ``demo`` command."""
from __future__ import annotations

from typing import Optional

from .attachee import Clock, Division
from .roster import Roster

EXAMPLE_ATTACHEES = (
    ("Omar Haitham", "omarhaitham@example.com", Division.ENGINEERING),
    ("Martin John", "martin@example.com", Division.ENGINEERING),
    ("Mary Brown", "maryb@example.com", Division.TECH_PROGRAMS),
    ("Diana Charles", "diana@example.com", Division.RADIO_SUPPORT),
    ("Cynthia Adams", "cyadams@example.com", Division.HUB_SUPPORT),
)


def build_example_roster(clock: Optional[Clock] = None) -> Roster:
    roster = Roster(clock=clock)
    for name, email, division in EXAMPLE_ATTACHEES:
        roster.add_attachee(name, email, division)

    roster.assign_task_to_division(
        Division.ENGINEERING, "Develop API endpoint for user management", "2023-06-15", 4
    )
    roster.assign_task_to_attachee("omarhaitham@example.com", "Review code quality standards", "2023-06-10", 3)
    roster.assign_task_to_attachee("martin@example.com", "Optimize database queries", "2023-06-12", 5)

    roster.complete_task_for_attachee("omarhaitham@example.com", 1, "2023-06-08")
    roster.complete_task_for_attachee("omarhaitham@example.com", 2, "2023-06-09")

    roster.add_feedback_to_attachee(
        "omarhaitham@example.com", "Excellent work on the API development!", 95, "Supervisor A"
    )
    roster.add_feedback_to_attachee(
        "martin@example.com", "Good progress, needs more attention to detail", 82, "Supervisor B"
    )
    roster.add_feedback_to_attachee(
        "maryb@example.com", "Outstanding contribution to the tech program", 98, "Supervisor C"
    )
    return roster


__all__ = ["EXAMPLE_ATTACHEES", "build_example_roster"]
