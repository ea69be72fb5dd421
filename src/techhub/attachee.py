"""Attachee records: tasks, feedback and the derived performance score."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

Clock = Callable[[], datetime]


class InvalidDivisionError(ValueError):
    """Raised when an attachee is created with an unknown division."""


class Division(str, Enum):
    ENGINEERING = "Engineering"
    TECH_PROGRAMS = "Tech Programs"
    RADIO_SUPPORT = "Radio Support"
    HUB_SUPPORT = "Hub Support"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Division":
        """Return the division named by ``value`` or raise InvalidDivisionError."""

        try:
            return cls(value)
        except ValueError as exc:
            valid = ", ".join(member.value for member in cls)
            raise InvalidDivisionError(
                f"Invalid division '{value}'. Must be one of: {valid}"
            ) from exc


def utc_clock() -> datetime:
    return datetime.now(tz=timezone.utc)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going towards positive infinity."""

    return int(math.floor(value + 0.5))


@dataclass
class Task:
    task_id: int
    description: str
    deadline: str
    priority: int
    completed: bool = False
    completion_date: Optional[str] = None


@dataclass(frozen=True)
class FeedbackEntry:
    text: str
    score: float
    reviewer: str
    created_at: datetime


@dataclass(frozen=True)
class PerformanceSummary:
    name: str
    division: Division
    performance_score: int
    tasks_assigned: int
    tasks_completed: int
    tasks_pending: int
    feedback_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "division": self.division.value,
            "performance_score": self.performance_score,
            "tasks_assigned": self.tasks_assigned,
            "tasks_completed": self.tasks_completed,
            "tasks_pending": self.tasks_pending,
            "feedback_count": self.feedback_count,
        }


class Attachee:
    """An intern attached to one of the hub divisions.

    The division is validated on construction and cannot be reassigned.
    Tasks and feedback are exposed as tuples; they only grow through
    :meth:`assign_task` and :meth:`add_feedback`, and ``performance_score``
    is rewritten only when feedback is added.
    """

    def __init__(
        self,
        name: str,
        email: str,
        division: Division | str,
        clock: Optional[Clock] = None,
    ) -> None:
        self.name = name
        self.email = email
        self._division = Division.parse(division)
        self._clock = clock or utc_clock
        self._tasks: List[Task] = []
        self._feedback: List[FeedbackEntry] = []
        self._performance_score = 0

    def __repr__(self) -> str:
        return f"Attachee(name={self.name!r}, email={self.email!r}, division={self._division.value!r})"

    @property
    def division(self) -> Division:
        return self._division

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def feedback(self) -> Tuple[FeedbackEntry, ...]:
        return tuple(self._feedback)

    @property
    def performance_score(self) -> int:
        return self._performance_score

    def assign_task(self, description: str, deadline: str, priority: int) -> Task:
        """Append a new pending task.

        Ids are dense and 1-based within this attachee. ``priority`` is
        expected to be 1-5 but is stored as given.
        """

        task = Task(
            task_id=len(self._tasks) + 1,
            description=description,
            deadline=deadline,
            priority=priority,
        )
        self._tasks.append(task)
        return task

    def complete_task(self, task_id: int, completion_date: str) -> Optional[Task]:
        """Mark a task complete; unknown ids are ignored and yield ``None``."""

        task = self.find_task(task_id)
        if task is None:
            return None
        task.completed = True
        task.completion_date = completion_date
        return task

    def find_task(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        return None

    def add_feedback(self, text: str, score: float, reviewer: str) -> FeedbackEntry:
        """Record feedback and recompute the score.

        A score that cannot be averaged (NaN, infinity) raises before the
        record is touched.
        """

        entry = FeedbackEntry(text=text, score=score, reviewer=reviewer, created_at=self._clock())
        new_score = _mean_score([*self._feedback, entry])
        self._feedback.append(entry)
        self._performance_score = new_score
        return entry

    def performance_summary(self) -> PerformanceSummary:
        completed = sum(1 for task in self._tasks if task.completed)
        return PerformanceSummary(
            name=self.name,
            division=self._division,
            performance_score=self._performance_score,
            tasks_assigned=len(self._tasks),
            tasks_completed=completed,
            tasks_pending=len(self._tasks) - completed,
            feedback_count=len(self._feedback),
        )


def _mean_score(feedback: Sequence[FeedbackEntry]) -> int:
    if not feedback:
        return 0
    total = sum(entry.score for entry in feedback)
    return round_half_up(total / len(feedback))


__all__ = [
    "Attachee",
    "Clock",
    "Division",
    "FeedbackEntry",
    "InvalidDivisionError",
    "PerformanceSummary",
    "Task",
    "round_half_up",
    "utc_clock",
]
