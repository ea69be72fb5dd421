"""Roster of attachees and the operations that act on it by email or division."""
from __future__ import annotations

import logging
import threading
from typing import Iterator, List, Optional, Tuple

from .attachee import Attachee, Clock, Division, FeedbackEntry, Task, utc_clock
from .report import PerformanceReport, generate_report

logger = logging.getLogger("techhub.roster")


class Roster:
    """Owns every attachee record and produces the performance report.

    Operations addressed by email resolve the record with :meth:`find_by_email`
    and do nothing when it is missing. All operations share one lock per roster.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utc_clock
        self._attachees: List[Attachee] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._attachees)

    def __iter__(self) -> Iterator[Attachee]:
        return iter(self.attachees)

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and self.find_by_email(email) is not None

    @property
    def attachees(self) -> Tuple[Attachee, ...]:
        with self._lock:
            return tuple(self._attachees)

    def add_attachee(self, name: str, email: str, division: Division | str) -> Attachee:
        attachee = Attachee(name, email, division, clock=self._clock)
        with self._lock:
            self._attachees.append(attachee)
        logger.info("Attachee %s added to %s", email, attachee.division.value)
        return attachee

    def remove_attachee(self, email: str) -> None:
        with self._lock:
            before = len(self._attachees)
            self._attachees = [a for a in self._attachees if a.email != email]
            removed = before - len(self._attachees)
        if removed:
            logger.info("Attachee %s removed", email)
        else:
            logger.debug("remove_attachee: no attachee with email %s", email)

    def by_division(self, division: Division | str) -> List[Attachee]:
        with self._lock:
            return [a for a in self._attachees if a.division == division]

    def find_by_email(self, email: str) -> Optional[Attachee]:
        with self._lock:
            for attachee in self._attachees:
                if attachee.email == email:
                    return attachee
        return None

    def assign_task_to_division(
        self, division: Division | str, description: str, deadline: str, priority: int
    ) -> int:
        """Assign the same task to every current member of ``division``.

        Returns the number of attachees that received the task.
        """

        with self._lock:
            members = self.by_division(division)
            for attachee in members:
                attachee.assign_task(description, deadline, priority)
        logger.debug("Task '%s' assigned to %d attachees in %s", description, len(members), division)
        return len(members)

    def assign_task_to_attachee(
        self, email: str, description: str, deadline: str, priority: int
    ) -> Optional[Task]:
        with self._lock:
            attachee = self.find_by_email(email)
            if attachee is None:
                logger.debug("assign_task_to_attachee: unknown email %s", email)
                return None
            return attachee.assign_task(description, deadline, priority)

    def complete_task_for_attachee(
        self, email: str, task_id: int, completion_date: str
    ) -> Optional[Task]:
        with self._lock:
            attachee = self.find_by_email(email)
            if attachee is None:
                logger.debug("complete_task_for_attachee: unknown email %s", email)
                return None
            return attachee.complete_task(task_id, completion_date)

    def add_feedback_to_attachee(
        self, email: str, text: str, score: float, reviewer: str
    ) -> Optional[FeedbackEntry]:
        with self._lock:
            attachee = self.find_by_email(email)
            if attachee is None:
                logger.debug("add_feedback_to_attachee: unknown email %s", email)
                return None
            return attachee.add_feedback(text, score, reviewer)

    def generate_report(self) -> PerformanceReport:
        with self._lock:
            return generate_report(self._attachees)


__all__ = ["Roster"]
