"""TechHub package for tracking attachees and their performance reports."""

from .attachee import Attachee, Division, InvalidDivisionError
from .config import load_config
from .loader import load_roster
from .logging_utils import setup_logging
from .report import PerformanceReport, export_report, format_report, generate_report
from .roster import Roster

__all__ = [
    "Attachee",
    "Division",
    "InvalidDivisionError",
    "PerformanceReport",
    "Roster",
    "export_report",
    "format_report",
    "generate_report",
    "load_config",
    "load_roster",
    "setup_logging",
]
