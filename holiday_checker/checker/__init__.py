from holiday_checker.checker.debounce import Debouncer
from holiday_checker.checker.orchestrator import IdHolidayChecker
from holiday_checker.checker.state import CheckerPhase, CheckerSnapshot
from holiday_checker.checker.view import ViewState, project

__all__ = [
    "CheckerPhase",
    "CheckerSnapshot",
    "Debouncer",
    "IdHolidayChecker",
    "ViewState",
    "project",
]
