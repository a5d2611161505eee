"""State owned by a single checker instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from holiday_checker.domain.models import CalendarResult, IdentityRecord


class CheckerPhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    SEARCHING = "searching"
    RESULTS = "results"
    SEARCH_ERROR = "search_error"


@dataclass
class InputState:
    raw_value: str = ""
    is_confirmed_valid: bool = False
    is_validating: bool = False
    validation_message: str = ""


@dataclass(frozen=True, slots=True)
class SearchData:
    identity: IdentityRecord = field(default_factory=IdentityRecord)
    calendar: CalendarResult = field(default_factory=CalendarResult)
    search_count: int = 0
    formatted_id_number: str = ""


@dataclass(frozen=True, slots=True)
class SearchIdle:
    pass


@dataclass(frozen=True, slots=True)
class SearchInFlight:
    pass


@dataclass(frozen=True, slots=True)
class SearchResults:
    data: SearchData


@dataclass(frozen=True, slots=True)
class SearchFailed:
    message: str


SearchOutcome = SearchIdle | SearchInFlight | SearchResults | SearchFailed


@dataclass
class SearchState:
    outcome: SearchOutcome = field(default_factory=SearchIdle)

    @property
    def is_searching(self) -> bool:
        return isinstance(self.outcome, SearchInFlight)

    @property
    def has_results(self) -> bool:
        return isinstance(self.outcome, SearchResults)

    @property
    def has_error(self) -> bool:
        return isinstance(self.outcome, SearchFailed)

    @property
    def error_message(self) -> str:
        if isinstance(self.outcome, SearchFailed):
            return self.outcome.message
        return ""

    @property
    def data(self) -> SearchData | None:
        if isinstance(self.outcome, SearchResults):
            return self.outcome.data
        return None


@dataclass(frozen=True, slots=True)
class CheckerSnapshot:
    """Immutable copy of everything the view layer reads."""

    input: InputState
    search: SearchState

    @property
    def data(self) -> SearchData:
        return self.search.data or SearchData()


__all__ = [
    "CheckerPhase",
    "CheckerSnapshot",
    "InputState",
    "SearchData",
    "SearchFailed",
    "SearchIdle",
    "SearchInFlight",
    "SearchOutcome",
    "SearchResults",
    "SearchState",
]
