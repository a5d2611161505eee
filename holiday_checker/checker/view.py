"""Pure projections from checker state to display values.

Nothing here mutates state or caches results; every value is recomputed from
the snapshot it is given. Functions that read remote-sourced dates never
raise and fall back to a safe string instead.
"""

from __future__ import annotations

from pydantic import BaseModel

from holiday_checker.checker.state import CheckerSnapshot
from holiday_checker.domain.models import CalendarEvent, CalendarResult, IdentityRecord
from holiday_checker.utils.datetime import parse_date


class ViewState(BaseModel):
    raw_value: str
    validation_message: str
    error_message: str
    is_searching: bool
    has_results: bool
    has_error: bool
    input_class: str
    validation_message_class: str
    search_button_class: str
    is_search_disabled: bool
    show_valid_icon: bool
    show_invalid_icon: bool
    formatted_id_number: str
    formatted_date_of_birth: str
    gender_badge_class: str
    citizenship_badge_class: str
    citizenship_text: str
    search_count: int
    holiday_count: int
    holiday_dates: list[str]
    holidays_on_birth_date: list[CalendarEvent]
    has_holidays_on_birth_date: bool


def format_long_date(value: str | None) -> str | None:
    """``1980-01-01`` -> ``Tuesday, 01 January 1980`` (en-ZA long form)."""

    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed:%A}, {parsed.day:02d} {parsed:%B} {parsed.year}"


def format_short_date(value: str | None) -> str:
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return value
    return f"{parsed.day:02d} {parsed:%b}"


def formatted_date_of_birth(identity: IdentityRecord) -> str:
    if not identity.date_of_birth:
        return ""
    formatted = format_long_date(identity.date_of_birth)
    if formatted is None:
        return identity.formatted_date_of_birth or ""
    return formatted


def gender_badge_class(identity: IdentityRecord) -> str:
    if identity.gender == "Male":
        return "gender-badge gender-male"
    if identity.gender == "Female":
        return "gender-badge gender-female"
    return "gender-badge"


def citizenship_badge_class(identity: IdentityRecord) -> str:
    if identity.is_citizen:
        return "citizenship-badge citizenship-sa"
    return "citizenship-badge citizenship-non-sa"


def citizenship_text(identity: IdentityRecord) -> str:
    return "SA Citizen" if identity.is_citizen else "Non-SA Citizen"


def holiday_count(calendar: CalendarResult | None) -> int:
    if calendar is None:
        return 0
    return len(calendar.events)


def holiday_dates(calendar: CalendarResult | None) -> list[str]:
    """Short display dates (``01 Jan``) for every event, in calendar order."""

    if calendar is None:
        return []
    return [format_short_date(event.date) for event in calendar.events]


def holidays_on_birth_date(
    identity: IdentityRecord, calendar: CalendarResult | None
) -> list[CalendarEvent]:
    """Events dated on the birthday within the birth year."""

    if calendar is None or not calendar.events or not identity.birth_year:
        return []
    born = parse_date(identity.date_of_birth)
    if born is None:
        return []
    target = f"{identity.birth_year}-{born.month:02d}-{born.day:02d}"
    return [event for event in calendar.events if event.date == target]


def has_holidays_on_birth_date(identity: IdentityRecord, calendar: CalendarResult | None) -> bool:
    return bool(holidays_on_birth_date(identity, calendar))


def input_class(snapshot: CheckerSnapshot) -> str:
    state = snapshot.input
    if state.is_confirmed_valid:
        return "input-field input-valid"
    if state.raw_value and not state.is_validating:
        return "input-field input-invalid"
    return "input-field"


def validation_message_class(snapshot: CheckerSnapshot) -> str:
    if snapshot.input.is_confirmed_valid:
        return "validation-message validation-success"
    return "validation-message validation-error"


def is_search_disabled(snapshot: CheckerSnapshot) -> bool:
    return (
        not snapshot.input.is_confirmed_valid
        or snapshot.search.is_searching
        or snapshot.input.is_validating
    )


def show_valid_icon(snapshot: CheckerSnapshot) -> bool:
    return snapshot.input.is_confirmed_valid and not snapshot.input.is_validating


def show_invalid_icon(snapshot: CheckerSnapshot) -> bool:
    state = snapshot.input
    return not state.is_confirmed_valid and bool(state.raw_value) and not state.is_validating


def project(snapshot: CheckerSnapshot) -> ViewState:
    data = snapshot.data
    identity = data.identity
    calendar = data.calendar
    on_birth_date = holidays_on_birth_date(identity, calendar)
    return ViewState(
        raw_value=snapshot.input.raw_value,
        validation_message=snapshot.input.validation_message,
        error_message=snapshot.search.error_message,
        is_searching=snapshot.search.is_searching,
        has_results=snapshot.search.has_results,
        has_error=snapshot.search.has_error,
        input_class=input_class(snapshot),
        validation_message_class=validation_message_class(snapshot),
        search_button_class="search-button",
        is_search_disabled=is_search_disabled(snapshot),
        show_valid_icon=show_valid_icon(snapshot),
        show_invalid_icon=show_invalid_icon(snapshot),
        formatted_id_number=data.formatted_id_number or identity.formatted_id_number or "",
        formatted_date_of_birth=formatted_date_of_birth(identity),
        gender_badge_class=gender_badge_class(identity),
        citizenship_badge_class=citizenship_badge_class(identity),
        citizenship_text=citizenship_text(identity),
        search_count=data.search_count,
        holiday_count=holiday_count(calendar),
        holiday_dates=holiday_dates(calendar),
        holidays_on_birth_date=on_birth_date,
        has_holidays_on_birth_date=bool(on_birth_date),
    )


__all__ = [
    "ViewState",
    "citizenship_badge_class",
    "citizenship_text",
    "format_long_date",
    "format_short_date",
    "formatted_date_of_birth",
    "gender_badge_class",
    "has_holidays_on_birth_date",
    "holiday_count",
    "holiday_dates",
    "holidays_on_birth_date",
    "input_class",
    "is_search_disabled",
    "project",
    "show_invalid_icon",
    "show_valid_icon",
    "validation_message_class",
]
