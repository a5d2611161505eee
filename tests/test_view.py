"""Pure view projections."""

from __future__ import annotations

import pytest

from holiday_checker.checker import view
from holiday_checker.checker.state import (
    CheckerSnapshot,
    InputState,
    SearchData,
    SearchFailed,
    SearchInFlight,
    SearchResults,
    SearchState,
)
from holiday_checker.domain.models import CalendarResult, IdentityRecord


def _snapshot(*, raw="", valid=False, validating=False, outcome=None) -> CheckerSnapshot:
    search = SearchState(outcome) if outcome is not None else SearchState()
    return CheckerSnapshot(
        input=InputState(raw_value=raw, is_confirmed_valid=valid, is_validating=validating),
        search=search,
    )


def _calendar(*dates: str) -> CalendarResult:
    return CalendarResult.model_validate(
        {"success": True, "holidays": [{"holidayDate": value, "name": value} for value in dates]}
    )


def test_formatted_date_of_birth_long_form():
    identity = IdentityRecord(date_of_birth="1980-01-01")
    assert view.formatted_date_of_birth(identity) == "Tuesday, 01 January 1980"


def test_formatted_date_of_birth_falls_back_to_server_value():
    identity = IdentityRecord(date_of_birth="not-a-date", formatted_date_of_birth="1 Jan 1980")
    assert view.formatted_date_of_birth(identity) == "1 Jan 1980"

    assert view.formatted_date_of_birth(IdentityRecord(date_of_birth="19800101x")) == ""
    assert view.formatted_date_of_birth(IdentityRecord()) == ""


def test_format_short_date():
    assert view.format_short_date("1980-03-21") == "21 Mar"
    assert view.format_short_date("2024-12-25T00:00:00Z") == "25 Dec"
    assert view.format_short_date("garbage") == "garbage"
    assert view.format_short_date(None) == ""


@pytest.mark.parametrize(
    ("gender", "expected"),
    [
        ("Male", "gender-badge gender-male"),
        ("Female", "gender-badge gender-female"),
        ("Unknown", "gender-badge"),
        (None, "gender-badge"),
    ],
)
def test_gender_badge_class(gender, expected):
    assert view.gender_badge_class(IdentityRecord(gender=gender)) == expected


def test_citizenship_labels():
    citizen = IdentityRecord(is_citizen=True)
    resident = IdentityRecord(is_citizen=False)

    assert view.citizenship_badge_class(citizen) == "citizenship-badge citizenship-sa"
    assert view.citizenship_text(citizen) == "SA Citizen"
    assert view.citizenship_badge_class(resident) == "citizenship-badge citizenship-non-sa"
    assert view.citizenship_text(resident) == "Non-SA Citizen"


def test_holiday_count():
    assert view.holiday_count(None) == 0
    assert view.holiday_count(CalendarResult()) == 0
    assert view.holiday_count(_calendar("1980-01-01", "1980-12-25")) == 2


def test_holiday_dates_use_short_format():
    assert view.holiday_dates(None) == []
    assert view.holiday_dates(_calendar("1980-12-25", "TBC")) == ["25 Dec", "TBC"]


def test_holidays_on_birth_date_matches_month_and_day_in_birth_year():
    identity = IdentityRecord(birth_year=1980, date_of_birth="1980-12-25")
    calendar = _calendar("1980-01-01", "1980-12-25", "1981-12-25")

    matches = view.holidays_on_birth_date(identity, calendar)

    assert [event.date for event in matches] == ["1980-12-25"]
    assert view.has_holidays_on_birth_date(identity, calendar)


@pytest.mark.parametrize(
    "identity",
    [
        IdentityRecord(birth_year=1980, date_of_birth="31/12/1980"),
        IdentityRecord(birth_year=None, date_of_birth="1980-01-01"),
        IdentityRecord(birth_year=1980, date_of_birth=None),
    ],
)
def test_holidays_on_birth_date_tolerates_missing_or_malformed_data(identity):
    calendar = _calendar("1980-01-01", "1980-12-31")
    assert view.holidays_on_birth_date(identity, calendar) == []
    assert not view.has_holidays_on_birth_date(identity, calendar)


def test_input_and_icon_classes():
    empty = _snapshot()
    assert view.input_class(empty) == "input-field"
    assert not view.show_invalid_icon(empty)

    validating = _snapshot(raw="8001014800", validating=True)
    assert view.input_class(validating) == "input-field"
    assert not view.show_valid_icon(validating)
    assert not view.show_invalid_icon(validating)

    invalid = _snapshot(raw="123")
    assert view.input_class(invalid) == "input-field input-invalid"
    assert view.validation_message_class(invalid) == "validation-message validation-error"
    assert view.show_invalid_icon(invalid)

    valid = _snapshot(raw="8001014800086", valid=True)
    assert view.input_class(valid) == "input-field input-valid"
    assert view.validation_message_class(valid) == "validation-message validation-success"
    assert view.show_valid_icon(valid)


def test_search_disabled_combinations():
    assert view.is_search_disabled(_snapshot(raw="123"))
    assert view.is_search_disabled(_snapshot(raw="8001014800086", valid=True, validating=True))
    assert view.is_search_disabled(
        _snapshot(raw="8001014800086", valid=True, outcome=SearchInFlight())
    )
    assert not view.is_search_disabled(_snapshot(raw="8001014800086", valid=True))


def test_project_bundles_results():
    identity = IdentityRecord(
        birth_year=1980,
        date_of_birth="1980-01-01",
        gender="Female",
        is_citizen=True,
    )
    data = SearchData(
        identity=identity,
        calendar=_calendar("1980-01-01", "1980-04-04"),
        search_count=7,
        formatted_id_number="800101 4800 08 6",
    )
    snapshot = _snapshot(raw="8001014800086", valid=True, outcome=SearchResults(data))

    state = view.project(snapshot)

    assert state.has_results
    assert not state.has_error
    assert state.search_count == 7
    assert state.formatted_id_number == "800101 4800 08 6"
    assert state.formatted_date_of_birth == "Tuesday, 01 January 1980"
    assert state.gender_badge_class == "gender-badge gender-female"
    assert state.citizenship_text == "SA Citizen"
    assert state.holiday_count == 2
    assert state.holiday_dates == ["01 Jan", "04 Apr"]
    assert state.has_holidays_on_birth_date
    assert state.search_button_class == "search-button"


def test_project_error_state_has_empty_results():
    snapshot = _snapshot(raw="8001014800086", valid=True, outcome=SearchFailed("Invalid SA ID Number"))

    state = view.project(snapshot)

    assert state.has_error
    assert state.error_message == "Invalid SA ID Number"
    assert not state.has_results
    assert state.holiday_count == 0
    assert state.formatted_date_of_birth == ""
    assert state.gender_badge_class == "gender-badge"
