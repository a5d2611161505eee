"""Shared fakes for checker tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from holiday_checker.checker import IdHolidayChecker
from holiday_checker.config import CheckerSettings
from holiday_checker.domain.models import CalendarResult, Notification, SearchResponse

DEBOUNCE_DELAY = 0.02


class FakeLookupService:
    """In-memory lookup service recording every call.

    Each response slot holds either a value or an exception instance to raise.
    Setting a gate makes the matching call wait until the gate is opened.
    """

    def __init__(self) -> None:
        self.format_calls: list[str] = []
        self.search_calls: list[str] = []
        self.holiday_calls: list[int] = []
        self.format_result: Any = True
        self.search_result: Any = SearchResponse.model_validate(
            {
                "isValid": True,
                "idDetails": {
                    "birthYear": 1980,
                    "dateOfBirth": "1980-01-01",
                    "gender": "Male",
                    "isSACitizen": True,
                    "formattedDateOfBirth": "1 January 1980",
                },
                "holidayResponse": {"success": True, "holidays": []},
                "searchCount": 3,
                "formattedIdNumber": "800101 4800 08 6",
            }
        )
        self.holiday_result: Any = CalendarResult.model_validate(
            {
                "success": True,
                "holidays": [
                    {"holidayDate": "1980-01-01", "name": "New Year's Day"},
                    {"holidayDate": "1980-03-21", "name": "Human Rights Day"},
                ],
            }
        )
        self.format_gate: asyncio.Event | None = None
        self.search_gate: asyncio.Event | None = None
        self.holiday_gate: asyncio.Event | None = None

    async def validate_id_format(self, identifier: str) -> bool:
        self.format_calls.append(identifier)
        return await self._respond(self.format_gate, self.format_result)

    async def validate_and_search(self, identifier: str) -> SearchResponse:
        self.search_calls.append(identifier)
        return await self._respond(self.search_gate, self.search_result)

    async def get_holidays_for_year(self, year: int) -> CalendarResult:
        self.holiday_calls.append(year)
        return await self._respond(self.holiday_gate, self.holiday_result)

    @staticmethod
    async def _respond(gate: asyncio.Event | None, result: Any) -> Any:
        if gate is not None:
            await gate.wait()
        if isinstance(result, BaseException):
            raise result
        return result


class NotificationRecorder:
    def __init__(self) -> None:
        self.items: list[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self.items.append(notification)

    @property
    def titles(self) -> list[str]:
        return [item.title for item in self.items]


@pytest.fixture
def settings() -> CheckerSettings:
    return CheckerSettings(debounce_delay_seconds=DEBOUNCE_DELAY)


@pytest.fixture
def lookup() -> FakeLookupService:
    return FakeLookupService()


@pytest.fixture
def notifications() -> NotificationRecorder:
    return NotificationRecorder()


@pytest.fixture
def checker(lookup, notifications, settings):
    instance = IdHolidayChecker(lookup, notify=notifications, settings=settings)
    yield instance
    instance.close()
