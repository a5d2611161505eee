"""Pydantic models for payloads exchanged with the lookup service."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class IdentityRecord(_WireModel):
    """Details decoded from an ID number by the remote service."""

    birth_year: int | None = Field(default=None, validation_alias=AliasChoices("birth_year", "birthYear"))
    date_of_birth: str | None = Field(
        default=None, validation_alias=AliasChoices("date_of_birth", "dateOfBirth")
    )
    formatted_date_of_birth: str | None = Field(
        default=None,
        validation_alias=AliasChoices("formatted_date_of_birth", "formattedDateOfBirth"),
    )
    gender: str | None = None
    is_citizen: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_citizen", "isCitizen", "isSACitizen"),
    )
    formatted_id_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("formatted_id_number", "formattedIdNumber"),
    )
    age: int | None = None


class CalendarEvent(_WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    date: str = Field(validation_alias=AliasChoices("date", "holidayDate"))
    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "holidayName"))
    description: str | None = None
    type: str | None = Field(default=None, validation_alias=AliasChoices("type", "holidayType"))


class CalendarResult(_WireModel):
    success: bool = False
    events: list[CalendarEvent] = Field(
        default_factory=list, validation_alias=AliasChoices("events", "holidays")
    )
    error_message: str | None = Field(
        default=None, validation_alias=AliasChoices("error_message", "errorMessage")
    )


class SearchResponse(_WireModel):
    """Combined validate-and-search payload."""

    is_valid: bool = Field(validation_alias=AliasChoices("is_valid", "isValid"))
    error_message: str | None = Field(
        default=None, validation_alias=AliasChoices("error_message", "errorMessage")
    )
    identity: IdentityRecord | None = Field(
        default=None,
        validation_alias=AliasChoices("identity", "identityRecord", "idDetails"),
    )
    calendar: CalendarResult | None = Field(
        default=None,
        validation_alias=AliasChoices("calendar", "calendarResult", "holidayResponse"),
    )
    search_count: int = Field(default=0, validation_alias=AliasChoices("search_count", "searchCount"))
    formatted_id_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("formatted_id_number", "formattedIdNumber"),
    )


Severity = Literal["success", "error", "warning", "info"]


class Notification(BaseModel):
    """User-visible toast delivered to the notification sink."""

    title: str
    message: str
    severity: Severity = "info"
    mode: Literal["dismissible", "pester", "sticky"] = "pester"


class ResultsSnapshot(BaseModel):
    """Synchronous view of the most recent search for external callers."""

    identity: IdentityRecord | None = None
    calendar: CalendarResult | None = None
    search_count: int = 0
    is_valid: bool = False
    has_results: bool = False


__all__ = [
    "CalendarEvent",
    "CalendarResult",
    "IdentityRecord",
    "Notification",
    "ResultsSnapshot",
    "SearchResponse",
    "Severity",
]
