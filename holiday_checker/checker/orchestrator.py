"""Validation and search lifecycle for the ID holiday checker."""

from __future__ import annotations

import asyncio
import dataclasses
from contextlib import asynccontextmanager
from typing import AsyncIterator

from holiday_checker.checker.debounce import Debouncer
from holiday_checker.checker.state import (
    CheckerPhase,
    CheckerSnapshot,
    InputState,
    SearchData,
    SearchFailed,
    SearchIdle,
    SearchInFlight,
    SearchResults,
    SearchState,
)
from holiday_checker.checker.view import ViewState, is_search_disabled, project
from holiday_checker.config import CheckerSettings, get_settings
from holiday_checker.domain.models import CalendarResult, IdentityRecord, ResultsSnapshot, Severity
from holiday_checker.logging import logger
from holiday_checker.services.lookup import LookupService
from holiday_checker.services.notifications import NotificationSink, dispatch

MSG_TOO_SHORT = "ID number must be {length} digits long"
MSG_VALID = "Valid SA ID Number ✓"
MSG_INVALID_FORMAT = "Invalid SA ID Number format"
MSG_VALIDATION_ERROR = "Validation error occurred"
MSG_INVALID_ID = "Invalid SA ID Number"
MSG_UNEXPECTED = "An unexpected error occurred. Please try again."
MSG_COMPONENT_ERROR = "A component error occurred. Please refresh the page."


class IdHolidayChecker:
    """Coordinates debounced validation, search and holiday enrichment.

    All methods must be called from the event loop that owns the instance.
    Every async completion captures a generation number; ``reset`` and
    ``close`` bump it so late completions are discarded instead of
    repopulating cleared state. Holiday lookups are additionally tied to the
    search that started them and are dropped once a newer search begins.
    """

    def __init__(
        self,
        lookup: LookupService,
        *,
        notify: NotificationSink | None = None,
        settings: CheckerSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._lookup = lookup
        self._notify = notify
        self._debouncer = Debouncer(self.settings.debounce_delay_seconds, name="id_validation")
        self._input = InputState()
        self._search = SearchState()
        self._generation = 0
        self._input_revision = 0
        self._search_id = 0
        self._closed = False
        self._enrichments: set[asyncio.Task[None]] = set()
        logger.info("checker_initialized", environment=self.settings.environment)

    # -- read access -------------------------------------------------------

    @property
    def input_state(self) -> InputState:
        return self._input

    @property
    def search_state(self) -> SearchState:
        return self._search

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def validation_pending(self) -> bool:
        return self._debouncer.pending

    @property
    def phase(self) -> CheckerPhase:
        if self._search.is_searching:
            return CheckerPhase.SEARCHING
        if self._input.is_validating:
            return CheckerPhase.VALIDATING
        if self._search.has_error:
            return CheckerPhase.SEARCH_ERROR
        if self._search.has_results:
            return CheckerPhase.RESULTS
        if self._input.is_confirmed_valid:
            return CheckerPhase.VALID
        if self._input.raw_value:
            return CheckerPhase.INVALID
        return CheckerPhase.IDLE

    def snapshot(self) -> CheckerSnapshot:
        return CheckerSnapshot(
            input=dataclasses.replace(self._input),
            search=SearchState(self._search.outcome),
        )

    def view(self) -> ViewState:
        return project(self.snapshot())

    def get_current_results(self) -> ResultsSnapshot:
        data = self._search.data or SearchData()
        return ResultsSnapshot(
            identity=data.identity,
            calendar=data.calendar,
            search_count=data.search_count,
            is_valid=self._input.is_confirmed_valid,
            has_results=self._search.has_results,
        )

    # -- input handling ----------------------------------------------------

    def on_input(self, text: str) -> None:
        if self._closed:
            logger.warning("checker_input_after_close")
            return

        text = text or ""
        self._input_revision += 1
        self._input.raw_value = text
        self._input.validation_message = ""
        if self._search.has_error:
            self._search.outcome = SearchIdle()
        self._debouncer.cancel()

        if len(text) >= self.settings.min_validation_length:
            self._input.is_validating = True
            self._debouncer.schedule(self._debounced_validation)
            return

        self._input.is_confirmed_valid = False
        self._input.is_validating = False
        if 0 < len(text) < self.settings.id_length:
            self._input.validation_message = MSG_TOO_SHORT.format(length=self.settings.id_length)

    async def handle_key_down(self, key: str) -> None:
        if key == "Enter" and not is_search_disabled(self.snapshot()):
            async with self._error_boundary("key_down"):
                await self.handle_search()

    async def _debounced_validation(self) -> None:
        async with self._error_boundary("debounced_validation"):
            await self.perform_realtime_validation()

    # -- orchestration -----------------------------------------------------

    async def perform_realtime_validation(self) -> None:
        generation = self._generation
        revision = self._input_revision
        identifier = self._input.raw_value

        try:
            is_valid = bool(await self._lookup.validate_id_format(identifier))
        except Exception as exc:
            if self._is_stale(generation, revision):
                logger.info("stale_validation_discarded", error=str(exc))
                return
            logger.warning(
                "validation_failed",
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )
            self._input.is_validating = False
            self._input.is_confirmed_valid = False
            self._input.validation_message = MSG_VALIDATION_ERROR
            return

        if self._is_stale(generation, revision):
            logger.info("stale_validation_discarded", is_valid=is_valid)
            return

        self._input.is_confirmed_valid = is_valid
        self._input.is_validating = False
        self._input.validation_message = MSG_VALID if is_valid else MSG_INVALID_FORMAT
        logger.info("validation_completed", is_valid=is_valid)

    async def handle_search(self) -> None:
        if (
            not self._input.is_confirmed_valid
            or self._input.is_validating
            or self._search.is_searching
        ):
            return

        generation = self._generation
        self._search_id += 1
        identifier = self._input.raw_value
        self._search.outcome = SearchInFlight()
        logger.info("search_started")

        try:
            result = await self._lookup.validate_and_search(identifier)
            if self._is_stale(generation):
                logger.info("stale_search_discarded")
                return
            if result.is_valid:
                data = SearchData(
                    identity=result.identity or IdentityRecord(),
                    calendar=result.calendar or CalendarResult(),
                    search_count=result.search_count or 0,
                    formatted_id_number=result.formatted_id_number or "",
                )
                self._search.outcome = SearchResults(data)
                logger.info(
                    "search_completed",
                    search_count=data.search_count,
                    birth_year=data.identity.birth_year,
                )
                self._start_enrichment()
            else:
                self._search.outcome = SearchFailed(result.error_message or MSG_INVALID_ID)
                logger.info("search_rejected", error=self._search.error_message)
        except Exception as exc:
            if self._is_stale(generation):
                logger.info("stale_search_discarded", error=str(exc))
                return
            logger.error(
                "search_failed",
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )
            self._search.outcome = SearchFailed(MSG_UNEXPECTED)
            self._emit("Error", "Failed to process your request", "error")
        finally:
            if not self._is_stale(generation) and self._search.is_searching:
                self._search.outcome = SearchIdle()

    async def retry_holidays(self) -> None:
        """Fetch the calendar for the current birth year and swap it in."""

        data = self._search.data
        if data is None or not data.identity.birth_year:
            return

        generation = self._generation
        search_id = self._search_id
        year = data.identity.birth_year
        try:
            calendar = await self._lookup.get_holidays_for_year(year)
            current = self._search.data
            if self._holidays_superseded(generation, search_id, current):
                logger.info("stale_holidays_discarded", year=year)
                return
            # Everything is read before committing so a malformed calendar
            # leaves the primary results untouched.
            updated = dataclasses.replace(current, calendar=calendar)
            count = len(calendar.events)
            success = bool(calendar.success)
            self._search.outcome = SearchResults(updated)
        except Exception as exc:
            if self._holidays_superseded(generation, search_id, self._search.data):
                return
            logger.warning(
                "holiday_retrieval_failed",
                year=year,
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )
            self._emit("Error", "Failed to retrieve holidays", "error")
            return

        logger.info("holidays_retrieved", year=year, count=count, success=success)
        if success:
            self._emit("Success!", "Holiday information retrieved", "success")

    # -- public API --------------------------------------------------------

    async def search_with_identifier(self, identifier: str) -> None:
        if self._closed:
            logger.warning("checker_search_after_close")
            return

        async with self._error_boundary("search_with_identifier"):
            self._debouncer.cancel()
            self._input_revision += 1
            self._input.raw_value = identifier or ""
            await self.perform_realtime_validation()
            if self._input.is_confirmed_valid:
                await self.handle_search()
                await self.wait_for_enrichment()

    def reset(self) -> None:
        self._generation += 1
        self._input_revision += 1
        self._debouncer.cancel()
        self._input = InputState()
        self._search = SearchState()
        self._enrichments.clear()
        logger.info("checker_reset")

    def close(self) -> None:
        """Tear down: cancel the pending timer and ignore late completions."""

        if self._closed:
            return
        self._generation += 1
        self._closed = True
        self._debouncer.close()
        logger.info("checker_closed")

    async def settle(self) -> None:
        """Wait until fired validations and background enrichment finish."""

        await self._debouncer.join()
        await self.wait_for_enrichment()

    async def wait_for_enrichment(self) -> None:
        running = {task for task in self._enrichments if not task.done()}
        if running:
            await asyncio.wait(running)

    def handle_component_error(self, exc: BaseException) -> None:
        """Top-level boundary for exceptions nothing else handled."""

        logger.error(
            "component_error",
            exception_type=exc.__class__.__name__,
            error=str(exc),
            exc_info=exc,
        )
        if self._closed:
            return
        self._search.outcome = SearchFailed(MSG_COMPONENT_ERROR)
        self._input.is_validating = False
        self._emit("Component Error", "An unexpected error occurred. Please refresh the page.", "error")

    # -- internals ---------------------------------------------------------

    def _start_enrichment(self) -> None:
        data = self._search.data
        if data is None or not data.identity.birth_year:
            return
        task = asyncio.ensure_future(self._run_enrichment())
        self._enrichments.add(task)
        task.add_done_callback(self._enrichments.discard)

    async def _run_enrichment(self) -> None:
        async with self._error_boundary("holiday_enrichment"):
            await self.retry_holidays()

    @asynccontextmanager
    async def _error_boundary(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except Exception as exc:
            logger.debug("error_boundary_triggered", operation=operation)
            self.handle_component_error(exc)

    def _holidays_superseded(
        self, generation: int, search_id: int, current: SearchData | None
    ) -> bool:
        return self._is_stale(generation) or search_id != self._search_id or current is None

    def _is_stale(self, generation: int, revision: int | None = None) -> bool:
        if self._closed or generation != self._generation:
            return True
        return revision is not None and revision != self._input_revision

    def _emit(self, title: str, message: str, severity: Severity) -> None:
        dispatch(self._notify, title, message, severity)


__all__ = ["IdHolidayChecker"]
