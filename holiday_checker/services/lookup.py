"""Client for the remote ID validation and holiday lookup service."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, TypeVar

import httpx
from pydantic import ValidationError

from holiday_checker.config import LookupSettings
from holiday_checker.domain.models import CalendarResult, SearchResponse
from holiday_checker.logging import logger
from holiday_checker.services.exceptions import LookupServiceError
from holiday_checker.utils.retry import retry_async

T = TypeVar("T")


class LookupService(Protocol):
    async def validate_id_format(self, identifier: str) -> bool: ...

    async def validate_and_search(self, identifier: str) -> SearchResponse: ...

    async def get_holidays_for_year(self, year: int) -> CalendarResult: ...


class HttpLookupService:
    """``LookupService`` backed by the JSON HTTP API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: LookupSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or LookupSettings()

    async def validate_id_format(self, identifier: str) -> bool:
        data = await self._request("POST", "validate-format", json={"idNumber": identifier})
        if isinstance(data, bool):
            return data
        if isinstance(data, dict) and isinstance(data.get("isValid"), bool):
            return data["isValid"]
        raise LookupServiceError("Malformed validate-format response.")

    async def validate_and_search(self, identifier: str) -> SearchResponse:
        data = await self._request("POST", "validate-and-search", json={"idNumber": identifier})
        try:
            return SearchResponse.model_validate(data)
        except ValidationError as exc:
            raise LookupServiceError(f"Malformed search response: {exc}") from exc

    async def get_holidays_for_year(self, year: int) -> CalendarResult:
        data = await self._request("GET", f"holidays/{int(year)}")
        try:
            return CalendarResult.model_validate(data)
        except ValidationError as exc:
            raise LookupServiceError(f"Malformed holiday response: {exc}") from exc

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        base_url = self._settings.base_url
        if not base_url:
            raise LookupServiceError("Lookup service URL is not configured.")

        url = f"{str(base_url).rstrip('/')}/{path}"
        headers = self._headers()

        async def _send() -> httpx.Response:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                timeout=self._settings.request_timeout_seconds,
                **kwargs,
            )
            response.raise_for_status()
            return response

        try:
            response = await self._retry_http(f"lookup_{path.split('/')[0]}", _send)
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            raise LookupServiceError(f"Lookup request failed ({status_code}): {detail}") from exc
        except httpx.RequestError as exc:
            raise LookupServiceError(f"Lookup request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise LookupServiceError("Lookup service returned invalid JSON.") from exc

    async def _retry_http(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        # Status errors are final; only transport errors are retried.
        return await retry_async(
            operation,
            max_attempts=self._settings.max_attempts,
            base_delay=self._settings.retry_base_delay,
            logger=logger,
            operation_name=name,
            retry_on=(httpx.TransportError,),
        )

    def _headers(self) -> dict[str, str]:
        api_key = self._settings.api_key
        if not api_key:
            return {}
        return {"Authorization": f"Bearer {api_key.get_secret_value()}"}


__all__ = ["HttpLookupService", "LookupService"]
