"""Command-line entrypoint: look up ID numbers read from stdin."""

from __future__ import annotations

import asyncio
import sys
from typing import TextIO

import httpx

from holiday_checker.checker import IdHolidayChecker
from holiday_checker.config import get_settings
from holiday_checker.logging import configure_logging, logger
from holiday_checker.services.lookup import HttpLookupService
from holiday_checker.services.notifications import LoggingNotificationSink


async def run(checker: IdHolidayChecker, lines: TextIO, out: TextIO) -> int:
    """Search every non-empty line and print the projected view as JSON."""

    processed = 0
    for line in lines:
        identifier = line.strip()
        if not identifier:
            continue
        await checker.search_with_identifier(identifier)
        out.write(checker.view().model_dump_json() + "\n")
        out.flush()
        checker.reset()
        processed += 1
    return processed


async def main() -> None:
    configure_logging()
    settings = get_settings()

    async with httpx.AsyncClient() as client:
        lookup = HttpLookupService(client, settings=settings.lookup)
        checker = IdHolidayChecker(lookup, notify=LoggingNotificationSink(), settings=settings)
        logger.info("checker_starting", environment=settings.environment)
        try:
            processed = await run(checker, sys.stdin, sys.stdout)
        finally:
            checker.close()
    logger.info("checker_finished", processed=processed)


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
