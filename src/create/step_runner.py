from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from src.create.errors import Failure, failure_from_exception
from src.create.ports import StepReporter

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_step(
    reporter: StepReporter,
    description: str,
    action: Callable[[], Awaitable[T]],
) -> T | Failure:
    """Run one reported unit of work.

    A Failure returned by the action is passed back unchanged. An exception is
    turned into a Failure (CreateError keeps its own). Nothing is swallowed:
    the caller always sees the failure.
    """
    reporter.start(description)
    started = time.monotonic()
    try:
        result = await action()
    except Exception as exc:
        logger.debug("Step %r raised", description, exc_info=True)
        failure = failure_from_exception(exc)
        reporter.fail(description, failure.message)
        return failure

    if isinstance(result, Failure):
        reporter.fail(description, result.message)
        return result

    elapsed = time.monotonic() - started
    logger.debug("Step %r finished in %.2fs", description, elapsed)
    reporter.succeed(description, elapsed)
    return result
