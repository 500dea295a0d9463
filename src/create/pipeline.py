from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from src.create.context import CreateContext
from src.create.errors import Failure, failure_from_exception

logger = logging.getLogger(__name__)

PipelineState = Literal[
    "start",
    "validating",
    "resolving",
    "provisioning",
    "materializing",
    "templating",
    "bootstrapping",
    "reporting",
    "done",
    "failed",
]

StepAction = Callable[[CreateContext], Awaitable[CreateContext | Failure]]


@dataclass(frozen=True)
class PipelineStep:
    state: PipelineState
    description: str
    action: StepAction


@dataclass
class PipelineOutcome:
    state: Literal["done", "failed"]
    context: CreateContext
    failure: Failure | None = None
    # Every state visited, in order, starting with "start".
    history: list[PipelineState] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state == "done"

    @property
    def failed_in(self) -> PipelineState | None:
        if self.state != "failed" or len(self.history) < 2:
            return None
        return self.history[-2]


async def run_pipeline(ctx: CreateContext, steps: Sequence[PipelineStep]) -> PipelineOutcome:
    """Run steps in order, stopping at the first failure.

    `failed` is absorbing: once a step fails, no later step is started.
    """
    history: list[PipelineState] = ["start"]
    for step in steps:
        history.append(step.state)
        logger.debug("Entering %s: %s", step.state, step.description)
        try:
            result = await step.action(ctx)
        except Exception as exc:
            logger.debug("Stage %s raised", step.state, exc_info=True)
            result = failure_from_exception(exc)

        if isinstance(result, Failure):
            history.append("failed")
            logger.info("Create failed in %s: %s", step.state, result.message)
            return PipelineOutcome(state="failed", context=ctx, failure=result, history=history)
        ctx = result

    history.append("done")
    return PipelineOutcome(state="done", context=ctx, history=history)
