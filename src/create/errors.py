from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FailureKind = Literal["validation", "operational"]


@dataclass(frozen=True)
class Failure:
    """A terminal pipeline failure.

    `validation` failures come from malformed or conflicting caller input and are
    shown together with a usage hint. Everything else is `operational`.
    """

    kind: FailureKind
    message: str

    @classmethod
    def validation(cls, message: str) -> Failure:
        return cls(kind="validation", message=message)

    @classmethod
    def operational(cls, message: str) -> Failure:
        return cls(kind="operational", message=message)

    @property
    def is_validation(self) -> bool:
        return self.kind == "validation"


class CreateError(RuntimeError):
    """Raised by collaborators that want to fail with a specific Failure."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


def failure_from_exception(exc: BaseException) -> Failure:
    if isinstance(exc, CreateError):
        return exc.failure
    msg = str(exc).strip()
    if not msg:
        msg = type(exc).__name__
    return Failure.operational(msg)
