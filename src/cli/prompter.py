from __future__ import annotations

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import typer


@contextmanager
def _interruptible() -> Iterator[None]:
    # asyncio.run only cancels the main task on the first SIGINT, which leaves a
    # blocking input() waiting; the default handler raises KeyboardInterrupt.
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.default_int_handler)


class TyperPrompter:
    """Line prompt on the terminal; the default is shown but applied by the resolver.

    Prompts run inline on the event loop thread. Nothing else is in flight
    while the user is answering.
    """

    async def ask(self, field: str, message: str, default: str | None = None) -> str:
        _ = field
        try:
            with _interruptible():
                answer = typer.prompt(message, default=default or "", show_default=bool(default))
        except typer.Abort as exc:
            # Ctrl-C or EOF ends the run; it is not a pipeline failure.
            raise KeyboardInterrupt from exc
        return str(answer or "")
