from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class ConsoleReporter:
    """Step progress on a rich console."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def info(self, message: str) -> None:
        self._console.print(f"\n[bold]{escape(message)}[/bold]\n")

    def start(self, description: str) -> None:
        self._console.print(f"[cyan]…[/cyan] {escape(description)}")

    def succeed(self, description: str, elapsed_s: float) -> None:
        self._console.print(
            f"[green]✔[/green] {escape(description)} [dim]in {_format_elapsed(elapsed_s)}[/dim]"
        )

    def fail(self, description: str, message: str) -> None:
        self._console.print(f"[red]✖[/red] {escape(description)}: {escape(message)}")

    def skip(self, description: str, reason: str) -> None:
        self._console.print(f"[yellow]-[/yellow] {escape(description)} [dim]skipped ({escape(reason)})[/dim]")

    def summary(self, lines: list[str]) -> None:
        if not lines:
            return
        self._console.print(f"[green]✔[/green] {escape(lines[0])}")
        for line in lines[1:]:
            self._console.print(escape(line))


def _format_elapsed(elapsed_s: float) -> str:
    if elapsed_s < 1:
        return f"{int(elapsed_s * 1000)}ms"
    if elapsed_s < 60:
        return f"{elapsed_s:.2f}s"
    minutes, seconds = divmod(int(elapsed_s), 60)
    return f"{minutes}m {seconds}s"
