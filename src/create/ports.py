"""Collaborator contracts the create pipeline depends on."""

from __future__ import annotations

from typing import Any, Protocol

from src.project_config.types import ProjectConfig


class FileSystem(Protocol):
    async def exists(self, path: str) -> bool: ...

    async def mkdir(self, path: str) -> None: ...

    async def copy_tree(self, src: str, dest: str) -> None: ...


class CommandRunner(Protocol):
    async def run(self, args: list[str], *, cwd: str | None = None) -> Any: ...


class ConfigStore(Protocol):
    async def get_or_create(self, config: ProjectConfig) -> Any: ...


class NativePlatforms(Protocol):
    """Native sub-project generators.

    `add_*` creates the native project skeleton, `sync` copies web assets and
    config into a native project, `edit_project_settings_*` writes app identity
    into an existing native project.
    """

    async def add_ios(self, config: ProjectConfig) -> None: ...

    async def add_android(self, config: ProjectConfig) -> None: ...

    async def sync(self, config: ProjectConfig, platform_name: str) -> None: ...

    async def edit_project_settings_ios(self, config: ProjectConfig) -> None: ...

    async def edit_project_settings_android(self, config: ProjectConfig) -> None: ...


class Prompter(Protocol):
    async def ask(self, field: str, message: str, default: str | None = None) -> str: ...


class StepReporter(Protocol):
    def info(self, message: str) -> None: ...

    def start(self, description: str) -> None: ...

    def succeed(self, description: str, elapsed_s: float) -> None: ...

    def fail(self, description: str, message: str) -> None: ...

    def skip(self, description: str, reason: str) -> None: ...

    def summary(self, lines: list[str]) -> None: ...
