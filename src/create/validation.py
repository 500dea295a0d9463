from __future__ import annotations

import re
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from src.create.context import CreateInputs
from src.create.errors import Failure
from src.create.ports import FileSystem
from src.project_config.types import ProjectConfig

Check = Callable[[ProjectConfig], Awaitable[Failure | None]]

# Java package form, no dashes (ex: com.example.app).
_APP_ID_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z0-9_]+)+$")
_WHITESPACE_RE = re.compile(r"\s")


async def check_app_dir(config: ProjectConfig, app_dir: str, fs: FileSystem) -> Failure | None:
    _ = config
    if not app_dir:
        return Failure.validation("Must provide an app directory. For example: 'my-app'")
    if _WHITESPACE_RE.search(app_dir):
        return Failure.validation("Your app directory should not contain spaces")
    parent = str(Path(app_dir).parent)
    if not await fs.exists(parent):
        return Failure.validation(
            f"Parent directory {parent} does not exist. Create it first or choose another directory"
        )
    return None


async def check_app_id(config: ProjectConfig, app_id: str) -> Failure | None:
    _ = config
    if not app_id:
        return Failure.validation(
            "Invalid App ID. Must be in Java package form with no dashes (ex: com.example.app)"
        )
    if _APP_ID_RE.match(app_id.lower()):
        return None
    return Failure.validation(
        f'Invalid App ID "{app_id}". Must be in Java package form with no dashes (ex: com.example.app)'
    )


async def check_app_name(config: ProjectConfig, app_name: str) -> Failure | None:
    _ = config
    if not app_name.strip():
        return Failure.validation("Must provide an app name. For example: 'Spacebook'")
    return None


async def run_checks(config: ProjectConfig, checks: Sequence[Check]) -> Failure | None:
    """Run checks in order and return the first failure.

    Checks after a failing one are never called.
    """
    for check in checks:
        failure = await check(config)
        if failure is not None:
            return failure
    return None


def checks_for(inputs: CreateInputs, fs: FileSystem, *, only_supplied: bool) -> list[Check]:
    """Build the ordered check list (dir, id, name) for a set of inputs.

    With `only_supplied`, values the caller left blank (empty or whitespace
    only, the same rule the resolver uses) are skipped; they get checked again
    once they have been resolved.
    """
    checks: list[Check] = []
    if inputs.app_dir.strip() or not only_supplied:
        checks.append(lambda c: check_app_dir(c, inputs.app_dir, fs))
    if inputs.app_id.strip() or not only_supplied:
        checks.append(lambda c: check_app_id(c, inputs.app_id))
    if inputs.app_name.strip() or not only_supplied:
        checks.append(lambda c: check_app_name(c, inputs.app_name))
    return checks
