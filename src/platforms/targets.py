from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal

from src.create.errors import Failure
from src.create.ports import NativePlatforms, StepReporter
from src.create.step_runner import run_step
from src.project_config.host import HostOS
from src.project_config.types import ProjectConfig

logger = logging.getLogger(__name__)

PlatformName = Literal["ios", "android"]

PlatformAction = Callable[[ProjectConfig], Awaitable[None]]


@dataclass(frozen=True)
class PlatformTarget:
    name: PlatformName
    add: PlatformAction
    sync: PlatformAction
    edit: PlatformAction

    def eligible(self, host_os: HostOS) -> bool:
        # iOS projects can only be created on a mac.
        if self.name == "ios":
            return host_os == "mac"
        return True


def platform_targets(native: NativePlatforms) -> tuple[PlatformTarget, PlatformTarget]:
    """Return (ios, android); the order is the bootstrap order."""
    ios = PlatformTarget(
        name="ios",
        add=native.add_ios,
        sync=lambda c: native.sync(c, c.ios.name),
        edit=native.edit_project_settings_ios,
    )
    android = PlatformTarget(
        name="android",
        add=native.add_android,
        sync=lambda c: native.sync(c, c.android.name),
        edit=native.edit_project_settings_android,
    )
    return ios, android


def eligible_targets(
    targets: tuple[PlatformTarget, ...], host_os: HostOS
) -> list[PlatformTarget]:
    return [t for t in targets if t.eligible(host_os)]


async def bootstrap_platforms(
    config: ProjectConfig,
    targets: tuple[PlatformTarget, ...],
    reporter: StepReporter,
) -> Failure | None:
    """Add and sync every eligible platform, then edit their project settings.

    Each platform is fully added and synced before the next one starts. Edits
    run in a second pass because they need the native skeletons on disk.
    """
    chosen = eligible_targets(targets, config.host_os)
    logger.debug(
        "Bootstrapping platforms %s on host %s", [t.name for t in chosen], config.host_os
    )

    for target in chosen:
        for verb, action in (("add", target.add), ("sync", target.sync)):
            res = await run_step(reporter, f"{verb} {target.name}", lambda a=action: a(config))
            if isinstance(res, Failure):
                return res

    for target in chosen:
        res = await run_step(
            reporter,
            f"update {target.name} project settings",
            lambda a=target.edit: a(config),
        )
        if isinstance(res, Failure):
            return res
    return None
