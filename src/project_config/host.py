from __future__ import annotations

import logging
import platform
from typing import Literal

from src.project_config.settings import host_os_override

HostOS = Literal["mac", "linux", "windows", "unknown"]

logger = logging.getLogger(__name__)

_SYSTEM_TO_HOST_OS: dict[str, HostOS] = {
    "darwin": "mac",
    "linux": "linux",
    "windows": "windows",
}


def parse_host_os(raw: str | None) -> HostOS | None:
    v = str(raw or "").strip().lower()
    if v in ("mac", "macos", "darwin", "osx"):
        return "mac"
    if v in ("linux", "windows", "unknown"):
        return v  # type: ignore[return-value]
    if v in ("win", "win32"):
        return "windows"
    return None


def detect_host_os(system: str | None = None) -> HostOS:
    """Return the host OS, honoring CAPSTAN_HOST_OS when it is set and valid."""
    override = host_os_override()
    if override:
        parsed = parse_host_os(override)
        if parsed is not None:
            return parsed
        logger.warning("Ignoring unknown CAPSTAN_HOST_OS=%r", override)

    name = (system if system is not None else platform.system()).strip().lower()
    return _SYSTEM_TO_HOST_OS.get(name, "unknown")
