from __future__ import annotations

import os
from pathlib import Path

_PACKAGED_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates" / "app_template"

_DEFAULT_INSTALL_PACKAGES = ["@capstan/cli", "@capstan/core"]

_DEFAULT_DOCS_URL = "https://capstan.dev/docs/basics/workflow"


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


def template_dir() -> str:
    return (os.environ.get("CAPSTAN_TEMPLATE_DIR") or "").strip() or str(
        _PACKAGED_TEMPLATE_DIR
    )


def npm_client() -> str:
    return (os.environ.get("CAPSTAN_NPM_CLIENT") or "npm").strip() or "npm"


def install_packages() -> list[str]:
    raw = (os.environ.get("CAPSTAN_INSTALL_PACKAGES") or "").strip()
    if not raw:
        return list(_DEFAULT_INSTALL_PACKAGES)
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    return parts or list(_DEFAULT_INSTALL_PACKAGES)


def skip_install() -> bool:
    return _env_bool("CAPSTAN_SKIP_INSTALL", default=False)


def host_os_override() -> str:
    # Empty means: detect from the running interpreter.
    return (os.environ.get("CAPSTAN_HOST_OS") or "").strip().lower()


def web_dir_name() -> str:
    return (os.environ.get("CAPSTAN_WEB_DIR") or "www").strip().strip("/") or "www"


def docs_url() -> str:
    return (os.environ.get("CAPSTAN_DOCS_URL") or _DEFAULT_DOCS_URL).strip().rstrip(
        "/"
    ) or _DEFAULT_DOCS_URL


def log_level() -> str:
    v = (os.environ.get("CAPSTAN_LOG_LEVEL") or "WARNING").strip().upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL") else "WARNING"
