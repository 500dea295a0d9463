from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.project_config.types import ProjectConfig

logger = logging.getLogger(__name__)


class ConfigStoreError(RuntimeError):
    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


class PersistedConfig(BaseModel):
    """On-disk shape of capstan.config.json.

    Unknown keys are kept so a hand-edited file round-trips unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    app_id: str = Field(default="", alias="appId")
    app_name: str = Field(default="", alias="appName")
    bundled_web_runtime: bool = Field(default=False, alias="bundledWebRuntime")
    web_dir: str = Field(default="www", alias="webDir")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


def _read_persisted(path: Path) -> PersistedConfig:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigStoreError(f"Could not read {path}: {exc}", path=str(path)) from exc
    try:
        return PersistedConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigStoreError(
            f"Invalid config file {path}: {exc.error_count()} validation error(s)",
            path=str(path),
        ) from exc


def _write_persisted(path: Path, persisted: PersistedConfig) -> None:
    try:
        path.write_text(persisted.to_json(), encoding="utf-8")
    except OSError as exc:
        raise ConfigStoreError(f"Could not write {path}: {exc}", path=str(path)) from exc


def get_or_create_config(config: ProjectConfig) -> PersistedConfig:
    """Load the workspace config file, creating it when missing.

    Identity fields (app id, app name, bundled runtime flag) always end up equal
    to the in-memory config; an existing file is rewritten when they differ.
    The web dir name flows the other way: an existing file wins.
    """
    path = config.config_path
    if not path.exists():
        persisted = PersistedConfig.model_validate(config.to_dict())
        _write_persisted(path, persisted)
        logger.debug("Wrote new config file %s", path)
        return persisted

    persisted = _read_persisted(path)
    if persisted.web_dir:
        config.web.name = persisted.web_dir

    merged = persisted.model_copy(
        update={
            "app_id": config.app_id,
            "app_name": config.app_name,
            "bundled_web_runtime": bool(config.bundled_web_runtime),
        }
    )
    if merged != persisted:
        _write_persisted(path, merged)
        logger.debug("Updated identity fields in existing config file %s", path)
    return merged


class JsonConfigStore:
    async def get_or_create(self, config: ProjectConfig) -> PersistedConfig:
        return await asyncio.to_thread(get_or_create_config, config)
