from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from src.project_config import settings
from src.project_config.host import detect_host_os, parse_host_os
from src.project_config.store import (
    ConfigStoreError,
    JsonConfigStore,
    PersistedConfig,
    get_or_create_config,
)
from src.project_config.types import CONFIG_FILE_NAME, ProjectConfig


def test_settings_defaults() -> None:
    assert settings.npm_client() == "npm"
    assert settings.install_packages() == ["@capstan/cli", "@capstan/core"]
    assert settings.skip_install() is False
    assert settings.web_dir_name() == "www"
    assert settings.log_level() == "WARNING"
    assert Path(settings.template_dir()).name == "app_template"
    assert (Path(settings.template_dir()) / "www" / "index.html").is_file()


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAPSTAN_NPM_CLIENT", " pnpm ")
    monkeypatch.setenv("CAPSTAN_INSTALL_PACKAGES", "a, b ,,c")
    monkeypatch.setenv("CAPSTAN_SKIP_INSTALL", "yes")
    monkeypatch.setenv("CAPSTAN_WEB_DIR", "/dist/")
    monkeypatch.setenv("CAPSTAN_LOG_LEVEL", "debug")
    monkeypatch.setenv("CAPSTAN_DOCS_URL", "https://docs.example/")
    assert settings.npm_client() == "pnpm"
    assert settings.install_packages() == ["a", "b", "c"]
    assert settings.skip_install() is True
    assert settings.web_dir_name() == "dist"
    assert settings.log_level() == "DEBUG"
    assert settings.docs_url() == "https://docs.example"


def test_settings_ignore_junk_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAPSTAN_SKIP_INSTALL", "maybe")
    monkeypatch.setenv("CAPSTAN_LOG_LEVEL", "loud")
    monkeypatch.setenv("CAPSTAN_INSTALL_PACKAGES", " , ")
    assert settings.skip_install() is False
    assert settings.log_level() == "WARNING"
    assert settings.install_packages() == ["@capstan/cli", "@capstan/core"]


def test_detect_host_os_maps_platform_names() -> None:
    assert detect_host_os("Darwin") == "mac"
    assert detect_host_os("Linux") == "linux"
    assert detect_host_os("Windows") == "windows"
    assert detect_host_os("Plan9") == "unknown"


def test_detect_host_os_honors_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAPSTAN_HOST_OS", "macOS")
    assert detect_host_os("Linux") == "mac"
    monkeypatch.setenv("CAPSTAN_HOST_OS", "beos")
    assert detect_host_os("Linux") == "linux"


def test_parse_host_os() -> None:
    assert parse_host_os("darwin") == "mac"
    assert parse_host_os("win32") == "windows"
    assert parse_host_os("") is None


def test_project_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAPSTAN_HOST_OS", "linux")
    monkeypatch.setenv("CAPSTAN_WEB_DIR", "public")
    cfg = ProjectConfig.from_env()
    assert cfg.host_os == "linux"
    assert cfg.web.name == "public"
    assert cfg.ios.name == "ios"
    assert cfg.android.name == "android"
    assert cfg.bundled_web_runtime is False
    assert cfg.app_name == "" and cfg.app_id == ""


def _identity_config(root: Path) -> ProjectConfig:
    return ProjectConfig(
        working_dir=str(root),
        app_name="My App",
        app_id="com.example.myapp",
        bundled_web_runtime=True,
    )


def test_get_or_create_writes_new_file(tmp_path: Path) -> None:
    cfg = _identity_config(tmp_path)
    persisted = get_or_create_config(cfg)

    on_disk = json.loads((tmp_path / CONFIG_FILE_NAME).read_text(encoding="utf-8"))
    assert on_disk == {
        "appId": "com.example.myapp",
        "appName": "My App",
        "bundledWebRuntime": True,
        "webDir": "www",
    }
    assert persisted.app_id == cfg.app_id
    assert persisted.app_name == cfg.app_name


def test_get_or_create_aligns_existing_file(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILE_NAME).write_text(
        json.dumps({"appId": "old.id", "appName": "Old", "webDir": "dist", "plugins": {"x": 1}}),
        encoding="utf-8",
    )
    cfg = _identity_config(tmp_path)
    persisted = get_or_create_config(cfg)

    on_disk = json.loads((tmp_path / CONFIG_FILE_NAME).read_text(encoding="utf-8"))
    assert on_disk["appId"] == "com.example.myapp"
    assert on_disk["appName"] == "My App"
    assert on_disk["bundledWebRuntime"] is True
    assert on_disk["webDir"] == "dist"
    assert on_disk["plugins"] == {"x": 1}
    assert cfg.web.name == "dist"
    assert persisted.web_dir == "dist"


def test_get_or_create_rejects_invalid_file(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILE_NAME).write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigStoreError):
        get_or_create_config(_identity_config(tmp_path))


def test_json_store_is_async(tmp_path: Path) -> None:
    cfg = _identity_config(tmp_path)
    persisted = asyncio.run(JsonConfigStore().get_or_create(cfg))
    assert isinstance(persisted, PersistedConfig)
    assert (tmp_path / CONFIG_FILE_NAME).is_file()


def test_persisted_config_uses_aliases() -> None:
    p = PersistedConfig.model_validate({"appId": "a.b", "appName": "N"})
    assert json.loads(p.to_json()) == {
        "appId": "a.b",
        "appName": "N",
        "bundledWebRuntime": False,
        "webDir": "www",
    }
