from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.project_config import settings
from src.project_config.host import HostOS, detect_host_os

CONFIG_FILE_NAME = "capstan.config.json"


@dataclass
class WebConfig:
    name: str = "www"


@dataclass
class NativeProjectConfig:
    # Directory name of the native project under the workspace root.
    name: str


@dataclass
class ProjectConfig:
    """Configuration aggregate for a single `create` run.

    Owned by the orchestrator and handed to collaborators by reference. Fields
    are only ever set or overwritten while the pipeline runs, never cleared.
    """

    working_dir: str = ""
    app_name: str = ""
    app_id: str = ""
    bundled_web_runtime: bool = False
    host_os: HostOS = "unknown"
    web: WebConfig = field(default_factory=WebConfig)
    ios: NativeProjectConfig = field(default_factory=lambda: NativeProjectConfig(name="ios"))
    android: NativeProjectConfig = field(
        default_factory=lambda: NativeProjectConfig(name="android")
    )
    template_dir: str = ""
    npm_client: str = "npm"
    install_packages: list[str] = field(default_factory=list)
    skip_install: bool = False
    docs_url: str = ""

    @classmethod
    def from_env(cls) -> ProjectConfig:
        return cls(
            host_os=detect_host_os(),
            web=WebConfig(name=settings.web_dir_name()),
            template_dir=settings.template_dir(),
            npm_client=settings.npm_client(),
            install_packages=settings.install_packages(),
            skip_install=settings.skip_install(),
            docs_url=settings.docs_url(),
        )

    @property
    def root_dir(self) -> Path:
        return Path(self.working_dir)

    @property
    def config_path(self) -> Path:
        return self.root_dir / CONFIG_FILE_NAME

    @property
    def web_dir(self) -> Path:
        return self.root_dir / self.web.name

    def native_dir(self, platform_name: str) -> Path:
        return self.root_dir / platform_name

    def to_dict(self) -> dict[str, Any]:
        """Persisted (on-disk) form; keys follow the config file format."""
        return {
            "appId": self.app_id,
            "appName": self.app_name,
            "bundledWebRuntime": bool(self.bundled_web_runtime),
            "webDir": self.web.name,
        }
