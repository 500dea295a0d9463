from __future__ import annotations

from dataclasses import dataclass

from src.project_config.types import ProjectConfig


@dataclass(frozen=True)
class CreateInputs:
    app_dir: str = ""
    app_name: str = ""
    app_id: str = ""

    @classmethod
    def of(cls, app_dir: str | None, app_name: str | None, app_id: str | None) -> CreateInputs:
        return cls(
            app_dir=str(app_dir or ""),
            app_name=str(app_name or ""),
            app_id=str(app_id or ""),
        )


@dataclass
class CreateContext:
    inputs: CreateInputs
    config: ProjectConfig
    # Set by the resolving stage; None before that.
    resolved: CreateInputs | None = None

    def require_resolved(self) -> CreateInputs:
        if self.resolved is None:
            raise RuntimeError("inputs have not been resolved yet")
        return self.resolved
