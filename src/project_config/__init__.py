from src.project_config.host import HostOS, detect_host_os
from src.project_config.store import (
    ConfigStoreError,
    JsonConfigStore,
    PersistedConfig,
    get_or_create_config,
)
from src.project_config.types import (
    CONFIG_FILE_NAME,
    NativeProjectConfig,
    ProjectConfig,
    WebConfig,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigStoreError",
    "HostOS",
    "JsonConfigStore",
    "NativeProjectConfig",
    "PersistedConfig",
    "ProjectConfig",
    "WebConfig",
    "detect_host_os",
    "get_or_create_config",
]
