"""Minimal native project skeletons for newly created apps.

`add_*` writes a small skeleton per platform and never overwrites existing
files. `sync` copies the web assets and the app config into the native
project. `edit_project_settings_*` rewrites the app identity (id and display
name) in the files that carry it.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from xml.sax.saxutils import escape

from src.project_config.types import CONFIG_FILE_NAME, ProjectConfig

logger = logging.getLogger(__name__)

# Identity the skeletons are rendered with; edit_project_settings_* replaces it.
SKELETON_APP_NAME = "App"
SKELETON_APP_ID = "com.example.app"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


class NativeProjectError(RuntimeError):
    pass


def slugify(name: str) -> str:
    s = (name or "").strip().lower()
    s = _SLUG_RE.sub("-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s[:50].rstrip("-") or "app"


def render_android_settings_gradle(config: ProjectConfig) -> str:
    return "include ':app'\n" f"rootProject.name = '{slugify(config.app_name)}'\n"


def render_android_app_build_gradle(_config: ProjectConfig) -> str:
    return (
        "apply plugin: 'com.android.application'\n"
        "\n"
        "android {\n"
        f'    namespace "{SKELETON_APP_ID}"\n'
        "    compileSdkVersion 34\n"
        "    defaultConfig {\n"
        f'        applicationId "{SKELETON_APP_ID}"\n'
        "        minSdkVersion 22\n"
        "        targetSdkVersion 34\n"
        "        versionCode 1\n"
        '        versionName "1.0"\n'
        "    }\n"
        "}\n"
    )


def render_android_manifest(_config: ProjectConfig) -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<manifest xmlns:android="http://schemas.android.com/apk/res/android">\n'
        "    <application\n"
        '        android:label="@string/app_name"\n'
        '        android:allowBackup="true">\n'
        "        <activity\n"
        '            android:name=".MainActivity"\n'
        '            android:label="@string/title_activity_main"\n'
        '            android:exported="true">\n'
        "            <intent-filter>\n"
        '                <action android:name="android.intent.action.MAIN" />\n'
        '                <category android:name="android.intent.category.LAUNCHER" />\n'
        "            </intent-filter>\n"
        "        </activity>\n"
        "    </application>\n"
        '    <uses-permission android:name="android.permission.INTERNET" />\n'
        "</manifest>\n"
    )


def render_android_strings_xml(_config: ProjectConfig) -> str:
    return (
        "<?xml version='1.0' encoding='utf-8'?>\n"
        "<resources>\n"
        f'    <string name="app_name">{SKELETON_APP_NAME}</string>\n'
        f'    <string name="title_activity_main">{SKELETON_APP_NAME}</string>\n'
        f'    <string name="package_name">{SKELETON_APP_ID}</string>\n'
        f'    <string name="custom_url_scheme">{SKELETON_APP_ID}</string>\n'
        "</resources>\n"
    )


def render_ios_info_plist(_config: ProjectConfig) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
        '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
        '<plist version="1.0">\n'
        "<dict>\n"
        "\t<key>CFBundleDevelopmentRegion</key>\n"
        "\t<string>en</string>\n"
        "\t<key>CFBundleDisplayName</key>\n"
        f"\t<string>{SKELETON_APP_NAME}</string>\n"
        "\t<key>CFBundleExecutable</key>\n"
        "\t<string>$(EXECUTABLE_NAME)</string>\n"
        "\t<key>CFBundleIdentifier</key>\n"
        f"\t<string>{SKELETON_APP_ID}</string>\n"
        "\t<key>CFBundleShortVersionString</key>\n"
        "\t<string>1.0</string>\n"
        "\t<key>CFBundleVersion</key>\n"
        "\t<string>1</string>\n"
        "\t<key>UILaunchStoryboardName</key>\n"
        "\t<string>LaunchScreen</string>\n"
        "</dict>\n"
        "</plist>\n"
    )


def render_ios_podfile(_config: ProjectConfig) -> str:
    return (
        "platform :ios, '13.0'\n"
        "use_frameworks!\n"
        "\n"
        "target 'App' do\n"
        "  pod 'CapstanRuntime', :path => '../../node_modules/@capstan/ios'\n"
        "end\n"
    )


@dataclass(frozen=True)
class _Edit:
    path: str
    pattern: re.Pattern[str]
    value: Callable[[ProjectConfig], str]


@dataclass(frozen=True)
class _PlatformLayout:
    files: tuple[tuple[str, Callable[[ProjectConfig], str]], ...]
    # Where synced web assets and the app config land, relative to the native dir.
    public_dir: str
    config_dir: str
    edits: tuple[_Edit, ...]


def _xml_text(value: str) -> str:
    return escape(value or "")


_LAYOUTS: dict[str, _PlatformLayout] = {
    "android": _PlatformLayout(
        files=(
            ("settings.gradle", render_android_settings_gradle),
            ("app/build.gradle", render_android_app_build_gradle),
            ("app/src/main/AndroidManifest.xml", render_android_manifest),
            ("app/src/main/res/values/strings.xml", render_android_strings_xml),
        ),
        public_dir="app/src/main/assets/public",
        config_dir="app/src/main/assets",
        edits=(
            _Edit(
                "app/build.gradle",
                re.compile(r'(applicationId\s+")[^"]*(")'),
                lambda c: c.app_id,
            ),
            _Edit(
                "app/build.gradle",
                re.compile(r'(namespace\s+")[^"]*(")'),
                lambda c: c.app_id,
            ),
            _Edit(
                "app/src/main/res/values/strings.xml",
                re.compile(r'(<string name="app_name">)[^<]*(</string>)'),
                lambda c: _xml_text(c.app_name),
            ),
            _Edit(
                "app/src/main/res/values/strings.xml",
                re.compile(r'(<string name="title_activity_main">)[^<]*(</string>)'),
                lambda c: _xml_text(c.app_name),
            ),
            _Edit(
                "app/src/main/res/values/strings.xml",
                re.compile(r'(<string name="package_name">)[^<]*(</string>)'),
                lambda c: c.app_id,
            ),
            _Edit(
                "app/src/main/res/values/strings.xml",
                re.compile(r'(<string name="custom_url_scheme">)[^<]*(</string>)'),
                lambda c: c.app_id,
            ),
        ),
    ),
    "ios": _PlatformLayout(
        files=(
            ("App/Podfile", render_ios_podfile),
            ("App/App/Info.plist", render_ios_info_plist),
        ),
        public_dir="App/App/public",
        config_dir="App/App",
        edits=(
            _Edit(
                "App/App/Info.plist",
                re.compile(r"(<key>CFBundleDisplayName</key>\s*<string>)[^<]*(</string>)"),
                lambda c: _xml_text(c.app_name),
            ),
            _Edit(
                "App/App/Info.plist",
                re.compile(r"(<key>CFBundleIdentifier</key>\s*<string>)[^<]*(</string>)"),
                lambda c: c.app_id,
            ),
        ),
    ),
}


def _layout_for(platform: str) -> _PlatformLayout:
    layout = _LAYOUTS.get(platform)
    if layout is None:
        raise NativeProjectError(f"Unknown platform: {platform}")
    return layout


def _write_missing_files(root: Path, files: Iterable[tuple[str, str]]) -> list[str]:
    written: list[str] = []
    for rel, text in files:
        path = root / rel
        if path.exists():
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        written.append(rel)
    return written


def add_platform(config: ProjectConfig, platform: str, native_name: str) -> list[str]:
    layout = _layout_for(platform)
    root = config.native_dir(native_name)
    root.mkdir(parents=False, exist_ok=True)
    written = _write_missing_files(root, ((rel, render(config)) for rel, render in layout.files))
    (root / layout.public_dir).mkdir(parents=True, exist_ok=True)
    logger.debug("Added %s project at %s (%d files)", platform, root, len(written))
    return written


def sync_platform(config: ProjectConfig, platform: str, native_name: str) -> None:
    layout = _layout_for(platform)
    root = config.native_dir(native_name)
    if not root.is_dir():
        raise NativeProjectError(
            f"{platform} platform has not been added yet (missing {root})"
        )
    web_dir = config.web_dir
    if not web_dir.is_dir():
        raise NativeProjectError(
            f"Could not find the web assets directory: ./{config.web.name}. "
            "Create it or set webDir in " + CONFIG_FILE_NAME
        )

    public = root / layout.public_dir
    if public.exists():
        shutil.rmtree(public)
    shutil.copytree(web_dir, public)

    config_dir = root / layout.config_dir
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / CONFIG_FILE_NAME).write_text(
        json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8"
    )
    logger.debug("Synced %s into %s", web_dir, public)


def edit_platform(config: ProjectConfig, platform: str, native_name: str) -> None:
    layout = _layout_for(platform)
    root = config.native_dir(native_name)
    by_path: dict[str, list[_Edit]] = {}
    for edit in layout.edits:
        by_path.setdefault(edit.path, []).append(edit)

    for rel, edits in by_path.items():
        path = root / rel
        if not path.is_file():
            raise NativeProjectError(f"Cannot update {platform} project settings: missing {path}")
        text = path.read_text(encoding="utf-8")
        for edit in edits:
            value = edit.value(config)
            text = edit.pattern.sub(lambda m, v=value: m.group(1) + v + m.group(2), text)
        path.write_text(text, encoding="utf-8")


class NativeSkeletonPlatforms:
    """NativePlatforms backed by the skeleton writer above."""

    async def add_ios(self, config: ProjectConfig) -> None:
        await asyncio.to_thread(add_platform, config, "ios", config.ios.name)

    async def add_android(self, config: ProjectConfig) -> None:
        await asyncio.to_thread(add_platform, config, "android", config.android.name)

    async def sync(self, config: ProjectConfig, platform_name: str) -> None:
        platform = "ios" if platform_name == config.ios.name else "android"
        await asyncio.to_thread(sync_platform, config, platform, platform_name)

    async def edit_project_settings_ios(self, config: ProjectConfig) -> None:
        await asyncio.to_thread(edit_platform, config, "ios", config.ios.name)

    async def edit_project_settings_android(self, config: ProjectConfig) -> None:
        await asyncio.to_thread(edit_platform, config, "android", config.android.name)
