from __future__ import annotations

import asyncio
import logging
import os
import shutil
from pathlib import Path

from src.create.errors import Failure
from src.create.ports import FileSystem

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """FileSystem on the local disk; blocking calls run in a worker thread."""

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.exists, path)

    async def mkdir(self, path: str) -> None:
        # Non-recursive: the parent must exist and the target must not.
        await asyncio.to_thread(os.mkdir, path)

    async def copy_tree(self, src: str, dest: str) -> None:
        if not Path(src).is_dir():
            raise FileNotFoundError(f"Template directory {src} does not exist")
        await asyncio.to_thread(shutil.copytree, src, dest, dirs_exist_ok=True)


async def provision(fs: FileSystem, path: str) -> Failure | None:
    if await fs.exists(path):
        return Failure.operational(
            f"The directory {path} already exists. Please remove it before creating your app"
        )
    await fs.mkdir(path)
    logger.debug("Created app directory %s", path)
    return None
