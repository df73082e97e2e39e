"""Recursive parallel tree removal."""

from __future__ import annotations

import asyncio
import os
import stat

import aiofiles.os

from fstree.errors import (
    ReaddirFailedError,
    RmdirFailedError,
    RootRemovalRefusedError,
    StatFailedError,
    UnlinkFailedError,
)
from fstree.infrastructure.logger import logger


async def rm_tree(path: str) -> None:
    """Recursively remove path, like `rm -rf`.

    A missing path counts as removed. Every child of a directory is removed
    concurrently with no cap on fan-out; the first child failure is raised
    straight away and the directory itself is left in place. Siblings still
    running are not cancelled.
    """
    # POSIX normpath keeps a leading "//" as-is.
    if os.path.normpath(path) in ("/", "//"):
        raise RootRemovalRefusedError(path)

    try:
        st = await aiofiles.os.stat(path, follow_symlinks=False)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise StatFailedError(path, exc) from exc

    if not stat.S_ISDIR(st.st_mode):
        try:
            await aiofiles.os.unlink(path)
        except OSError as exc:
            raise UnlinkFailedError(path, exc) from exc
        return

    try:
        names = await aiofiles.os.listdir(path)
    except OSError as exc:
        raise ReaddirFailedError(path, exc) from exc

    if names:
        logger.debug("Removing directory contents", path=path, children=len(names))
        await asyncio.gather(*(rm_tree(os.path.join(path, name)) for name in names))

    try:
        await aiofiles.os.rmdir(path)
    except OSError as exc:
        raise RmdirFailedError(path, exc) from exc
