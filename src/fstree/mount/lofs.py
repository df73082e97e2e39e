"""Read-only loopback (lofs) mounts via the system `mount` command."""

from __future__ import annotations

import asyncio
import shutil

from fstree.errors import MountFailedError
from fstree.infrastructure.config import MOUNT_FS_TYPE, MOUNT_OPTIONS
from fstree.infrastructure.logger import logger

MOUNT_BIN: str = shutil.which("mount") or "mount"


def build_mount_args(source: str, dest: str) -> list[str]:
    return [MOUNT_BIN, "-F", MOUNT_FS_TYPE, f"-o{MOUNT_OPTIONS}", source, dest]


async def mount_lofs(source: str, dest: str) -> None:
    """Create a new read-only lofs mount of source at dest."""
    args = build_mount_args(source, dest)
    logger.info("Mounting", source=source, dest=dest, command=args[0])

    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise MountFailedError(dest, "", exc) from exc

    _stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        message = stderr.decode(errors="replace")
        logger.warning("Mount failed", dest=dest, code=proc.returncode, stderr=message.strip())
        raise MountFailedError(dest, message)
