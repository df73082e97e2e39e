"""Entry classifier and per-type copy handlers."""

from __future__ import annotations

import os
import stat

import aiofiles
import aiofiles.os

from fstree.copy.types import CopyJob, EntryPair
from fstree.errors import (
    DestinationExistsError,
    MkdirFailedError,
    ReaddirFailedError,
    ReadlinkFailedError,
    StatFailedError,
    StreamCopyFailedError,
    SymlinkFailedError,
    UnsupportedEntryTypeError,
)
from fstree.infrastructure.config import COPY_CHUNK_SIZE


async def copy_entry(job: CopyJob, pair: EntryPair) -> None:
    """Copy one entry, choosing the handler by the source's own type (links are not followed)."""
    try:
        st = await aiofiles.os.stat(pair.source, follow_symlinks=False)
    except OSError as exc:
        raise StatFailedError(pair.source, exc) from exc

    if stat.S_ISREG(st.st_mode):
        await copy_file(pair.source, pair.destination, st)
    elif stat.S_ISDIR(st.st_mode):
        await copy_directory(job, pair.source, pair.destination, st)
    elif stat.S_ISLNK(st.st_mode):
        await copy_symlink(pair.source, pair.destination)
    else:
        raise UnsupportedEntryTypeError(pair.source)


async def copy_file(src: str, dst: str, st: os.stat_result) -> None:
    # Check-then-create: another writer can still slip in between the probe
    # and the open below.
    try:
        await aiofiles.os.stat(dst, follow_symlinks=False)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise DestinationExistsError(dst, exc) from exc
    else:
        raise DestinationExistsError(dst)

    mode = stat.S_IMODE(st.st_mode)

    def opener(path: str, flags: int) -> int:
        return os.open(path, flags, mode)

    try:
        async with aiofiles.open(src, "rb") as reader, aiofiles.open(dst, "wb", opener=opener) as writer:
            while True:
                chunk = await reader.read(COPY_CHUNK_SIZE)
                if not chunk:
                    break
                await writer.write(chunk)
    except OSError as exc:
        raise StreamCopyFailedError(src, exc) from exc


async def copy_directory(job: CopyJob, src: str, dst: str, st: os.stat_result) -> None:
    """Create dst and queue src's children onto the job; the children are copied later."""
    try:
        await aiofiles.os.mkdir(dst, stat.S_IMODE(st.st_mode))
    except OSError as exc:
        raise MkdirFailedError(dst, exc) from exc

    try:
        names = await aiofiles.os.listdir(src)
    except OSError as exc:
        raise ReaddirFailedError(src, exc) from exc

    for name in names:
        job.queue.append(EntryPair(os.path.join(src, name), os.path.join(dst, name)))


async def copy_symlink(src: str, dst: str) -> None:
    try:
        target = await aiofiles.os.readlink(src)
    except OSError as exc:
        raise ReadlinkFailedError(src, exc) from exc

    try:
        await aiofiles.os.symlink(target, dst)
    except OSError as exc:
        raise SymlinkFailedError(dst, exc) from exc
