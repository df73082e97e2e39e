"""Configuration constants and .env parsing."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

MAX_WORKERS_KEY = "FSTREE_CP_MAX_WORKERS"
DEFAULT_MAX_WORKERS = 100


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def read_env_file(keys: list[str], env_file: Path | None = None) -> dict[str, str]:
    """Return the requested keys from a .env file (default: one in the cwd).

    Nothing is written to os.environ. Blank values are treated as unset.
    """
    env_file = env_file or Path.cwd() / ".env"
    try:
        lines = env_file.read_text().splitlines()
    except OSError:
        return {}

    result: dict[str, str] = {}
    for line in lines:
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or key.startswith("#") or key not in keys:
            continue
        value = _unquote(value.strip())
        if value:
            result[key] = value
    return result


def parse_max_workers(raw: str | None, default: int = DEFAULT_MAX_WORKERS) -> int:
    """Parse a worker cap, falling back to the default on junk and clamping to >= 1."""
    if not raw:
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        return default


def resolve_max_workers(environ: Mapping[str, str] | None = None, env_file: Path | None = None) -> int:
    """The process environment wins over .env; both unset means the default."""
    environ = os.environ if environ is None else environ
    raw = environ.get(MAX_WORKERS_KEY) or read_env_file([MAX_WORKERS_KEY], env_file).get(MAX_WORKERS_KEY)
    return parse_max_workers(raw)


# Max copy suboperations outstanding at one time. Each in-flight file copy
# holds two descriptors, so keep this well under the process fd limit.
CP_MAX_WORKERS: int = resolve_max_workers()

COPY_CHUNK_SIZE: int = 1024 * 1024  # 1MB

MOUNT_FS_TYPE: str = "lofs"
MOUNT_OPTIONS: str = "ro"
