"""Copy domain types."""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from fstree.infrastructure.config import CP_MAX_WORKERS


class CopyOptions(BaseModel):
    max_workers: int = Field(default=CP_MAX_WORKERS, ge=1)  # Max tasks in flight per copy


@dataclass(frozen=True)
class EntryPair:
    source: str
    destination: str


@dataclass
class CopyJob:
    """State of one copy_tree call. Owned by its scheduler, never shared."""

    cap: int
    done: asyncio.Future[None]
    queue: deque[EntryPair] = field(default_factory=deque)
    in_flight: int = 0
    errors: list[Exception] = field(default_factory=list)
    dispatched: int = 0
    peak_in_flight: int = 0
