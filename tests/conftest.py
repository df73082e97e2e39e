"""Shared fixtures for fstree tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def fixed_umask() -> Iterator[None]:
    """Pin the umask so permission bits on created entries are predictable."""
    old = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(old)


@pytest.fixture()
def sample_tree(tmp_path: Path) -> Path:
    """Build a small tree with nested dirs, odd modes, and a relative symlink."""
    root = tmp_path / "src"
    root.mkdir()
    (root / "empty1").mkdir()
    (root / "empty2").mkdir(mode=0o700)
    (root / "burns").mkdir(mode=0o750)
    (root / "burns" / "snpp").write_text("excellent")
    (root / "burns" / "lil_lisa").mkdir()
    slurry = root / "burns" / "lil_lisa" / "slurry"
    slurry.write_text("even worse")
    slurry.chmod(0o444)
    (root / "burns" / "lil_lisa" / "plant").write_text("fishing net")
    (root / "burns" / "lil_lisa" / "cost").write_text("millions of cans")
    os.symlink("../../fat_tony", root / "burns" / "lil_lisa" / "owner")
    (root / "burns" / "moes").write_text("occasionally")
    (root / "fat_tony").write_text("milk contract")
    (root / "marge").write_text("pretzel wagon")
    return root
