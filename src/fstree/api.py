"""Barrel re-export of the public API."""

from fstree.copy.scheduler import copy_tree, start_copy_tree
from fstree.copy.types import CopyJob, CopyOptions, EntryPair
from fstree.errors import CopyTreeError, FsTreeError
from fstree.mount.lofs import mount_lofs
from fstree.remove.remover import rm_tree

__all__ = [
    "CopyJob",
    "CopyOptions",
    "CopyTreeError",
    "EntryPair",
    "FsTreeError",
    "copy_tree",
    "mount_lofs",
    "rm_tree",
    "start_copy_tree",
]
