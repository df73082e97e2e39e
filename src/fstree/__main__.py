"""Entry point: python -m fstree"""

from __future__ import annotations

import argparse
import asyncio
import sys

from fstree.copy.scheduler import copy_tree
from fstree.copy.types import CopyOptions
from fstree.errors import CopyTreeError, FsTreeError
from fstree.infrastructure.config import CP_MAX_WORKERS
from fstree.infrastructure.logger import install_exception_hooks, logger
from fstree.mount.lofs import mount_lofs
from fstree.remove.remover import rm_tree


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fstree", description="Recursive tree copy and removal")
    sub = parser.add_subparsers(dest="command", required=True)

    cp = sub.add_parser("cp", help="Copy a tree; fails if the destination exists")
    cp.add_argument("src")
    cp.add_argument("dst")
    cp.add_argument(
        "--max-workers",
        type=int,
        default=CP_MAX_WORKERS,
        help=f"Max concurrent copy operations (default {CP_MAX_WORKERS})",
    )

    rm = sub.add_parser("rm", help="Remove a tree; a missing path is not an error")
    rm.add_argument("path")

    mount = sub.add_parser("mount", help="Mount SRC read-only at DST (lofs)")
    mount.add_argument("src")
    mount.add_argument("dst")

    return parser


async def main(args: argparse.Namespace) -> int:
    try:
        if args.command == "cp":
            await copy_tree(args.src, args.dst, CopyOptions(max_workers=args.max_workers))
        elif args.command == "rm":
            await rm_tree(args.path)
        else:
            await mount_lofs(args.src, args.dst)
    except CopyTreeError as exc:
        for error in exc.errors:
            logger.error("Copy error", error=str(error))
        return 1
    except FsTreeError as exc:
        logger.error("Operation failed", command=args.command, error=str(exc))
        return 1
    return 0


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "cp" and args.max_workers < 1:
        logger.error("--max-workers must be at least 1", max_workers=args.max_workers)
        return 2
    install_exception_hooks()
    try:
        return asyncio.run(main(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(run())
