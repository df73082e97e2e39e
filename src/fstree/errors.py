"""Error taxonomy for tree copy, removal and mounting."""

from __future__ import annotations


class FsTreeError(Exception):
    """A single failed filesystem step, tied to the path it failed on."""

    action = "failed"

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"{self.action}: {path}"
        if cause is not None:
            message = f"{message}: {_describe(cause)}"
        super().__init__(message)


def _describe(cause: BaseException) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause) or type(cause).__name__


class UnsupportedEntryTypeError(FsTreeError):
    action = "unsupported file type"


class DestinationExistsError(FsTreeError):
    action = "destination exists"


class MkdirFailedError(FsTreeError):
    action = "mkdir failed"


class ReaddirFailedError(FsTreeError):
    action = "readdir failed"


class ReadlinkFailedError(FsTreeError):
    action = "readlink failed"


class SymlinkFailedError(FsTreeError):
    action = "symlink failed"


class StreamCopyFailedError(FsTreeError):
    action = "failed to copy"


class StatFailedError(FsTreeError):
    action = "stat failed"


class UnlinkFailedError(FsTreeError):
    action = "unlink failed"


class RmdirFailedError(FsTreeError):
    action = "rmdir failed"


class RootRemovalRefusedError(FsTreeError):
    action = "refusing to remove"


class MountFailedError(FsTreeError):
    """`mount` exited non-zero; stderr is the command's own output."""

    action = "mount failed"

    def __init__(self, path: str, stderr: str, cause: BaseException | None = None) -> None:
        self.stderr = stderr
        super().__init__(path, cause)
        if stderr.strip():
            self.args = (f"{self.args[0]}: {stderr.strip()}",)


class CopyTreeError(Exception):
    """Every task failure recorded by one copy, in the order they were recorded."""

    def __init__(self, errors: list[Exception]) -> None:
        if not errors:
            raise ValueError("CopyTreeError requires at least one error")
        self.errors = list(errors)
        first = self.errors[0]
        if len(self.errors) == 1:
            message = f"copy failed: {first}"
        else:
            message = f"copy failed: {first} (and {len(self.errors) - 1} more)"
        super().__init__(message)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
