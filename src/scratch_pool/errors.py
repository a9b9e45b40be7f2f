from pathlib import Path
from typing import Optional


class ScratchPoolError(Exception):
    """Base class of every error raised by the file pool."""


class DirectoryCreationError(ScratchPoolError):
    def __init__(self, parent_dir: Optional[str], prefix: str):
        self.parent_dir = parent_dir
        self.prefix = prefix
        where = parent_dir or "the system temp location"
        super().__init__(
            f"failed to create temporary directory with prefix '{prefix}' in {where}"
        )


class CreateFail(ScratchPoolError):
    """The backing file of an allocated path could not be created."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to create temporary file '{path}'")


class TouchError(ScratchPoolError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"failed to touch file '{path}'")


class DirectoryRemovalError(ScratchPoolError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"failed to remove temporary directory '{path}'")


class VerificationError(ScratchPoolError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"file '{path}' does not exist")
