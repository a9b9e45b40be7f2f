from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Optional, Union

from scratch_pool.errors import VerificationError

LOG = logging.getLogger("scratch_pool")

PathLike = Union[str, Path]


@dataclass(frozen=True, slots=True)
class VerifiedFile:
    """A path that was confirmed to exist on disk when it was built."""

    path: Path

    @classmethod
    def from_path(cls, path: PathLike) -> "VerifiedFile":
        path = Path(path)
        if not path.is_file():
            raise VerificationError(path)
        return cls(path)

    def must_exist(self) -> None:
        if not self.path.is_file():
            raise VerificationError(self.path)

    def to_path(self) -> Path:
        return self.path

    @property
    def ext(self) -> str:
        return ext_of(self.path)

    def __str__(self) -> str:
        return str(self.path)


def make_temp_dir(parent_dir: Optional[PathLike], prefix: str) -> Path:
    """Create a fresh, uniquely named directory.

    Args:
        parent_dir: Directory to create it in. None or "" means the system
            default temp location.
        prefix: Name prefix of the new directory.

    Returns:
        The absolute path of the created directory.
    """
    parent = str(parent_dir) if parent_dir else None
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent)).resolve()
    LOG.debug("Created temp dir %s", path)
    return path


def join(directory: PathLike, name: str) -> Path:
    return Path(directory) / name


def ext_of(path: PathLike) -> str:
    """Return the extension of path without the leading dot ("" if none)."""
    return Path(path).suffix.lstrip(".")


def normalize_ext(ext: str) -> str:
    return ext.lstrip(".")


def add_ext(path: PathLike, ext: str) -> Path:
    path = Path(path)
    return path.with_name(f"{path.name}.{normalize_ext(ext)}")


def has_ext(path: PathLike, ext: str) -> bool:
    """Whether the name of path ends with ext, which may contain dots."""
    return Path(path).name.endswith(f".{normalize_ext(ext)}")


def create_file(path: PathLike) -> IO[bytes]:
    # create or truncate, caller closes
    return open(path, "wb")


def touch(path: PathLike) -> None:
    Path(path).touch(exist_ok=True)


def remove_file(path: PathLike) -> None:
    Path(path).unlink(missing_ok=True)


def remove_dir(path: PathLike) -> None:
    shutil.rmtree(path)
    LOG.debug("Removed dir %s", path)
