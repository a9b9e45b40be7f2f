from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Set

from scratch_pool.config import PoolConfig
from scratch_pool.errors import DirectoryCreationError, DirectoryRemovalError
from scratch_pool.fs.path_util import PathLike, join, make_temp_dir, remove_dir
from scratch_pool.pool.random_source import RandomSource, SeededRandom

LOG = logging.getLogger("scratch_pool")


class Files:
    """Reusable temporary files inside a single directory.

    Paths handed out by `allocate` are returned with `release` once the
    caller is done with them, and are handed out again by later allocations
    instead of synthesizing new names. `destroy` removes the directory and
    everything in it.

        pool = Files.new_default()
        path = pool.allocate()
        try:
            ...  # use path
        finally:
            pool.release(path)
    """

    def __init__(self, root_dir: PathLike, rng: RandomSource):
        self.root_dir = Path(root_dir)
        self.rng = rng
        # paths that are not in use and may be handed out again
        self._available: Set[Path] = set()

    @classmethod
    def from_dir(cls, root_dir: PathLike, rng: RandomSource) -> Files:
        """Manage files in an already existing directory."""
        return cls(root_dir, rng)

    @classmethod
    def new(
        cls, parent_dir: Optional[PathLike], prefix: str, rng: RandomSource
    ) -> Files:
        """Create a fresh temporary directory under parent_dir and manage it.

        Args:
            parent_dir: Where to create the directory, None or "" for the
                system default temp location.
            prefix: Name prefix of the directory.
            rng: Source of the random file names.

        Raises:
            DirectoryCreationError: if the directory could not be created.
        """
        try:
            root_dir = make_temp_dir(parent_dir, prefix)
        except OSError as err:
            raise DirectoryCreationError(
                str(parent_dir) if parent_dir else None, prefix
            ) from err
        LOG.info("Temp file pool created (root_dir=%s)", root_dir)
        return cls(root_dir, rng)

    @classmethod
    def from_rand(cls, rng: RandomSource) -> Files:
        """Like `new`, in the system temp location with a random prefix."""
        return cls.new(None, str(rng.next_int()), rng)

    @classmethod
    def new_default(cls) -> Files:
        return cls.from_rand(SeededRandom())

    @classmethod
    def from_config(cls, config: PoolConfig) -> Files:
        rng = SeededRandom(config.seed)
        if config.prefix is None:
            return cls.new(config.parent_dir, str(rng.next_int()), rng)
        return cls.new(config.parent_dir, config.prefix, rng)

    @property
    def available_count(self) -> int:
        return len(self._available)

    def search(self) -> Optional[Path]:
        """Take a file that is not in use, or None if there is none."""
        if not self._available:
            return None
        path = self._available.pop()
        LOG.debug("Reusing temp file %s", path)
        return path

    def new_file(self) -> Path:
        """Synthesize a new file path inside the root directory.

        Nothing is created on disk.
        """
        path = join(self.root_dir, str(self.rng.next_int()))
        LOG.debug("New temp file %s", path)
        return path

    def allocate(self) -> Path:
        path = self.search()
        if path is not None:
            return path
        return self.new_file()

    def release(self, path: PathLike) -> None:
        self._available.add(Path(path))

    def destroy(self) -> None:
        try:
            remove_dir(self.root_dir)
        except OSError as err:
            raise DirectoryRemovalError(self.root_dir) from err
        LOG.info("Temp file pool removed (root_dir=%s)", self.root_dir)

    def to_mutexed(self) -> Mutexed:
        return Mutexed(self)

    def __enter__(self) -> Files:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if exc_type is None:
            self.destroy()
            return
        # keep the exception already propagating
        try:
            self.destroy()
        except DirectoryRemovalError as err:
            LOG.warning("%s while handling %s", err, exc_type.__name__)

    def __repr__(self) -> str:
        return f"Files(root_dir={self.root_dir!s}, available={len(self._available)})"


class Mutexed:
    """`Files` guarded by a lock, safe to share between threads.

    The lock is held for a single pool operation, never while the caller
    uses the file.
    """

    def __init__(self, files: Files):
        self._files = files
        self._lock = threading.Lock()

    @property
    def files(self) -> Files:
        return self._files

    @property
    def root_dir(self) -> Path:
        return self._files.root_dir

    def allocate(self) -> Path:
        with self._lock:
            return self._files.allocate()

    def search(self) -> Optional[Path]:
        with self._lock:
            return self._files.search()

    def release(self, path: PathLike) -> None:
        with self._lock:
            self._files.release(path)

    def destroy(self) -> None:
        with self._lock:
            self._files.destroy()
