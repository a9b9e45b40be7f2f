from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from scratch_pool.config import PoolConfig
from scratch_pool.errors import CreateFail, TouchError
from scratch_pool.fs.path_util import (
    PathLike,
    VerifiedFile,
    add_ext,
    create_file,
    has_ext,
    normalize_ext,
    remove_file,
    touch,
)
from scratch_pool.pool.files import Files

LOG = logging.getLogger("scratch_pool")


class FileProvider(Protocol):
    def allocate(self) -> Path: ...

    def release(self, path: PathLike) -> None: ...

    def destroy(self) -> None: ...


class WithExtension:
    """Make sure every allocated file carries the given extension.

    A candidate from the wrapped provider that lacks the extension is
    replaced by the candidate with the extension appended, which is touched
    on disk. The replaced candidate is removed from disk and is not released
    back to the wrapped provider, otherwise the same suffixed path could be
    handed out again while still in use.
    """

    def __init__(self, provider: FileProvider, extension: str):
        extension = normalize_ext(extension)
        if not extension:
            raise ValueError("extension cannot be empty")
        self.provider = provider
        self.extension = extension

    def allocate(self) -> Path:
        path = self.provider.allocate()
        if has_ext(path, self.extension):
            return path

        with_ext = add_ext(path, self.extension)
        try:
            touch(with_ext)
        except OSError as err:
            raise TouchError(with_ext) from err

        try:
            remove_file(path)
        except OSError as err:
            LOG.warning("Could not remove replaced temp file %s: %s", path, err)
        return with_ext

    def release(self, path: PathLike) -> None:
        self.provider.release(path)

    def destroy(self) -> None:
        self.provider.destroy()


class KeepAlive:
    """Forward everything except `destroy`, which never removes anything."""

    def __init__(self, provider: FileProvider):
        self.provider = provider

    def allocate(self) -> Path:
        return self.provider.allocate()

    def release(self, path: PathLike) -> None:
        self.provider.release(path)

    def destroy(self) -> None:
        LOG.debug("Keeping temp files alive, skipping removal")


def create(provider: FileProvider) -> VerifiedFile:
    """Allocate a path from provider and create an empty file there.

    Returns:
        The verified, existing file. Its handle is already closed.

    Raises:
        CreateFail: if the file could not be created.
        VerificationError: if the created file could not be found.
    """
    path = provider.allocate()
    try:
        handle = create_file(path)
    except OSError as err:
        raise CreateFail(path, err) from err

    try:
        return VerifiedFile.from_path(path)
    finally:
        handle.close()


def build_provider(config: PoolConfig) -> FileProvider:
    """Build a pool from config, wrapped as the config asks for."""
    return wrap_provider(Files.from_config(config), config)


def wrap_provider(files: Files, config: PoolConfig) -> FileProvider:
    # innermost first: lock, extension, keep-alive
    provider: FileProvider = files.to_mutexed() if config.thread_safe else files
    if config.extension:
        provider = WithExtension(provider, config.extension)
    if config.keep_alive:
        provider = KeepAlive(provider)
    return provider
