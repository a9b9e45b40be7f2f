import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import dacite


@dataclass(frozen=True, slots=True)
class PoolConfig:
    """
    Settings used to build a file pool.

    Attributes:
        parent_dir:
            Directory the pool's root directory is created in. None or an
            empty string means the system default temp location.

        prefix:
            Name prefix of the root directory. When None the prefix is drawn
            from the random source.

        seed:
            Seed of the random source generating file names. None seeds it
            from the current unix time.

        extension:
            When set, every allocated file carries this extension.

        keep_alive:
            Never remove the root directory on destroy.

        thread_safe:
            Guard the pool with a lock so it can be shared between threads.
    """

    parent_dir: Optional[str] = None
    prefix: Optional[str] = None
    seed: Optional[int] = None
    extension: Optional[str] = None
    keep_alive: bool = False
    thread_safe: bool = False


def pool_config_from_dict(data: Mapping[str, Any]) -> PoolConfig:
    return dacite.from_dict(PoolConfig, dict(data), config=dacite.Config(strict=True))


def load_pool_config(path: Path) -> PoolConfig:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"pool config must be a JSON object: {path}")
    return pool_config_from_dict(raw)
