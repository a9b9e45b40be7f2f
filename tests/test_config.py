import json
from pathlib import Path

import dacite
import pytest

from scratch_pool.config import PoolConfig, load_pool_config, pool_config_from_dict


def test_pool_config_from_dict_fills_defaults():
    config = pool_config_from_dict({"prefix": "scratch_", "seed": 3})

    assert config == PoolConfig(prefix="scratch_", seed=3)
    assert config.parent_dir is None
    assert config.keep_alive is False
    assert config.thread_safe is False


def test_pool_config_rejects_unknown_keys():
    with pytest.raises(dacite.UnexpectedDataError):
        pool_config_from_dict({"prefix": "x", "max_files": 10})


def test_pool_config_rejects_wrong_types():
    with pytest.raises(dacite.WrongTypeError):
        pool_config_from_dict({"seed": "not a number"})


def test_load_pool_config(tmp_path: Path):
    path = tmp_path / "pool.json"
    path.write_text(
        json.dumps(
            {
                "parent_dir": str(tmp_path),
                "extension": "png",
                "thread_safe": True,
            }
        ),
        encoding="utf-8",
    )

    config = load_pool_config(path)

    assert config.parent_dir == str(tmp_path)
    assert config.extension == "png"
    assert config.thread_safe is True


def test_load_pool_config_requires_object(tmp_path: Path):
    path = tmp_path / "pool.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a JSON object"):
        load_pool_config(path)
