import json
from pathlib import Path

import pytest

from scratch_pool.main import main, run_exercise
from scratch_pool.pool.files import Files
from scratch_pool.pool.random_source import SeededRandom


def test_run_exercise_single_thread_reuses_one_path(tmp_path: Path):
    pool = Files.from_dir(tmp_path, SeededRandom(1))

    result = run_exercise(pool, 25, progress=False)

    assert result.created == 25
    assert result.distinct_paths == 1
    assert result.reused == 24


def test_run_exercise_multi_thread(tmp_path: Path):
    mutexed = Files.from_dir(tmp_path, SeededRandom(1)).to_mutexed()

    result = run_exercise(mutexed, 41, threads=4, progress=False)

    assert result.created == 41
    assert 1 <= result.distinct_paths <= 4


@pytest.mark.parametrize("count, threads", [(-1, 1), (1, 0)])
def test_run_exercise_rejects_bad_arguments(tmp_path: Path, count: int, threads: int):
    pool = Files.from_dir(tmp_path, SeededRandom(1))

    with pytest.raises(ValueError):
        run_exercise(pool, count, threads, progress=False)


def test_main_removes_pool_dir(tmp_path: Path):
    code = main(["--parent-dir", str(tmp_path), "--count", "20", "--seed", "1"])

    assert code == 0
    assert list(tmp_path.iterdir()) == []


def test_main_keep_leaves_pool_dir(tmp_path: Path):
    code = main(
        ["--parent-dir", str(tmp_path), "--count", "5", "--extension", "png", "--keep"]
    )

    assert code == 0
    (root_dir,) = list(tmp_path.iterdir())
    files = list(root_dir.iterdir())
    assert files
    assert all(path.suffix == ".png" for path in files)


def test_main_with_threads_and_config(tmp_path: Path):
    config_path = tmp_path / "pool.json"
    pool_parent = tmp_path / "pools"
    pool_parent.mkdir()
    config_path.write_text(
        json.dumps({"parent_dir": str(pool_parent), "prefix": "cli_"}),
        encoding="utf-8",
    )

    code = main(["--config", str(config_path), "--count", "40", "--threads", "4"])

    assert code == 0
    assert list(pool_parent.iterdir()) == []


def test_main_reports_pool_errors(tmp_path: Path):
    code = main(["--parent-dir", str(tmp_path / "missing"), "--count", "1"])

    assert code == 1


def test_main_reports_bad_config(tmp_path: Path):
    config_path = tmp_path / "pool.json"
    config_path.write_text(json.dumps({"unknown": 1}), encoding="utf-8")

    assert main(["--config", str(config_path)]) == 1
