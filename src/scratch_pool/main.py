import argparse
import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dacite import DaciteError
from rich.logging import RichHandler
from tqdm import tqdm

from scratch_pool.config import PoolConfig, load_pool_config
from scratch_pool.errors import ScratchPoolError
from scratch_pool.pool.decorators import FileProvider, create, wrap_provider
from scratch_pool.pool.files import Files

LOG = logging.getLogger("scratch_pool")


@dataclass(frozen=True, slots=True)
class ExerciseResult:
    created: int
    distinct_paths: int

    @property
    def reused(self) -> int:
        return self.created - self.distinct_paths


def _worker(provider: FileProvider, count: int, pbar: tqdm) -> list[Path]:
    issued: list[Path] = []
    for _ in range(count):
        verified = create(provider)
        verified.must_exist()
        issued.append(verified.path)
        provider.release(verified.path)
        pbar.update(1)
    return issued


def run_exercise(
    provider: FileProvider, count: int, threads: int = 1, progress: bool = True
) -> ExerciseResult:
    """Create and release count files through provider.

    With more than one thread, provider must be safe to share between
    threads.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if threads < 1:
        raise ValueError(f"threads must be >= 1, got {threads}")

    # split count as evenly as possible
    shares = [
        count // threads + (1 if i < count % threads else 0) for i in range(threads)
    ]
    issued: list[Path] = []
    with tqdm(total=count, unit="file", disable=not progress) as pbar:
        if threads == 1:
            issued = _worker(provider, count, pbar)
        else:
            with ThreadPoolExecutor(max_workers=threads) as executor:
                futures = [
                    executor.submit(_worker, provider, share, pbar) for share in shares
                ]
                for future in futures:
                    issued.extend(future.result())

    return ExerciseResult(created=len(issued), distinct_paths=len(set(issued)))


def _resolve_config(args: argparse.Namespace) -> PoolConfig:
    config = load_pool_config(args.config) if args.config else PoolConfig()
    overrides = {}
    if args.parent_dir is not None:
        overrides["parent_dir"] = str(args.parent_dir)
    if args.extension is not None:
        overrides["extension"] = args.extension
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.keep:
        overrides["keep_alive"] = True
    if args.threads > 1:
        overrides["thread_safe"] = True
    return dataclasses.replace(config, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Exercise a pool of reusable temporary files."
    )
    parser.add_argument("--config", type=Path, help="Path to a JSON pool config.")
    parser.add_argument(
        "--parent-dir", type=Path, help="Directory to create the pool in."
    )
    parser.add_argument("--count", type=int, default=1000, help="Files to create.")
    parser.add_argument("--threads", type=int, default=1, help="Worker threads.")
    parser.add_argument("--extension", help="Extension every file must carry.")
    parser.add_argument("--seed", type=int, help="Seed of the file name generator.")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep the pool directory after the run.",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Enable development mode.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.dev else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    if args.dev:
        LOG.info("Enabling development mode.")

    try:
        config = _resolve_config(args)
        LOG.info("Config: %s", config)

        files = Files.from_config(config)
        provider = wrap_provider(files, config)

        LOG.info(
            "Stage: exercise (count=%d, threads=%d, root_dir=%s)",
            args.count,
            args.threads,
            files.root_dir,
        )
        try:
            result = run_exercise(
                provider, args.count, args.threads, progress=not args.dev
            )
            LOG.info(
                "Created %d files, %d distinct paths, %d reused",
                result.created,
                result.distinct_paths,
                result.reused,
            )
        finally:
            LOG.info("Stage: destroy")
            provider.destroy()
        if config.keep_alive:
            LOG.info("Kept pool directory %s", files.root_dir)
    except (ScratchPoolError, DaciteError, ValueError) as err:
        LOG.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
