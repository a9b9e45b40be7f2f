from .files import Files, Mutexed
from .decorators import (
    FileProvider,
    WithExtension,
    KeepAlive,
    create,
    build_provider,
    wrap_provider,
)
from .random_source import RandomSource, SeededRandom

__all__ = [
    "Files",
    "Mutexed",
    "FileProvider",
    "WithExtension",
    "KeepAlive",
    "create",
    "build_provider",
    "wrap_provider",
    "RandomSource",
    "SeededRandom",
]
