"""Git hooks synchronization."""

from .sync import (
    HookSourceError,
    HookSynchronizer,
    HookSynchronizerError,
)

__all__ = [
    "HookSourceError",
    "HookSynchronizer",
    "HookSynchronizerError",
]
