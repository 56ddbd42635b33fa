"""Core modules for enforce-hooks."""

from .config_loader import ConfigLoadError, load_config, load_default_config
from .events import (
    EventName,
    InstallEvent,
    LifecycleCompleteEvent,
    UninstallEvent,
    UpdateEvent,
)
from .formatters import FormatterFactory
from .models import (
    EnforceHooksConfig,
    HookAction,
    HookFile,
    HookMarker,
    HookResult,
    HookStatus,
    LifecycleSession,
    SyncOperation,
    SyncReport,
)

__all__ = [
    # Config
    "ConfigLoadError",
    "load_config",
    "load_default_config",
    # Events
    "EventName",
    "InstallEvent",
    "LifecycleCompleteEvent",
    "UninstallEvent",
    "UpdateEvent",
    # Formatters
    "FormatterFactory",
    # Models
    "EnforceHooksConfig",
    "HookAction",
    "HookFile",
    "HookMarker",
    "HookResult",
    "HookStatus",
    "LifecycleSession",
    "SyncOperation",
    "SyncReport",
]
