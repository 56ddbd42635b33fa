"""
enforce-hooks - Lifecycle Events
Eventos do gerenciador de pacotes consumidos pelo plugin.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


# =============================================================================
# Exceções
# =============================================================================

class EventParseError(Exception):
    """Erro ao interpretar um evento do ciclo de vida."""
    pass


# =============================================================================
# Enums
# =============================================================================

class EventName(str, Enum):
    """Nomes dos eventos emitidos pelo gerenciador de pacotes."""
    POST_PACKAGE_INSTALL = "post-package-install"
    POST_PACKAGE_UPDATE = "post-package-update"
    PRE_PACKAGE_UNINSTALL = "pre-package-uninstall"
    POST_INSTALL_CMD = "post-install-cmd"
    POST_UPDATE_CMD = "post-update-cmd"


# =============================================================================
# Eventos
# =============================================================================

@dataclass(frozen=True)
class InstallEvent:
    """Pacote instalado."""
    package: str

    @property
    def name(self) -> EventName:
        return EventName.POST_PACKAGE_INSTALL

    @property
    def package_name(self) -> str:
        return self.package


@dataclass(frozen=True)
class UpdateEvent:
    """Pacote atualizado; o pacote afetado é o de destino."""
    initial_package: str
    target_package: str

    @property
    def name(self) -> EventName:
        return EventName.POST_PACKAGE_UPDATE

    @property
    def package_name(self) -> str:
        return self.target_package


@dataclass(frozen=True)
class UninstallEvent:
    """Pacote prestes a ser removido."""
    package: str

    @property
    def name(self) -> EventName:
        return EventName.PRE_PACKAGE_UNINSTALL

    @property
    def package_name(self) -> str:
        return self.package


@dataclass(frozen=True)
class LifecycleCompleteEvent:
    """Fim de uma execução de install/update."""
    name: EventName = EventName.POST_INSTALL_CMD

    def __post_init__(self):
        if self.name not in (EventName.POST_INSTALL_CMD, EventName.POST_UPDATE_CMD):
            raise ValueError(f"Evento de fim de ciclo inválido: {self.name.value}")


PackageEvent = Union[InstallEvent, UpdateEvent, UninstallEvent]
LifecycleEvent = Union[InstallEvent, UpdateEvent, UninstallEvent, LifecycleCompleteEvent]


# =============================================================================
# Helpers
# =============================================================================

def normalize_package_name(name: str) -> str:
    """Normaliza nome de pacote (case-insensitive, '-', '_' e '.' equivalentes)."""
    return re.sub(r"[-_.]+", "-", name.strip()).lower()


def _require(data: Dict[str, Any], key: str, index: int) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise EventParseError(f"Evento #{index}: campo '{key}' obrigatório")
    return value


def parse_event(data: Dict[str, Any], index: int = 0) -> LifecycleEvent:
    """
    Converte um dicionário em evento tipado.

    Args:
        data: Dicionário com campo 'event' e dados do pacote
        index: Posição do evento na lista (para mensagens de erro)

    Returns:
        Evento tipado

    Raises:
        EventParseError: Se o evento for inválido
    """
    if not isinstance(data, dict):
        raise EventParseError(f"Evento #{index}: esperado um objeto")

    raw_name = data.get("event")
    try:
        name = EventName(raw_name)
    except ValueError:
        raise EventParseError(
            f"Evento #{index}: nome inválido {raw_name!r}. "
            f"Valores válidos: {[e.value for e in EventName]}"
        )

    if name == EventName.POST_PACKAGE_INSTALL:
        return InstallEvent(package=_require(data, "package", index))

    if name == EventName.PRE_PACKAGE_UNINSTALL:
        return UninstallEvent(package=_require(data, "package", index))

    if name == EventName.POST_PACKAGE_UPDATE:
        if "target" not in data and "package" in data:
            target = _require(data, "package", index)
        else:
            target = _require(data, "target", index)
        initial = _require(data, "initial", index) if "initial" in data else target
        return UpdateEvent(initial_package=initial, target_package=target)

    return LifecycleCompleteEvent(name=name)


def load_events(text: str) -> List[LifecycleEvent]:
    """
    Carrega eventos de um documento YAML ou JSON.

    Aceita uma lista de eventos ou um objeto com a chave 'events'.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise EventParseError(f"Erro ao parsear eventos: {e}")

    if data is None:
        return []

    if isinstance(data, dict):
        if "events" not in data:
            raise EventParseError("Campo 'events' não encontrado")
        data = data["events"]

    if not isinstance(data, list):
        raise EventParseError("Eventos devem ser uma lista")

    return [parse_event(item, index=idx) for idx, item in enumerate(data)]


def load_events_file(filepath: Union[str, Path]) -> List[LifecycleEvent]:
    """Carrega eventos de um arquivo."""
    filepath = Path(filepath)

    if not filepath.is_file():
        raise EventParseError(f"Arquivo não encontrado: {filepath}")

    try:
        text = filepath.read_text(encoding="utf-8")
    except OSError as e:
        raise EventParseError(f"Erro ao ler arquivo: {e}")

    return load_events(text)


__all__ = [
    "EventName",
    "EventParseError",
    "InstallEvent",
    "UpdateEvent",
    "UninstallEvent",
    "LifecycleCompleteEvent",
    "PackageEvent",
    "LifecycleEvent",
    "normalize_package_name",
    "parse_event",
    "load_events",
    "load_events_file",
]
