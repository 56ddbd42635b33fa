"""
enforce-hooks - Core Data Models
Estruturas de dados da sincronização de hooks.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional, Union
from enum import Enum
import re


DEFAULT_PACKAGE_NAME = "enforce-hooks"
DEFAULT_MARKER = "# custom-hook"
DEFAULT_FILE_MODE = 0o755


# =============================================================================
# Enums
# =============================================================================

class HookAction(str, Enum):
    """Resultado da sincronização de um hook individual."""
    INSTALLED = "installed"
    SKIPPED = "skipped"
    REMOVED = "removed"
    KEPT = "kept"
    MISSING = "missing"
    ERROR = "error"


class SyncOperation(str, Enum):
    """Operações suportadas pelo sincronizador."""
    INSTALL = "install"
    REMOVE = "remove"


# =============================================================================
# Marker
# =============================================================================

@dataclass(frozen=True)
class HookMarker:
    """
    Marcador que identifica um hook gerenciado pelo enforce-hooks.

    Sem âncora, o token pode aparecer em qualquer lugar do conteúdo.
    Com âncora, o token precisa iniciar uma linha (espaços antes são aceitos).
    """
    token: str = DEFAULT_MARKER
    anchored: bool = False

    def __post_init__(self):
        if not self.token or not self.token.strip():
            raise ValueError("marker não pode ser vazio")

    @property
    def pattern(self) -> "re.Pattern[bytes]":
        escaped = re.escape(self.token.encode("utf-8"))
        if self.anchored:
            return re.compile(rb"^[ \t]*" + escaped, re.MULTILINE)
        return re.compile(escaped)

    def matches(self, content: bytes) -> bool:
        """Retorna True se o conteúdo contém o marcador."""
        return self.pattern.search(content) is not None


# =============================================================================
# Hook File
# =============================================================================

@dataclass(frozen=True)
class HookFile:
    """Um script de hook lido do diretório de origem."""
    name: str
    content: bytes
    path: Optional[Path] = None
    managed: bool = False

    @classmethod
    def read(cls, path: Path, marker: HookMarker) -> "HookFile":
        """Lê um hook do disco e detecta o marcador."""
        path = Path(path)
        content = path.read_bytes()
        return cls(
            name=path.name,
            content=content,
            path=path,
            managed=marker.matches(content),
        )


# =============================================================================
# Results
# =============================================================================

@dataclass
class HookResult:
    """Resultado da sincronização de um hook."""
    hook_name: str
    action: HookAction
    message: str
    path: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.action != HookAction.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hook": self.hook_name,
            "action": self.action.value,
            "success": self.success,
            "message": self.message,
            "path": str(self.path) if self.path else None,
        }


@dataclass
class SyncReport:
    """Resultado completo de uma operação de instalação ou remoção."""
    operation: SyncOperation
    source_dir: Path
    target_dir: Path
    results: List[HookResult] = field(default_factory=list)

    def add(self, result: HookResult) -> None:
        self.results.append(result)

    def by_action(self, action: HookAction) -> List[HookResult]:
        """Filtra resultados por ação."""
        return [r for r in self.results if r.action == action]

    @property
    def installed(self) -> List[HookResult]:
        return self.by_action(HookAction.INSTALLED)

    @property
    def skipped(self) -> List[HookResult]:
        return self.by_action(HookAction.SKIPPED)

    @property
    def removed(self) -> List[HookResult]:
        return self.by_action(HookAction.REMOVED)

    @property
    def errors(self) -> List[HookResult]:
        return self.by_action(HookAction.ERROR)

    @property
    def has_errors(self) -> bool:
        """Retorna True se algum hook falhou."""
        return bool(self.errors)

    @property
    def exit_code(self) -> int:
        """
        Exit code da operação.

        0 = todos os hooks processados
        1 = pelo menos um hook falhou
        """
        return 1 if self.has_errors else 0

    def to_dict(self) -> Dict[str, Any]:
        """Serializa SyncReport para dict."""
        counts: Dict[str, int] = {}
        for result in self.results:
            counts[result.action.value] = counts.get(result.action.value, 0) + 1

        return {
            "operation": self.operation.value,
            "source_dir": str(self.source_dir),
            "target_dir": str(self.target_dir),
            "results": [r.to_dict() for r in self.results],
            "summary": {
                "total_hooks": len(self.results),
                "has_errors": self.has_errors,
                "exit_code": self.exit_code,
                "by_action": counts,
            },
        }


@dataclass
class HookStatus:
    """Estado de um hook empacotado no repositório de destino."""
    hook_name: str
    installed: bool
    managed: bool = False
    executable: bool = False
    up_to_date: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hook": self.hook_name,
            "installed": self.installed,
            "managed": self.managed,
            "executable": self.executable,
            "up_to_date": self.up_to_date,
            "error": self.error,
        }


# =============================================================================
# Lifecycle Session
# =============================================================================

@dataclass
class LifecycleSession:
    """
    Estado de uma execução do ciclo de vida do gerenciador de pacotes.

    Uma sessão nova é criada no início de cada execução; o flag de
    instalação pendente é consumido uma única vez no final.
    """
    pending_install: bool = False

    def request_install(self) -> None:
        self.pending_install = True

    def cancel_install(self) -> None:
        self.pending_install = False

    def consume(self) -> bool:
        """Retorna o flag pendente e o descarta."""
        pending = self.pending_install
        self.pending_install = False
        return pending


# =============================================================================
# Configuration
# =============================================================================

def parse_file_mode(value: Union[str, int]) -> int:
    """Converte '0755', '755', '0o755' ou 0o755 para int."""
    if isinstance(value, bool):
        raise ValueError(f"file_mode inválido: {value!r}")

    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            mode = int(text, 8)
        except ValueError:
            raise ValueError(f"file_mode deve ser octal (ex: '0755'): {value!r}")
    else:
        raise ValueError(f"file_mode inválido: {value!r}")

    if not 0 <= mode <= 0o777:
        hint = " (use aspas: '0755')" if isinstance(value, int) else ""
        raise ValueError(f"file_mode fora do intervalo 0000-0777: {value!r}{hint}")

    return mode


@dataclass
class EnforceHooksConfig:
    """Configuração do enforce-hooks."""
    version: str = "1.0"
    package_name: str = DEFAULT_PACKAGE_NAME
    marker: str = DEFAULT_MARKER
    marker_anchored: bool = False
    hooks_dir: str = "hooks"
    target_dir: str = ".git/hooks"
    file_mode: int = DEFAULT_FILE_MODE

    def __post_init__(self):
        """Valida configuração."""
        if not self.package_name or not self.package_name.strip():
            raise ValueError("package_name não pode ser vazio")
        if not self.marker or not self.marker.strip():
            raise ValueError("marker não pode ser vazio")
        if not self.hooks_dir:
            raise ValueError("hooks_dir não pode ser vazio")
        if not self.target_dir:
            raise ValueError("target_dir não pode ser vazio")
        if Path(self.target_dir).is_absolute():
            raise ValueError("target_dir deve ser relativo à raiz do repositório")
        self.file_mode = parse_file_mode(self.file_mode)

    @property
    def hook_marker(self) -> HookMarker:
        return HookMarker(token=self.marker, anchored=self.marker_anchored)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "package_name": self.package_name,
            "marker": self.marker,
            "marker_anchored": self.marker_anchored,
            "hooks_dir": self.hooks_dir,
            "target_dir": self.target_dir,
            "file_mode": f"0{self.file_mode:o}",
        }


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Enums
    "HookAction",
    "SyncOperation",

    # Core models
    "HookMarker",
    "HookFile",
    "HookResult",
    "SyncReport",
    "HookStatus",
    "LifecycleSession",

    # Configuration
    "EnforceHooksConfig",
    "parse_file_mode",
    "DEFAULT_PACKAGE_NAME",
    "DEFAULT_MARKER",
    "DEFAULT_FILE_MODE",
]
