"""
enforce-hooks - Plugin
Reage ao ciclo de vida do gerenciador de pacotes e sincroniza os hooks.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console

from .git.repository import GitRepository
from .installer.sync import HookSynchronizer
from .core.config_loader import load_default_config
from .core.events import (
    LifecycleCompleteEvent,
    LifecycleEvent,
    PackageEvent,
    UninstallEvent,
    normalize_package_name,
)
from .core.models import EnforceHooksConfig, HookAction, LifecycleSession, SyncReport


PLUGIN_DIR = Path(__file__).resolve().parent


# =============================================================================
# Exceções
# =============================================================================

class PluginNotActivatedError(Exception):
    """Operação executada antes de activate()."""
    pass


# =============================================================================
# Plugin
# =============================================================================

class EnforceHooksPlugin:
    """
    Plugin que instala os git hooks empacotados.

    Fluxo de uma execução:
    1. begin_lifecycle() cria a sessão
    2. handle() recebe cada evento de pacote (observe)
    3. handle() recebe o evento de fim de ciclo (finalize_lifecycle)
    """

    def __init__(
        self,
        config: Optional[EnforceHooksConfig] = None,
        console: Optional[Console] = None,
    ):
        self.config = config or load_default_config()
        self.console = console or Console()
        self.repository_path: Optional[Path] = None
        self.plugin_path: Optional[Path] = None
        self._synchronizer: Optional[HookSynchronizer] = None

    def activate(
        self,
        repository_path: Optional[Path] = None,
        plugin_path: Optional[Path] = None,
    ) -> "EnforceHooksPlugin":
        """
        Resolve os caminhos de origem e destino.

        Args:
            repository_path: Diretório dentro do repositório (default: cwd)
            plugin_path: Diretório do plugin (default: pacote instalado)

        Raises:
            NotGitRepositoryError: Se a raiz do repositório não for encontrada
        """
        repository = GitRepository(repository_path)
        self.repository_path = repository.root
        self.plugin_path = Path(plugin_path).resolve() if plugin_path else PLUGIN_DIR

        self._synchronizer = HookSynchronizer(
            source_dir=self.plugin_path / self.config.hooks_dir,
            target_dir=repository.hooks_dir(self.config.target_dir),
            marker=self.config.hook_marker,
            file_mode=self.config.file_mode,
        )
        return self

    @property
    def synchronizer(self) -> HookSynchronizer:
        if self._synchronizer is None:
            raise PluginNotActivatedError("Plugin não ativado: chame activate() primeiro")
        return self._synchronizer

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def begin_lifecycle(self) -> LifecycleSession:
        """Inicia uma execução com o flag de instalação zerado."""
        return LifecycleSession()

    def is_tracked(self, event: PackageEvent) -> bool:
        """Retorna True se o evento é do pacote rastreado."""
        return (
            normalize_package_name(event.package_name)
            == normalize_package_name(self.config.package_name)
        )

    def observe(self, event: PackageEvent, session: LifecycleSession) -> Optional[SyncReport]:
        """
        Processa um evento de pacote.

        Install/update apenas marcam a instalação como pendente;
        uninstall remove imediatamente os hooks gerenciados.
        """
        if not self.is_tracked(event):
            return None

        if isinstance(event, UninstallEvent):
            session.cancel_install()
            return self.remove_managed_hooks()

        session.request_install()
        return None

    def finalize_lifecycle(self, session: LifecycleSession) -> Optional[SyncReport]:
        """Instala os hooks se um install/update do pacote foi observado."""
        if session.consume():
            return self.install_hooks()
        return None

    def handle(self, event: LifecycleEvent, session: LifecycleSession) -> Optional[SyncReport]:
        """Ponto de entrada único para qualquer evento do ciclo de vida."""
        if isinstance(event, LifecycleCompleteEvent):
            return self.finalize_lifecycle(session)
        return self.observe(event, session)

    def run_lifecycle(self, events: Iterable[LifecycleEvent]) -> List[SyncReport]:
        """Executa uma sequência completa de eventos em uma sessão nova."""
        session = self.begin_lifecycle()
        reports = []

        for event in events:
            report = self.handle(event, session)
            if report is not None:
                reports.append(report)

        return reports

    # =========================================================================
    # Sync
    # =========================================================================

    def install_hooks(self) -> SyncReport:
        report = self.synchronizer.install_hooks()
        self._write_notices(report)
        return report

    def remove_managed_hooks(self) -> SyncReport:
        report = self.synchronizer.remove_managed_hooks()
        self._write_notices(report)
        return report

    def _write_notices(self, report: SyncReport) -> None:
        for result in report.results:
            if result.action == HookAction.SKIPPED:
                self.console.print(result.message, markup=False, highlight=False)
            elif result.action == HookAction.ERROR:
                self.console.print(
                    f"❌ {result.hook_name}: {result.message}",
                    style="red",
                    markup=False,
                    highlight=False,
                )


__all__ = [
    "EnforceHooksPlugin",
    "PluginNotActivatedError",
    "PLUGIN_DIR",
]
