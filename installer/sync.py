"""
enforce-hooks - Hook Synchronizer
Copia os hooks empacotados para .git/hooks e remove os hooks gerenciados.
"""

import os
import tempfile
from pathlib import Path
from typing import List, Optional

from ..core.models import (
    DEFAULT_FILE_MODE,
    HookAction,
    HookFile,
    HookMarker,
    HookResult,
    HookStatus,
    SyncOperation,
    SyncReport,
)


# =============================================================================
# Exceptions
# =============================================================================

class HookSynchronizerError(Exception):
    """Exception raised when hook synchronization fails."""
    pass


class HookSourceError(HookSynchronizerError):
    """Diretório de hooks empacotados ausente ou ilegível."""
    pass


# =============================================================================
# Hook Synchronizer Class
# =============================================================================

class HookSynchronizer:
    """Sincroniza hooks entre o diretório do plugin e o repositório."""

    def __init__(
        self,
        source_dir: Path,
        target_dir: Path,
        marker: Optional[HookMarker] = None,
        file_mode: int = DEFAULT_FILE_MODE,
    ):
        """
        Inicializa o sincronizador.

        Args:
            source_dir: Diretório com os hooks empacotados (somente leitura)
            target_dir: Diretório de hooks do repositório (ex: .git/hooks)
            marker: Marcador de hooks gerenciados
            file_mode: Permissões dos hooks instalados
        """
        self.source_dir = Path(source_dir)
        self.target_dir = Path(target_dir)
        self.marker = marker or HookMarker()
        self.file_mode = file_mode

    def list_source_hooks(self) -> List[Path]:
        """
        Lista (recursivamente) os arquivos do diretório de origem.

        Raises:
            HookSourceError: Se o diretório de origem não existir
        """
        if not self.source_dir.is_dir():
            raise HookSourceError(
                f"Diretório de hooks não encontrado: {self.source_dir}"
            )

        try:
            return sorted(p for p in self.source_dir.rglob("*") if p.is_file())
        except OSError as e:
            raise HookSourceError(f"Erro ao listar hooks: {e}")

    def install_hooks(self) -> SyncReport:
        """Instala todos os hooks empacotados que ainda não existem no destino."""
        report = SyncReport(SyncOperation.INSTALL, self.source_dir, self.target_dir)

        for source in self.list_source_hooks():
            report.add(self.install_hook(source))

        return report

    def install_hook(self, source: Path) -> HookResult:
        """
        Instala um hook específico.

        Hooks já existentes nunca são sobrescritos, mesmo com conteúdo
        diferente do empacotado.
        """
        hook_path = self.target_dir / source.name

        if hook_path.exists():
            return HookResult(
                hook_name=source.name,
                action=HookAction.SKIPPED,
                message=f"{source.name} já existe, pulando ...",
                path=hook_path,
            )

        try:
            hook = HookFile.read(source, self.marker)
        except OSError as e:
            return HookResult(
                hook_name=source.name,
                action=HookAction.ERROR,
                message=f"Erro ao ler hook empacotado: {e}",
                path=source,
            )

        try:
            self._write_hook(hook_path, hook.content)
        except OSError as e:
            return HookResult(
                hook_name=hook.name,
                action=HookAction.ERROR,
                message=f"Erro ao instalar hook: {e}",
                path=hook_path,
            )

        return HookResult(
            hook_name=hook.name,
            action=HookAction.INSTALLED,
            message="Hook instalado com sucesso",
            path=hook_path,
        )

    def remove_managed_hooks(self) -> SyncReport:
        """Remove do destino os hooks empacotados que contêm o marcador."""
        report = SyncReport(SyncOperation.REMOVE, self.source_dir, self.target_dir)

        for source in self.list_source_hooks():
            report.add(self.remove_hook(source.name))

        return report

    def remove_hook(self, hook_name: str) -> HookResult:
        """Remove um hook do destino somente se ele for gerenciado."""
        hook_path = self.target_dir / hook_name

        if not hook_path.is_file():
            return HookResult(
                hook_name=hook_name,
                action=HookAction.MISSING,
                message="Hook não instalado",
                path=hook_path,
            )

        try:
            installed = HookFile.read(hook_path, self.marker)
        except OSError as e:
            return HookResult(
                hook_name=hook_name,
                action=HookAction.ERROR,
                message=f"Erro ao ler hook: {e}",
                path=hook_path,
            )

        if not installed.managed:
            return HookResult(
                hook_name=hook_name,
                action=HookAction.KEPT,
                message="Hook sem marcador (não removido)",
                path=hook_path,
            )

        try:
            hook_path.unlink()
        except OSError as e:
            return HookResult(
                hook_name=hook_name,
                action=HookAction.ERROR,
                message=f"Erro ao remover hook: {e}",
                path=hook_path,
            )

        return HookResult(
            hook_name=hook_name,
            action=HookAction.REMOVED,
            message="Hook removido",
            path=hook_path,
        )

    def status(self) -> List[HookStatus]:
        """Retorna status detalhado de cada hook empacotado."""
        statuses = []

        for source in self.list_source_hooks():
            hook_path = self.target_dir / source.name

            if not hook_path.is_file():
                statuses.append(HookStatus(hook_name=source.name, installed=False))
                continue

            try:
                installed = HookFile.read(hook_path, self.marker)
                bundled = source.read_bytes()
                statuses.append(HookStatus(
                    hook_name=source.name,
                    installed=True,
                    managed=installed.managed,
                    executable=hook_path.stat().st_mode & 0o111 != 0,
                    up_to_date=installed.content == bundled,
                ))
            except OSError as e:
                statuses.append(HookStatus(
                    hook_name=source.name,
                    installed=True,
                    error=str(e),
                ))

        return statuses

    def _write_hook(self, hook_path: Path, content: bytes) -> None:
        """Escreve o hook via arquivo temporário + rename (sem escrita parcial visível)."""
        hook_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{hook_path.name}.", suffix=".tmp", dir=hook_path.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            tmp_path.chmod(self.file_mode)
            os.replace(tmp_path, hook_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise


__all__ = [
    "HookSynchronizer",
    "HookSynchronizerError",
    "HookSourceError",
]
