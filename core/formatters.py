"""
enforce-hooks - Output Formatters
Formatação de relatórios de sincronização (terminal, JSON, etc).
"""

import io
import json
import sys
from typing import List, Optional, TextIO

from rich.console import Console
from rich.table import Table

from .models import HookAction, HookResult, HookStatus, SyncOperation, SyncReport


ACTION_ICONS = {
    HookAction.INSTALLED: "✅",
    HookAction.REMOVED: "🗑️",
    HookAction.SKIPPED: "⏭️",
    HookAction.KEPT: "🔒",
    HookAction.MISSING: "➖",
    HookAction.ERROR: "❌",
}

ACTION_STYLES = {
    HookAction.INSTALLED: "green",
    HookAction.REMOVED: "green",
    HookAction.SKIPPED: "yellow",
    HookAction.KEPT: "yellow",
    HookAction.MISSING: "dim",
    HookAction.ERROR: "red",
}


def is_tty(file: TextIO = sys.stdout) -> bool:
    """Verifica se o output é um terminal (suporta cores)."""
    return hasattr(file, 'isatty') and file.isatty()


# =============================================================================
# Base Formatter
# =============================================================================

class BaseFormatter:
    """
    Classe base para formatters.
    """

    def __init__(self, use_colors: Optional[bool] = None):
        """
        Args:
            use_colors: Se True, usa cores ANSI. Se None, detecta automaticamente.
        """
        if use_colors is None:
            self.use_colors = is_tty()
        else:
            self.use_colors = use_colors

    def format_report(self, report: SyncReport) -> str:
        """Formata SyncReport (deve ser implementado por subclasses)."""
        raise NotImplementedError

    def format_reports(self, reports: List[SyncReport]) -> str:
        """Formata vários relatórios (ex: um ciclo de vida completo)."""
        return "\n".join(self.format_report(report) for report in reports)


# =============================================================================
# Console Formatter (Default)
# =============================================================================

class ConsoleFormatter(BaseFormatter):
    """
    Formatter para output no terminal (tabela rich).
    """

    def __init__(self, use_colors: Optional[bool] = None, width: int = 100):
        super().__init__(use_colors)
        self.width = width

    def format_report(self, report: SyncReport) -> str:
        title = (
            "Instalação de Hooks"
            if report.operation == SyncOperation.INSTALL
            else "Remoção de Hooks"
        )
        table = Table(title=title)
        table.add_column("Hook", style="cyan")
        table.add_column("Status")
        table.add_column("Mensagem")

        for result in report.results:
            table.add_row(
                result.hook_name,
                f"{ACTION_ICONS[result.action]} {result.action.value}",
                result.message,
                style=ACTION_STYLES[result.action] if self.use_colors else None,
            )

        buffer = io.StringIO()
        console = Console(
            file=buffer,
            force_terminal=self.use_colors,
            no_color=not self.use_colors,
            width=self.width,
        )
        console.print(table)

        if not report.results:
            console.print("Nenhum hook empacotado encontrado")

        return buffer.getvalue().rstrip("\n")


# =============================================================================
# Compact Formatter
# =============================================================================

class CompactFormatter(BaseFormatter):
    """
    Formatter compacto (uma linha por hook).
    Útil para logs de CI.
    """

    def __init__(self):
        super().__init__(use_colors=False)

    def format_report(self, report: SyncReport) -> str:
        lines = [self.format_result(report.operation, r) for r in report.results]
        return "\n".join(lines)

    def format_result(self, operation: SyncOperation, result: HookResult) -> str:
        return f"[{operation.value}] {result.hook_name}: {result.action.value} - {result.message}"


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter(BaseFormatter):
    """
    Formatter JSON (machine-readable).
    """

    def __init__(self, pretty: bool = True):
        super().__init__(use_colors=False)
        self.pretty = pretty

    def _dumps(self, data) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)

    def format_report(self, report: SyncReport) -> str:
        return self._dumps(report.to_dict())

    def format_reports(self, reports: List[SyncReport]) -> str:
        return self._dumps([report.to_dict() for report in reports])


# =============================================================================
# Status
# =============================================================================

def print_status(statuses: List[HookStatus], console: Console, target_dir: str = "") -> None:
    """Printa status dos hooks (helper para CLI)."""
    if target_dir:
        console.print(f"\n📂 Hooks dir: {target_dir}\n")

    table = Table(title="Status dos Hooks")
    table.add_column("Hook", style="cyan")
    table.add_column("Instalado", style="yellow")
    table.add_column("Gerenciado", style="green")
    table.add_column("Executável", style="magenta")
    table.add_column("Atualizado", style="blue")

    for status in statuses:
        table.add_row(
            status.hook_name,
            "✅" if status.installed else "❌",
            "✅" if status.managed else "❌",
            "✅" if status.executable else "❌",
            "✅" if status.up_to_date else "❌",
        )

    console.print(table)

    for status in statuses:
        if status.error:
            console.print(f"⚠️  {status.hook_name}: {status.error}", style="yellow")


# =============================================================================
# Factory
# =============================================================================

class FormatterFactory:
    """Factory para criar formatters."""

    @staticmethod
    def create(
        format_type: str,
        use_colors: Optional[bool] = None,
        pretty: bool = True
    ) -> BaseFormatter:
        """
        Cria formatter apropriado.

        Args:
            format_type: Tipo do formatter (console, compact, json)
            use_colors: Usar cores (apenas console)
            pretty: Pretty print JSON (apenas json)
        """
        format_type = format_type.lower()

        if format_type == "console":
            return ConsoleFormatter(use_colors=use_colors)

        elif format_type == "compact":
            return CompactFormatter()

        elif format_type == "json":
            return JSONFormatter(pretty=pretty)

        else:
            raise ValueError(
                f"Formato desconhecido: {format_type}. "
                f"Formatos válidos: console, compact, json"
            )


__all__ = [
    'BaseFormatter',
    'ConsoleFormatter',
    'CompactFormatter',
    'JSONFormatter',
    'FormatterFactory',
    'print_status',
    'is_tty',
]
