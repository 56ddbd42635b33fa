"""
enforce-hooks - Command Line Interface
Entry point principal para todos os comandos do enforce-hooks.
"""

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from enforce_hooks.__version__ import __version__
from enforce_hooks.core.config_loader import (
    ConfigLoadError,
    ConfigValidationError,
    load_config,
    validate_config_file,
)
from enforce_hooks.core.events import EventParseError, load_events, load_events_file
from enforce_hooks.core.formatters import BaseFormatter, FormatterFactory, print_status
from enforce_hooks.core.models import SyncReport
from enforce_hooks.git.repository import NotGitRepositoryError
from enforce_hooks.installer.sync import HookSynchronizerError
from enforce_hooks.plugin import EnforceHooksPlugin


# =============================================================================
# Typer App Setup
# =============================================================================

app = typer.Typer(
    name="enforce-hooks",
    help="🪝 enforce-hooks - Git hooks enforced by your package manager",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Global Options
# =============================================================================

def version_callback(value: bool):
    """Callback para --version."""
    if value:
        console.print(f"🪝 enforce-hooks version {__version__}", style="bold cyan")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Mostra versão do enforce-hooks"
    )
):
    """
    🪝 enforce-hooks - Git hooks enforced by your package manager

    Instala os hooks empacotados em .git/hooks e remove apenas os hooks
    gerenciados (marcados com '# custom-hook').
    """
    pass


# =============================================================================
# Helpers
# =============================================================================

REPO_OPTION = typer.Option(
    None,
    "--repo",
    help="Diretório dentro do repositório (default: diretório atual)"
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Arquivo de configuração customizado"
)

FORMAT_OPTION = typer.Option(
    "console",
    "--format",
    "-f",
    help="Formato de output: console, compact, json"
)


def _build_plugin(repo: Optional[Path], config_file: Optional[Path]) -> EnforceHooksPlugin:
    """Carrega configuração e ativa o plugin, abortando em erros fatais."""
    try:
        config = load_config(config_file)
    except (ConfigLoadError, ConfigValidationError) as e:
        console.print(f"❌ Erro ao carregar configuração: {e}", style="red")
        raise typer.Exit(1)

    plugin = EnforceHooksPlugin(config=config, console=err_console)

    try:
        return plugin.activate(repository_path=repo)
    except NotGitRepositoryError as e:
        console.print(f"❌ Não é um repositório Git: {e}", style="red")
        raise typer.Exit(1)


def _create_formatter(format: str) -> BaseFormatter:
    """Valida o formato antes de qualquer alteração no repositório."""
    try:
        return FormatterFactory.create(format_type=format)
    except ValueError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)


def _print_reports(reports: List[SyncReport], formatter: BaseFormatter) -> None:
    if reports:
        typer.echo(formatter.format_reports(reports))


# =============================================================================
# Command: install
# =============================================================================

@app.command()
def install(
    repo: Optional[Path] = REPO_OPTION,
    config_file: Optional[Path] = CONFIG_OPTION,
    format: str = FORMAT_OPTION,
):
    """
    🪝 Instala os hooks empacotados

    Hooks que já existem no repositório nunca são sobrescritos.

    Exemplos:

    \b
    enforce-hooks install
    enforce-hooks install --repo ../outro-projeto --format json
    """
    formatter = _create_formatter(format)
    plugin = _build_plugin(repo, config_file)

    try:
        report = plugin.install_hooks()
    except HookSynchronizerError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Erro interno: {e}", style="red")
        raise typer.Exit(30)

    _print_reports([report], formatter)
    raise typer.Exit(report.exit_code)


# =============================================================================
# Command: uninstall
# =============================================================================

@app.command()
def uninstall(
    repo: Optional[Path] = REPO_OPTION,
    config_file: Optional[Path] = CONFIG_OPTION,
    format: str = FORMAT_OPTION,
):
    """
    🗑️ Remove os hooks gerenciados

    Apenas hooks com o marcador são removidos; hooks do usuário
    com o mesmo nome permanecem intactos.
    """
    formatter = _create_formatter(format)
    plugin = _build_plugin(repo, config_file)

    try:
        report = plugin.remove_managed_hooks()
    except HookSynchronizerError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Erro interno: {e}", style="red")
        raise typer.Exit(30)

    _print_reports([report], formatter)
    raise typer.Exit(report.exit_code)


# =============================================================================
# Command: status
# =============================================================================

@app.command()
def status(
    repo: Optional[Path] = REPO_OPTION,
    config_file: Optional[Path] = CONFIG_OPTION,
):
    """
    📊 Mostra status dos hooks empacotados no repositório
    """
    plugin = _build_plugin(repo, config_file)

    try:
        statuses = plugin.synchronizer.status()
    except HookSynchronizerError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Erro interno: {e}", style="red")
        raise typer.Exit(30)

    print_status(statuses, console, target_dir=str(plugin.synchronizer.target_dir))


# =============================================================================
# Command: dispatch
# =============================================================================

@app.command()
def dispatch(
    events_file: str = typer.Argument(
        ...,
        help="Arquivo YAML/JSON com os eventos ('-' para stdin)"
    ),
    repo: Optional[Path] = REPO_OPTION,
    config_file: Optional[Path] = CONFIG_OPTION,
    format: str = FORMAT_OPTION,
):
    """
    ⚡ Executa um ciclo de vida completo a partir de eventos

    Exemplo de arquivo:

    \b
    events:
      - event: post-package-install
        package: enforce-hooks
      - event: post-install-cmd
    """
    formatter = _create_formatter(format)

    try:
        if events_file == "-":
            events = load_events(sys.stdin.read())
        else:
            events = load_events_file(events_file)
    except EventParseError as e:
        console.print(f"❌ Erro ao carregar eventos: {e}", style="red")
        raise typer.Exit(1)

    plugin = _build_plugin(repo, config_file)

    try:
        reports = plugin.run_lifecycle(events)
    except HookSynchronizerError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Erro interno: {e}", style="red")
        raise typer.Exit(30)

    _print_reports(reports, formatter)

    if any(report.has_errors for report in reports):
        raise typer.Exit(1)


# =============================================================================
# Command Group: config
# =============================================================================

config_app = typer.Typer(help="⚙️ Gerencia configuração")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(
    config_file: Optional[Path] = CONFIG_OPTION,
):
    """
    📋 Mostra a configuração efetiva
    """
    try:
        config = load_config(config_file)
    except (ConfigLoadError, ConfigValidationError) as e:
        console.print(f"❌ Erro ao carregar configuração: {e}", style="red")
        raise typer.Exit(1)

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold yellow")
    table.add_column("Value")

    for key, value in config.to_dict().items():
        table.add_row(key, str(value))

    console.print(table)


@config_app.command("validate")
def config_validate(
    config_file: Path = typer.Argument(
        ...,
        help="Arquivo de configuração a validar"
    ),
):
    """
    ✅ Valida arquivo de configuração

    Exemplo:

    \b
    enforce-hooks config validate enforce-hooks.yaml
    """
    result = validate_config_file(config_file)

    for warning in result['warnings']:
        console.print(f"  ⚠️  {warning}", style="yellow")

    if result['valid']:
        console.print(f"✅ {config_file}: Válido!", style="green")
        raise typer.Exit(0)

    console.print(f"❌ {config_file}: {len(result['errors'])} erros encontrados\n", style="red")
    for error in result['errors']:
        console.print(f"  • {error}", style="red")

    raise typer.Exit(1)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    """Entry point principal."""
    app()


if __name__ == "__main__":
    main()
