"""Pytest configuration and fixtures."""

import io

import pytest
from pathlib import Path
from rich.console import Console

from enforce_hooks.core.models import EnforceHooksConfig, HookMarker
from enforce_hooks.installer.sync import HookSynchronizer
from enforce_hooks.plugin import EnforceHooksPlugin


PRE_COMMIT = b"#!/bin/sh\n# custom-hook\necho hi"
PRE_PUSH = b"#!/bin/sh\n# custom-hook\nexit 0\n"


@pytest.fixture
def temp_git_repo(tmp_path):
    """Cria repositório git temporário."""
    import subprocess

    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    subprocess.run(["git", "init", "-q"], cwd=repo_dir, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"],
        cwd=repo_dir,
        check=True
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=repo_dir,
        check=True
    )

    return repo_dir.resolve()


@pytest.fixture
def plugin_dir(tmp_path):
    """Diretório de plugin com hooks empacotados."""
    plugin = tmp_path / "plugin"
    hooks = plugin / "hooks"
    hooks.mkdir(parents=True)

    (hooks / "pre-commit").write_bytes(PRE_COMMIT)
    (hooks / "pre-push").write_bytes(PRE_PUSH)

    return plugin


@pytest.fixture
def target_dir(tmp_path):
    """Diretório de destino vazio (simula .git/hooks)."""
    target = tmp_path / "target" / "hooks"
    target.mkdir(parents=True)
    return target


@pytest.fixture
def synchronizer(plugin_dir, target_dir):
    return HookSynchronizer(
        source_dir=plugin_dir / "hooks",
        target_dir=target_dir,
        marker=HookMarker(),
    )


@pytest.fixture
def console():
    """Console rich gravando em memória."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def plugin(temp_git_repo, plugin_dir, console):
    """Plugin ativado sobre o repositório temporário."""
    return EnforceHooksPlugin(config=EnforceHooksConfig(), console=console).activate(
        repository_path=temp_git_repo,
        plugin_path=plugin_dir,
    )


@pytest.fixture
def git_hooks_dir(temp_git_repo) -> Path:
    return temp_git_repo / ".git" / "hooks"
