"""
enforce-hooks - Git Repository
Localiza a raiz do repositório e o diretório de hooks.
"""

import subprocess
from pathlib import Path
from typing import List, Optional


# =============================================================================
# Exceções
# =============================================================================

class GitError(Exception):
    """Erro ao executar comando git."""
    pass


class NotGitRepositoryError(GitError):
    """Diretório não é um repositório git."""
    pass


# =============================================================================
# Git Repository
# =============================================================================

class GitRepository:
    """
    Repositório git de destino dos hooks.

    Responsabilidades:
    - Resolver a raiz do repositório (git rev-parse --show-toplevel)
    - Resolver o diretório de hooks (suporta worktrees)
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: Qualquer diretório dentro do repositório (default: diretório atual)

        Raises:
            NotGitRepositoryError: Se a raiz não puder ser determinada
        """
        self.path = Path(path) if path else Path.cwd()
        self.root = self._find_root()

    def hooks_dir(self, target_dir: str = ".git/hooks") -> Path:
        """
        Resolve o diretório de hooks dentro do repositório.

        Quando .git é um arquivo (worktree ou submódulo), segue o
        ponteiro 'gitdir:' para o diretório git real.
        """
        target = Path(target_dir)
        parts = target.parts

        if parts and parts[0] == ".git":
            git_dir = self._resolve_git_dir()
            return git_dir.joinpath(*parts[1:])

        return self.root / target

    # =========================================================================
    # Helpers Privados
    # =========================================================================

    def _find_root(self) -> Path:
        """Obtém a raiz do repositório."""
        if not self.path.is_dir():
            raise NotGitRepositoryError(f"Diretório não encontrado: {self.path}")

        try:
            output = self._run_git_command(['git', 'rev-parse', '--show-toplevel'])
        except GitError as e:
            raise NotGitRepositoryError(
                f"Diretório não é um repositório git: {self.path}\n{e}"
            )

        root = output.strip()
        if not root:
            raise NotGitRepositoryError(
                f"Não foi possível determinar a raiz do repositório: {self.path}"
            )

        return Path(root).resolve()

    def _resolve_git_dir(self) -> Path:
        """Encontra o diretório .git real (suporta worktrees)."""
        git_path = self.root / ".git"

        if git_path.is_file():
            try:
                git_content = git_path.read_text().strip()
            except OSError as e:
                raise GitError(f"Erro ao ler {git_path}: {e}")

            if git_content.startswith("gitdir:"):
                real_git_dir = Path(git_content.split(":", 1)[1].strip())
                if not real_git_dir.is_absolute():
                    real_git_dir = self.root / real_git_dir
                return real_git_dir

        return git_path

    def _run_git_command(self, cmd: List[str]) -> str:
        """
        Executa comando git e retorna output.

        Raises:
            GitError: Se o comando falhar
        """
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise GitError("Git não encontrado no PATH")
        except OSError as e:
            raise GitError(f"Erro ao executar git: {e}")

        if result.returncode != 0:
            raise GitError(
                f"Comando git falhou: {' '.join(cmd)}\n"
                f"Stderr: {result.stderr.strip()}"
            )

        return result.stdout


# =============================================================================
# Helper Functions
# =============================================================================

def find_repository_root(path: Optional[Path] = None) -> Path:
    """
    Retorna a raiz do repositório git que contém path.

    Raises:
        NotGitRepositoryError: Se path não estiver em um repositório
    """
    return GitRepository(path).root


__all__ = [
    'GitError',
    'GitRepository',
    'NotGitRepositoryError',
    'find_repository_root',
]
