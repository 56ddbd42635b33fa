"""
🪝 enforce-hooks - Git hooks enforced by your package manager

Plugin que instala os git hooks do projeto quando o pacote é instalado
ou atualizado, e remove apenas os hooks gerenciados quando é desinstalado.
"""

from .__version__ import __version__

__all__ = ["__version__"]
