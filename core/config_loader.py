"""
enforce-hooks - Config Loader
Carrega e valida a configuração do arquivo YAML.
"""

from pathlib import Path
from typing import Dict, Any, Optional, Union
import yaml

from ..config import DEFAULT_CONFIG_FILE
from .models import EnforceHooksConfig


# =============================================================================
# Exceções Customizadas
# =============================================================================

class ConfigLoadError(Exception):
    """Erro ao carregar arquivo de configuração."""
    pass


class ConfigValidationError(Exception):
    """Erro de validação de um campo da configuração."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"Campo '{field_name}': {message}")


KNOWN_FIELDS = (
    "version",
    "package_name",
    "marker",
    "marker_anchored",
    "hooks_dir",
    "target_dir",
    "file_mode",
)

STRING_FIELDS = ("version", "package_name", "marker", "hooks_dir", "target_dir")


# =============================================================================
# Loader Principal
# =============================================================================

class ConfigLoader:
    """
    Carrega e valida a configuração do YAML.

    Responsabilidades:
    - Ler arquivo YAML
    - Mesclar com os valores padrão
    - Converter para EnforceHooksConfig
    """

    def __init__(self, strict: bool = True):
        """
        Args:
            strict: Se True, rejeita campos desconhecidos.
        """
        self.strict = strict

    def read_file(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Lê um arquivo YAML e retorna o dicionário bruto.

        Raises:
            ConfigLoadError: Se não conseguir ler ou parsear o arquivo
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise ConfigLoadError(f"Arquivo não encontrado: {filepath}")

        if not filepath.is_file():
            raise ConfigLoadError(f"Path não é um arquivo: {filepath}")

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Erro ao parsear YAML: {e}")
        except OSError as e:
            raise ConfigLoadError(f"Erro ao ler arquivo: {e}")

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigLoadError("YAML deve conter um objeto no nível raiz")

        return data

    def load_from_file(
        self,
        filepath: Union[str, Path],
        defaults: Optional[Dict[str, Any]] = None,
    ) -> EnforceHooksConfig:
        """
        Carrega configuração de um arquivo YAML.

        Args:
            filepath: Caminho para o arquivo
            defaults: Valores base sobrescritos pelo arquivo

        Returns:
            EnforceHooksConfig validada
        """
        data = dict(defaults or {})
        data.update(self.read_file(filepath))
        return self.load_from_dict(data)

    def load_from_dict(self, data: Dict[str, Any]) -> EnforceHooksConfig:
        """
        Carrega configuração de um dicionário (já parseado do YAML).

        Raises:
            ConfigValidationError: Se algum campo for inválido
        """
        if not isinstance(data, dict):
            raise ConfigLoadError("Configuração deve ser um objeto")

        unknown = [key for key in data if key not in KNOWN_FIELDS]
        if unknown and self.strict:
            raise ConfigValidationError(unknown[0], "campo desconhecido")

        values = {key: data[key] for key in KNOWN_FIELDS if key in data}

        for key in STRING_FIELDS:
            if key in values:
                if key == "version" and isinstance(values[key], (int, float)):
                    values[key] = str(values[key])
                elif not isinstance(values[key], str):
                    raise ConfigValidationError(key, "deve ser uma string")

        if "marker_anchored" in values and not isinstance(values["marker_anchored"], bool):
            raise ConfigValidationError("marker_anchored", "deve ser true ou false")

        try:
            return EnforceHooksConfig(**values)
        except ValueError as e:
            raise ConfigValidationError(self._field_from_error(e), str(e))

    @staticmethod
    def _field_from_error(error: ValueError) -> str:
        message = str(error)
        for key in KNOWN_FIELDS:
            if message.startswith(key):
                return key
        return "config"


# =============================================================================
# Funções de conveniência
# =============================================================================

def default_config_file() -> Path:
    """Retorna o caminho do arquivo de configuração padrão."""
    return DEFAULT_CONFIG_FILE


def load_default_config() -> EnforceHooksConfig:
    """
    Carrega a configuração padrão empacotada com o plugin.

    Raises:
        ConfigLoadError: Se o arquivo padrão não existir
    """
    config_file = default_config_file()

    if not config_file.exists():
        raise ConfigLoadError(
            f"Arquivo de configuração padrão não encontrado: {config_file}"
        )

    return ConfigLoader().load_from_file(config_file)


def load_config(filepath: Optional[Union[str, Path]] = None) -> EnforceHooksConfig:
    """
    Carrega configuração do usuário mesclada sobre a padrão.

    Args:
        filepath: Arquivo do usuário (None = apenas a padrão)
    """
    if filepath is None:
        return load_default_config()

    loader = ConfigLoader()
    defaults = loader.read_file(default_config_file())
    return loader.load_from_file(filepath, defaults=defaults)


def validate_config_file(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Valida um arquivo com as mesmas regras de load_config.

    Returns:
        Dict com resultados da validação:
        {
            'valid': bool,
            'errors': List[str],
            'warnings': List[str],
        }
    """
    result: Dict[str, Any] = {
        'valid': True,
        'errors': [],
        'warnings': [],
    }

    try:
        config = load_config(filepath)

        if config.file_mode & 0o100 == 0:
            result['warnings'].append(
                f"file_mode 0{config.file_mode:o} não torna os hooks executáveis"
            )

    except (ConfigLoadError, ConfigValidationError) as e:
        result['valid'] = False
        result['errors'].append(str(e))

    return result


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    'ConfigLoader',
    'ConfigLoadError',
    'ConfigValidationError',
    'default_config_file',
    'load_config',
    'load_default_config',
    'validate_config_file',
]
