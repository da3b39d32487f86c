"""
Gerenciador de segredos para credenciais sensíveis.
Suporta os seguintes métodos de armazenamento:
- Variáveis de ambiente
- Arquivos .env (desenvolvimento)

Também define a abstração de provedor de credencial usada pelo relay.
"""
import os
import logging
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

MAILERLITE_API_KEY = "MAILERLITE_API_KEY"


class SecretSource(Enum):
    """Enum para os tipos de fontes de segredos suportados"""
    ENV = "env"
    DOTENV = "dotenv"


class SecretsManager:
    """Gerenciador de segredos para credenciais sensíveis"""

    def __init__(self,
                 source: SecretSource = SecretSource.ENV,
                 dotenv_path: str = ".env",
                 config_defaults: Dict[str, Any] = None):
        """
        Inicializa o gerenciador de segredos.

        Args:
            source: Fonte de segredos a ser usada
            dotenv_path: Caminho para o arquivo .env (se usando DOTENV)
            config_defaults: Valores padrão para fallback
        """
        self.source = source
        self.dotenv_path = dotenv_path
        self.config_defaults = config_defaults or {}
        self._dotenv_values: Dict[str, Optional[str]] = {}

        self._init_source()

    def _init_source(self):
        """Inicializa a fonte de segredos selecionada"""
        if self.source == SecretSource.DOTENV:
            if os.path.exists(self.dotenv_path):
                self._dotenv_values = dict(dotenv_values(self.dotenv_path))
            else:
                logger.warning(f"Arquivo .env não encontrado em {self.dotenv_path}. Usando variáveis de ambiente do sistema.")
                self.source = SecretSource.ENV

    def get_secret(self, key: str, default: str = None) -> Optional[str]:
        """
        Obtém um segredo da fonte configurada.

        Args:
            key: Nome da chave do segredo
            default: Valor padrão se o segredo não for encontrado

        Returns:
            Valor do segredo ou o valor padrão se não encontrado
        """
        # Variáveis de ambiente sempre sobrescrevem qualquer outra fonte
        env_value = os.environ.get(key)
        if env_value is not None:
            return env_value

        if self.source == SecretSource.DOTENV:
            value = self._dotenv_values.get(key)
            if value is not None:
                return value

        if key in self.config_defaults:
            return self.config_defaults.get(key)

        return default


class CredentialProvider(Protocol):
    """Fonte da chave de API do MailerLite"""

    def get_api_key(self) -> Optional[str]:
        ...


class SecretsCredentialProvider:
    """Lê a chave de API do SecretsManager a cada chamada"""

    def __init__(self, secrets_manager: SecretsManager, key: str = MAILERLITE_API_KEY):
        self.secrets_manager = secrets_manager
        self.key = key

    def get_api_key(self) -> Optional[str]:
        return self.secrets_manager.get_secret(self.key)


class StaticCredentialProvider:
    """Chave fixa, útil em testes e quando o relay é embutido em outra aplicação"""

    def __init__(self, api_key: Optional[str]):
        self._api_key = api_key

    def get_api_key(self) -> Optional[str]:
        return self._api_key
