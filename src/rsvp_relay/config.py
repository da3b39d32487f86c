from pathlib import Path
from types import MappingProxyType
import yaml
import os
import logging
from dotenv import load_dotenv
from typing import Dict, Any, Mapping

from .mailerlite_client import DEFAULT_BASE_URL
from .utils.secrets_manager import (
    MAILERLITE_API_KEY, SecretsCredentialProvider, SecretsManager, SecretSource
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config/config.yaml"

# Grupos do MailerLite (Subscribers → Groups) por nome de evento
DEFAULT_EVENT_GROUPS: Mapping[str, str] = MappingProxyType({
    "Cleveland - April 18": "180251083036166100",
    "Phoenix - May 25": "180251214422737963",
    "Collingwood - June 7": "180251239077906214",
    "Baton Rouge - July 25": "180251255757604767",
})


class Config:
    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE):
        # Carregar variáveis de ambiente do arquivo .env
        load_dotenv()

        self.config_file = config_file
        self.config = self._load_yaml(config_file)

        self._event_groups = self._build_event_groups()
        self._init_secrets_manager()

    @staticmethod
    def _load_yaml(config_file: str) -> Dict[str, Any]:
        if not Path(config_file).exists():
            logger.warning(f"Arquivo de configuração {config_file} não encontrado. Usando valores padrão.")
            return {}
        with open(config_file, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file) or {}

    def _section(self, name: str) -> Dict[str, Any]:
        return self.config.get(name) or {}

    def _build_event_groups(self) -> Mapping[str, str]:
        groups = self._section("events").get("groups")
        if groups is None:
            return DEFAULT_EVENT_GROUPS
        # IDs numéricos no YAML viram inteiros; o MailerLite espera strings
        return MappingProxyType({str(event): str(group_id) for event, group_id in groups.items()})

    def _init_secrets_manager(self):
        """Inicializa o gerenciador de segredos com base nas configurações"""
        secret_source_str = os.getenv("SECRET_SOURCE", "env").lower()

        source_map = {
            "env": SecretSource.ENV,
            "dotenv": SecretSource.DOTENV,
        }
        source = source_map.get(secret_source_str, SecretSource.ENV)
        dotenv_path = os.getenv("DOTENV_PATH", ".env")

        self.secrets_manager = SecretsManager(source=source, dotenv_path=dotenv_path)
        logger.info(f"Usando fonte de segredos: {source.value}")

    @property
    def server_config(self) -> dict:
        server = self._section("server")
        return {
            "host": server.get("host", "0.0.0.0"),
            "port": int(server.get("port", 8080)),
            "debug": bool(server.get("debug", False)),
        }

    @property
    def rsvp_path(self) -> str:
        return self._section("rsvp").get("path", "/rsvp")

    @property
    def mailerlite_config(self) -> dict:
        mailerlite = self._section("mailerlite")
        timeout = mailerlite.get("timeout")
        return {
            "base_url": mailerlite.get("base_url", DEFAULT_BASE_URL),
            "timeout": float(timeout) if timeout is not None else None,
            "api_key_secret": mailerlite.get("api_key_secret", MAILERLITE_API_KEY),
        }

    @property
    def cors_config(self) -> dict:
        cors = self._section("cors")
        return {
            "enabled": cors.get("enabled", True),
            "origins": cors.get("origins", "*"),
        }

    @property
    def event_groups(self) -> Mapping[str, str]:
        """Mapa somente leitura de nome de evento para ID de grupo"""
        return self._event_groups

    @property
    def log_level(self) -> str:
        return str(self._section("logging").get("level", "INFO")).upper()

    def credential_provider(self) -> SecretsCredentialProvider:
        return SecretsCredentialProvider(
            self.secrets_manager, key=self.mailerlite_config["api_key_secret"]
        )
