"""
Cliente HTTP para a API de assinantes do MailerLite.
"""
import logging
from typing import Optional

import requests

from .errors import TransportError
from .schemas import UpstreamPayload, UpstreamResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://connect.mailerlite.com/api"


class MailerLiteClient:
    """Faz uma única tentativa de criar/atualizar um assinante no MailerLite"""

    def __init__(self,
                 base_url: str = DEFAULT_BASE_URL,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Args:
            base_url: URL base da API do MailerLite
            timeout: Timeout em segundos (None mantém o padrão do requests, sem limite)
            session: Sessão requests a reutilizar (None faz uma chamada avulsa por requisição)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session

    @property
    def subscribers_url(self) -> str:
        return f"{self.base_url}/subscribers"

    def create_subscriber(self, payload: UpstreamPayload, api_key: str) -> UpstreamResponse:
        """
        Envia o assinante ao MailerLite.

        Args:
            payload: Registro do assinante
            api_key: Chave de API (Bearer)

        Returns:
            Status e corpo JSON da resposta, seja 2xx ou não

        Raises:
            TransportError: em falha de rede ou corpo que não é JSON
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        try:
            post = self.session.post if self.session is not None else requests.post
            response = post(
                self.subscribers_url,
                json=payload.to_dict(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Falha ao conectar ao MailerLite: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Resposta do MailerLite não é JSON válido (status {response.status_code})"
            ) from e

        logger.debug("MailerLite respondeu %s", response.status_code)
        return UpstreamResponse(status_code=response.status_code, body=body)
