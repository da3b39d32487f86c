"""
Handler do RSVP: valida a submissão, monta o payload do MailerLite, faz a chamada e repassa o resultado.
"""
import logging
from types import MappingProxyType
from typing import Dict, Mapping

from .errors import ConfigurationError, RelayError, TransportError, UpstreamError
from .mailerlite_client import MailerLiteClient
from .schemas import (
    RelayRequest, RelayResponse, Submission, UpstreamPayload, load_submission
)
from .utils.secrets_manager import CredentialProvider

logger = logging.getLogger(__name__)

ALLOW_ORIGIN = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": "Content-Type",
}


def build_upstream_payload(submission: Submission, event_groups: Mapping[str, str]) -> UpstreamPayload:
    """
    Monta o registro do assinante.

    O nome do evento é uma chave opaca: a busca no mapa é exata, sem normalização.
    """
    group_id = event_groups.get(submission.event)
    if group_id is None:
        logger.debug("Evento sem grupo configurado: %r", submission.event)
    return UpstreamPayload(
        email=submission.email,
        name=submission.first_name,
        last_name=submission.last_name,
        rsvp_event=submission.event,
        groups=(group_id,) if group_id is not None else None,
    )


class RsvpRelayHandler:
    """Relay sem estado entre o formulário de RSVP e o MailerLite"""

    def __init__(self,
                 event_groups: Mapping[str, str],
                 credentials: CredentialProvider,
                 client: MailerLiteClient):
        self.event_groups = MappingProxyType(dict(event_groups))
        self.credentials = credentials
        self.client = client

    def handle(self, request: RelayRequest) -> RelayResponse:
        method = (request.method or "").upper()

        if method == "OPTIONS":
            return self._respond(204, None, PREFLIGHT_HEADERS)

        if method != "POST":
            return self._respond(405, {"error": "Method not allowed"})

        try:
            return self._relay(request)
        except UpstreamError as e:
            logger.warning("MailerLite recusou o assinante: status %s", e.status_code)
            return self._respond(e.status_code, e.to_body())
        except ConfigurationError as e:
            logger.error("Erro de configuração: %s", e.detail)
            return self._respond(e.status_code, e.to_body())
        except TransportError as e:
            logger.error("MailerLite API error: %s", e.detail, exc_info=True)
            return self._respond(e.status_code, e.to_body())
        except RelayError as e:
            return self._respond(e.status_code, e.to_body())
        except Exception:
            logger.exception("MailerLite API error")
            return self._respond(TransportError.status_code, TransportError().to_body())

    def _relay(self, request: RelayRequest) -> RelayResponse:
        submission = load_submission(request.body)

        api_key = (self.credentials.get_api_key() or "").strip()
        if not api_key:
            raise ConfigurationError("MAILERLITE_API_KEY não definida ou vazia")

        payload = build_upstream_payload(submission, self.event_groups)
        upstream = self.client.create_subscriber(payload, api_key)

        if not upstream.ok:
            raise UpstreamError(upstream.status_code, upstream.body)
        return self._respond(upstream.status_code, upstream.body)

    @staticmethod
    def _respond(status: int, body, extra_headers: Dict[str, str] = None) -> RelayResponse:
        headers = dict(ALLOW_ORIGIN)
        if extra_headers:
            headers.update(extra_headers)
        return RelayResponse(status=status, body=body, headers=headers)
