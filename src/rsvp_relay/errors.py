"""
Hierarquia de erros do relay.

Cada erro sabe qual status HTTP e qual mensagem pública devem chegar ao cliente.
Detalhes internos ficam apenas no log.
"""
from typing import Any, Dict, Optional


class RelayError(Exception):
    """Erro base do relay"""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.public_message}


class ValidationError(RelayError):
    """Submissão inválida (falha do cliente)"""

    status_code = 400
    public_message = "email and event are required"


class ConfigurationError(RelayError):
    """Credencial do MailerLite ausente (falha do operador)"""

    status_code = 500
    public_message = "Server configuration error"


class TransportError(RelayError):
    """Falha de rede ou resposta ilegível ao chamar o MailerLite"""

    status_code = 500
    public_message = "Internal server error"


class UpstreamError(RelayError):
    """
    Resposta não-2xx do MailerLite.

    Não é uma falha do relay: o corpo e o status são repassados sem alteração.
    """

    def __init__(self, status_code: int, body: Any):
        super().__init__(f"MailerLite respondeu {status_code}")
        self.status_code = status_code
        self.body = body

    def to_body(self) -> Any:
        return self.body
