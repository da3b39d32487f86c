"""
Modelos de entrada e saída do relay.
Utiliza marshmallow para validar a submissão e dataclasses para os registros derivados.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from marshmallow import EXCLUDE, Schema, fields, post_load, validate
from marshmallow import ValidationError as SchemaValidationError

from .errors import ValidationError


@dataclass(frozen=True)
class Submission:
    """Dados do formulário de RSVP de uma requisição"""
    email: str
    event: str
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True)
class UpstreamPayload:
    """Registro de assinante enviado ao MailerLite"""
    email: str
    name: str
    last_name: str
    rsvp_event: str
    groups: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "email": self.email,
            "fields": {
                "name": self.name,
                "last_name": self.last_name,
                "rsvp_event": self.rsvp_event,
            },
        }
        if self.groups is not None:
            data["groups"] = list(self.groups)
        return data


@dataclass(frozen=True)
class RelayRequest:
    """Requisição HTTP independente de framework"""
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass
class RelayResponse:
    """Resposta HTTP independente de framework"""
    status: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class UpstreamResponse:
    """Resultado de uma troca completa com o MailerLite"""
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _as_text(value: Any) -> str:
    return str(value) if value else ""


class SubmissionSchema(Schema):
    """Schema para validação da submissão de RSVP"""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1))
    # Nomes nunca rejeitam a submissão: vazios viram "", o resto vira texto
    firstName = fields.Raw(load_default="", allow_none=True)
    lastName = fields.Raw(load_default="", allow_none=True)
    event = fields.String(required=True, validate=validate.Length(min=1))

    @post_load
    def make_submission(self, data: Dict[str, Any], **kwargs) -> Submission:
        return Submission(
            email=data["email"],
            event=data["event"],
            first_name=_as_text(data.get("firstName")),
            last_name=_as_text(data.get("lastName")),
        )


_submission_schema = SubmissionSchema()


def load_submission(body: Any) -> Submission:
    """
    Valida o corpo da requisição e devolve a submissão.

    Args:
        body: JSON já decodificado (ou None quando ausente/inválido)

    Returns:
        Submission validada

    Raises:
        ValidationError: se email ou event estiverem ausentes, vazios ou não forem texto
    """
    if not isinstance(body, dict):
        body = {}
    try:
        return _submission_schema.load(body)
    except SchemaValidationError as e:
        raise ValidationError(detail=str(e.messages))
