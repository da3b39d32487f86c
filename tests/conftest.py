import logging
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest

from rsvp_relay.mailerlite_client import MailerLiteClient
from rsvp_relay.relay import RsvpRelayHandler
from rsvp_relay.schemas import UpstreamResponse
from rsvp_relay.utils.secrets_manager import StaticCredentialProvider


class NetworkAccessError(RuntimeError):
    """Raised when any code attempts to use the network during tests."""


@pytest.fixture(autouse=True)
def _block_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Block all outbound network access for every test.

    - Patches common socket entrypoints (connect, connect_ex, create_connection, getaddrinfo)
    - Patches requests' Session.request
    """

    def raise_network(*args: Any, **kwargs: Any) -> Any:  # pragma: no cover - trivial guard
        raise NetworkAccessError(
            "Acesso à rede está desabilitado nos testes. Use mocks/stubs."
        )

    monkeypatch.setattr("socket.socket.connect", raise_network, raising=True)
    monkeypatch.setattr("socket.socket.connect_ex", raise_network, raising=True)
    monkeypatch.setattr("socket.create_connection", raise_network, raising=True)
    monkeypatch.setattr("socket.getaddrinfo", raise_network, raising=True)
    monkeypatch.setattr("requests.sessions.Session.request", raise_network, raising=True)


@pytest.fixture(autouse=True)
def _clean_secret_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Evita que a chave real do ambiente vaze para os testes."""
    for name in ("MAILERLITE_API_KEY", "SECRET_SOURCE", "DOTENV_PATH", "RSVP_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _propagate_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    """setup_logging desliga a propagação; o caplog precisa dela."""
    monkeypatch.setattr(logging.getLogger("rsvp_relay"), "propagate", True)


@pytest.fixture
def event_groups() -> Dict[str, str]:
    return {
        "Cleveland - April 18": "180251083036166100",
        "Phoenix - May 25": "180251214422737963",
    }


@pytest.fixture
def mock_client() -> MagicMock:
    """Cliente MailerLite falso que responde 201 por padrão"""
    client = MagicMock(spec=MailerLiteClient)
    client.create_subscriber.return_value = UpstreamResponse(
        status_code=201, body={"data": {"id": "123"}}
    )
    return client


@pytest.fixture
def make_handler(event_groups, mock_client):
    def _make(api_key: Optional[str] = "ml-test-key", groups: Optional[Dict[str, str]] = None):
        return RsvpRelayHandler(
            event_groups=event_groups if groups is None else groups,
            credentials=StaticCredentialProvider(api_key),
            client=mock_client,
        )
    return _make


@pytest.fixture
def handler(make_handler) -> RsvpRelayHandler:
    return make_handler()
