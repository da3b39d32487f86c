"""
Aplicação Flask que expõe o relay de RSVP.
"""
from datetime import datetime
from typing import Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import MethodNotAllowed

from .config import Config, DEFAULT_CONFIG_FILE
from .logging_config import setup_logging
from .mailerlite_client import MailerLiteClient
from .relay import RsvpRelayHandler
from .schemas import RelayRequest, RelayResponse

RELAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_handler(config: Config) -> RsvpRelayHandler:
    """Monta o handler com as dependências vindas da configuração."""
    mailerlite = config.mailerlite_config
    client = MailerLiteClient(base_url=mailerlite["base_url"], timeout=mailerlite["timeout"])
    return RsvpRelayHandler(
        event_groups=config.event_groups,
        credentials=config.credential_provider(),
        client=client,
    )


def to_flask_response(relay_response: RelayResponse) -> Response:
    if relay_response.status == 204:
        response = Response(status=relay_response.status)
    else:
        response = jsonify(relay_response.body)
        response.status_code = relay_response.status
    for name, value in relay_response.headers.items():
        response.headers[name] = value
    return response


def create_app(config_file: str = DEFAULT_CONFIG_FILE,
               handler: Optional[RsvpRelayHandler] = None,
               config: Optional[Config] = None) -> Flask:
    """
    Cria e configura a aplicação Flask.

    Args:
        config_file: Caminho para o arquivo de configuração
        handler: Handler pronto (substitui o construído a partir da configuração)
        config: Configuração já carregada

    Returns:
        Aplicação Flask configurada
    """
    config = config or Config(config_file)
    setup_logging(config.log_level)

    app = Flask(__name__)
    app.config['SERVER_HOST'] = config.server_config['host']
    app.config['SERVER_PORT'] = config.server_config['port']
    app.config['DEBUG'] = config.server_config['debug']

    cors = config.cors_config
    if cors['enabled']:
        CORS(app, resources={r"/*": {"origins": cors['origins']}})

    relay_handler = handler or build_handler(config)
    app.extensions['rsvp_relay'] = relay_handler

    def to_relay_request() -> RelayRequest:
        return RelayRequest(
            method=request.method,
            headers=dict(request.headers),
            body=request.get_json(silent=True),
        )

    def rsvp():
        return to_flask_response(relay_handler.handle(to_relay_request()))

    app.add_url_rule(
        config.rsvp_path,
        endpoint='rsvp',
        view_func=rsvp,
        methods=RELAY_METHODS,
        provide_automatic_options=False,
    )

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(error):
        # Verbos fora de RELAY_METHODS (TRACE, PROPFIND...) não chegam à view
        if request.path == config.rsvp_path:
            return to_flask_response(relay_handler.handle(to_relay_request()))
        return error

    @app.route('/health', methods=['GET'])
    def health_check():
        return {
            'status': 'ok',
            'timestamp': datetime.now().isoformat()
        }

    return app
