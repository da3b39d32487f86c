import os
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .app import create_app
from .config import Config, DEFAULT_CONFIG_FILE

app = typer.Typer(help="RSVP relay para o MailerLite")

_CONSOLE: Optional[Console] = None


def get_console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False, soft_wrap=False)
    return _CONSOLE


def _config_file(config_file: Optional[str]) -> str:
    return config_file or os.environ.get("RSVP_CONFIG_FILE", DEFAULT_CONFIG_FILE)


@app.command()
def serve(
    config_file: Optional[str] = typer.Option(None, "--config", help="Arquivo YAML de configuração"),
    host: Optional[str] = typer.Option(None, help="Host do servidor"),
    port: Optional[int] = typer.Option(None, help="Porta do servidor"),
    debug: bool = typer.Option(False, "--debug", help="Modo debug do Flask"),
):
    """Inicia o servidor HTTP do relay."""
    config = Config(_config_file(config_file))
    flask_app = create_app(config=config)
    server = config.server_config
    flask_app.run(
        host=host or server["host"],
        port=port or server["port"],
        debug=debug or server["debug"],
    )


@app.command()
def events(
    config_file: Optional[str] = typer.Option(None, "--config", help="Arquivo YAML de configuração"),
):
    """Lista os eventos com grupo no MailerLite."""
    config = Config(_config_file(config_file))
    table = Table(title="Eventos → grupos do MailerLite")
    table.add_column("Evento", style="cyan")
    table.add_column("Grupo", style="bright_white")
    for event, group_id in config.event_groups.items():
        table.add_row(event, group_id)
    get_console().print(table)


@app.command("check-config")
def check_config(
    config_file: Optional[str] = typer.Option(None, "--config", help="Arquivo YAML de configuração"),
):
    """Verifica se a chave de API do MailerLite está disponível."""
    config = Config(_config_file(config_file))
    console = get_console()
    secret_name = config.mailerlite_config["api_key_secret"]
    api_key = (config.credential_provider().get_api_key() or "").strip()
    if not api_key:
        console.print(f"[red]✗ {secret_name} não definida[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓ {secret_name} definida[/green]")
    console.print(f"Endpoint: {config.rsvp_path} → {config.mailerlite_config['base_url']}/subscribers")
    console.print(f"Eventos com grupo: {len(config.event_groups)}")


def main():
    app()


if __name__ == "__main__":
    main()
