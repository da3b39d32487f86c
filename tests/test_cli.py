from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from rsvp_relay.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "events:\n"
        "  groups:\n"
        "    \"Cleveland - April 18\": \"180251083036166100\"\n",
        encoding="utf-8",
    )
    return str(path)


def test_events_lists_groups(config_file):
    result = runner.invoke(app, ["events", "--config", config_file])

    assert result.exit_code == 0
    assert "Cleveland - April 18" in result.output
    assert "180251083036166100" in result.output


def test_check_config_without_key_fails(config_file):
    result = runner.invoke(app, ["check-config", "--config", config_file])

    assert result.exit_code == 1
    assert "MAILERLITE_API_KEY" in result.output


def test_check_config_with_blank_key_fails(config_file, monkeypatch):
    monkeypatch.setenv("MAILERLITE_API_KEY", "   ")

    result = runner.invoke(app, ["check-config", "--config", config_file])

    assert result.exit_code == 1


def test_check_config_with_key_does_not_print_it(config_file, monkeypatch):
    monkeypatch.setenv("MAILERLITE_API_KEY", "super-secret-value")

    result = runner.invoke(app, ["check-config", "--config", config_file])

    assert result.exit_code == 0
    assert "super-secret-value" not in result.output
    assert "Eventos com grupo: 1" in result.output


def test_config_file_from_environment(config_file, monkeypatch):
    monkeypatch.setenv("RSVP_CONFIG_FILE", config_file)

    result = runner.invoke(app, ["events"])

    assert result.exit_code == 0
    assert "180251083036166100" in result.output


@patch('rsvp_relay.cli.create_app')
def test_serve_runs_flask_app(mock_create_app, config_file):
    flask_app = MagicMock()
    mock_create_app.return_value = flask_app

    result = runner.invoke(app, ["serve", "--config", config_file, "--port", "5055"])

    assert result.exit_code == 0
    flask_app.run.assert_called_once_with(host="0.0.0.0", port=5055, debug=False)
