from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from slatestack.cli import cli
from slatestack.infrastructure.services.update_service import UpdateCheckResult


def sqlite_settings(**overrides):
    settings = MagicMock()
    settings.database_url = "sqlite+aiosqlite:///./data/slatestack.db"
    settings.is_sqlite = True
    settings.host = "0.0.0.0"
    settings.port = 3000
    settings.workers = 1
    settings.is_development = True
    settings.is_production = False
    settings.log_level = "INFO"
    settings.environment = "development"
    settings.update_cache_ttl_seconds = 900
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def test_serve_invalid_workers_sqlite():
    runner = CliRunner()
    with patch("slatestack.cli.get_settings", return_value=sqlite_settings()):
        result = runner.invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output


def test_serve_runs_uvicorn():
    runner = CliRunner()
    with patch("slatestack.cli.get_settings", return_value=sqlite_settings()), patch(
        "uvicorn.run"
    ) as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "8080", "--no-reload"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[0] == "slatestack.infrastructure.api.app:app"
    assert kwargs["port"] == 8080
    assert kwargs["reload"] is False


def test_init_db_refuses_production():
    runner = CliRunner()
    settings = sqlite_settings(is_production=True, is_development=False)
    with patch("slatestack.cli.get_settings", return_value=settings):
        result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations" in result.output


def test_check_update_reports_new_version():
    runner = CliRunner()
    result_value = UpdateCheckResult(
        current_version="0.1.0",
        latest_version="0.2.0",
        update_available=True,
        version_diff="minor",
        release_url="https://github.com/acme/slatestack/releases/tag/v0.2.0",
        published_at="2026-10-01T00:00:00Z",
    )
    service = MagicMock()
    service.check_for_updates = AsyncMock(return_value=result_value)

    with patch("slatestack.cli.get_settings", return_value=sqlite_settings()), patch(
        "slatestack.infrastructure.services.update_service.UpdateService.from_settings",
        return_value=service,
    ):
        result = runner.invoke(cli, ["check-update"])

    assert result.exit_code == 0
    assert "0.1.0 -> 0.2.0 (minor)" in result.output


def test_info():
    runner = CliRunner()
    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Slatestack v" in result.output
    assert "Insert At:" in result.output
