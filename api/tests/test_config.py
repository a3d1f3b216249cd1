"""Tests for settings parsing and the server entry point."""
from unittest.mock import patch

from orgunits.core.config import Settings


class TestCorsOrigins:

    def test_default_allows_no_cross_origin(self, monkeypatch):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        assert Settings(_env_file=None).get_cors_origins() == []

    def test_comma_separated_list(self):
        settings = Settings(CORS_ORIGINS=" https://admin.example.com, ,http://localhost:3000 ")
        assert settings.get_cors_origins() == ["https://admin.example.com", "http://localhost:3000"]


def test_run_server_binds_configured_address():
    from orgunits import main

    with patch("uvicorn.run") as mock_run, \
            patch.object(main.settings, "API_HOST", "0.0.0.0"), \
            patch.object(main.settings, "API_PORT", 9100):
        main.run_server()

    mock_run.assert_called_once_with(main.app, host="0.0.0.0", port=9100)
