"""Tests for the server entrypoint."""

import logging
from unittest.mock import patch

from webprint import main as entrypoint


class TestMain:

    def test_serves_app_on_configured_address(self, settings, caplog) -> None:
        settings.port = 8311

        with patch.object(entrypoint.uvicorn, "run") as run, caplog.at_level(logging.INFO):
            entrypoint.main()

        run.assert_called_once()
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == settings.host
        assert kwargs["port"] == 8311
        assert kwargs["log_level"] == "debug"
        assert f"http://{settings.host}:8311" in caplog.text
        assert "Load strategy: polling" in caplog.text
