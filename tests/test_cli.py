"""Tests for the galendar command line."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest

from galendar.cli import cmd_query, login, main
from galendar.exceptions import NoMatchingCalendar
from galendar.google import AuthorizationRequired, CredentialsNotFoundError, TokenError


class TestMainArguments:
    """Test argument handling."""

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_exits_zero(self, flag, capsys):
        """Should print usage and exit 0."""
        with pytest.raises(SystemExit) as exc_info:
            main([flag])
        assert exc_info.value.code == 0
        assert "usage: galendar" in capsys.readouterr().out

    def test_no_argument_means_primary(self):
        """Should pass an empty calendar name when none is given."""
        with patch("galendar.cli.cmd_query", return_value=0) as cmd:
            assert main([]) == 0
        cmd.assert_called_once_with("")

    def test_calendar_argument(self):
        """Should pass the calendar name through."""
        with patch("galendar.cli.cmd_query", return_value=0) as cmd:
            main(["team calendar"])
        cmd.assert_called_once_with("team calendar")

    def test_unknown_log_level(self):
        """Should still run the query when GALENDAR_LOG_LEVEL is not a level name."""
        with (
            patch.dict(os.environ, {"GALENDAR_LOG_LEVEL": "verbose"}),
            patch("galendar.cli.cmd_query", return_value=0) as cmd,
        ):
            assert main([]) == 0
        cmd.assert_called_once_with("")

    def test_unknown_flag_rejected(self):
        """Should reject flags other than help."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--verbose"])
        assert exc_info.value.code == 2


class TestCmdQuery:
    """Test the query command."""

    def test_success(self):
        """Should return 0 after printing events."""
        with (
            patch("galendar.calendar.CalendarClient") as client_cls,
            patch("galendar.query.run_query") as run,
        ):
            assert cmd_query("work") == 0
        run.assert_called_once()
        assert run.call_args.args[0] is client_cls.return_value
        assert run.call_args.args[1] == "work"

    def test_no_matching_calendar(self, capsys):
        """Should report a missing calendar and return 1."""
        with (
            patch("galendar.calendar.CalendarClient"),
            patch("galendar.query.run_query", side_effect=NoMatchingCalendar("heyYou")),
        ):
            assert cmd_query("heyYou") == 1
        assert "No matching calendar from the provided calendar: heyYou" in capsys.readouterr().err

    def test_missing_client_secret(self, capsys):
        """Should report a missing client secret and return 1."""
        with (
            patch("galendar.calendar.CalendarClient"),
            patch(
                "galendar.query.run_query",
                side_effect=CredentialsNotFoundError("/nowhere/secret.json"),
            ),
        ):
            assert cmd_query("") == 1
        assert "/nowhere/secret.json" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "secret",
        [
            {"other": {}},
            {"installed": {"client_secret": "secret"}},
        ],
    )
    def test_invalid_client_secret(self, secret, tmp_path, capsys):
        """Should report an unusable client secret file and return 1."""
        secret_path = tmp_path / "galendar_client_secret.json"
        secret_path.write_text(json.dumps(secret))
        with patch("galendar.google.oauth.GOOGLE_CREDENTIALS", secret_path):
            assert cmd_query("") == 1
        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert str(secret_path) in err

    def test_authorizes_then_retries(self):
        """Should run the login prompt and query again."""
        with (
            patch("galendar.calendar.CalendarClient"),
            patch(
                "galendar.query.run_query",
                side_effect=[AuthorizationRequired("https://consent"), "primary"],
            ) as run,
            patch("galendar.cli.login", return_value=0) as login_prompt,
        ):
            assert cmd_query("") == 0
        login_prompt.assert_called_once()
        assert run.call_count == 2

    def test_failed_login(self):
        """Should return 1 when the login prompt fails."""
        with (
            patch("galendar.calendar.CalendarClient"),
            patch("galendar.query.run_query", side_effect=AuthorizationRequired("https://consent")),
            patch("galendar.cli.login", return_value=1),
        ):
            assert cmd_query("") == 1


class TestLogin:
    """Test the interactive login prompt."""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.auth.get_authorization_url.return_value = "https://accounts.google.com/o/oauth2/auth"
        return client

    def test_fetches_token(self, client, capsys):
        """Should exchange the pasted redirect URL for a token."""
        with (
            patch("galendar.cli.webbrowser.open") as open_browser,
            patch("builtins.input", return_value=" http://localhost/?code=abc "),
        ):
            assert login(client) == 0
        open_browser.assert_called_once_with("https://accounts.google.com/o/oauth2/auth")
        client.auth.fetch_token.assert_called_once_with("http://localhost/?code=abc")
        assert "https://accounts.google.com/o/oauth2/auth" in capsys.readouterr().out

    def test_empty_redirect(self, client):
        """Should abort when nothing is pasted."""
        with patch("galendar.cli.webbrowser.open"), patch("builtins.input", return_value=""):
            assert login(client) == 1
        client.auth.fetch_token.assert_not_called()

    def test_token_error(self, client, capsys):
        """Should report a rejected authorization code."""
        client.auth.fetch_token.side_effect = TokenError("invalid_grant")
        with (
            patch("galendar.cli.webbrowser.open"),
            patch("builtins.input", return_value="http://localhost/?code=bad"),
        ):
            assert login(client) == 1
        assert "invalid_grant" in capsys.readouterr().err
