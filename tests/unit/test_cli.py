"""Tests for the command-line interface."""

import json
from unittest.mock import patch

from perplexity_search import cli
from perplexity_search.tools._http_utils import ProviderError, ProviderErrorKind


class TestCli:
    """Test suite for cli.main."""

    def test_pretty_output(self, capsys, provider_payload: dict):
        async def fake_search(query: str) -> dict:
            return provider_payload

        with patch.object(cli, "jigsaw_web_search", fake_search):
            exit_code = cli.main(["capital of France"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Paris is the capital" in out
        assert "[3] Visit Paris" in out
        assert "Sources: 3  Images: 5" in out

    def test_json_output_is_raw_reply(self, capsys, provider_payload: dict):
        async def fake_search(query: str) -> dict:
            return provider_payload

        with patch.object(cli, "jigsaw_web_search", fake_search):
            exit_code = cli.main(["--format", "json", "capital of France"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == provider_payload

    def test_provider_error_exits_with_status(self, capsys):
        async def fake_search(query: str) -> dict:
            raise ProviderError(ProviderErrorKind.UNAUTHORIZED, "Invalid API key")

        with patch.object(cli, "jigsaw_web_search", fake_search):
            exit_code = cli.main(["capital of France"])

        assert exit_code == 1
        assert "Error (401): Invalid API key" in capsys.readouterr().err

    def test_no_query_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_serve_runs_uvicorn(self):
        with patch("uvicorn.run") as mock_run:
            assert cli.main(["--serve", "--port", "9000"]) == 0

        mock_run.assert_called_once_with(
            "perplexity_search.api.server:app", host="127.0.0.1", port=9000
        )

    def test_formatters_write_to_given_stream(self, provider_payload: dict):
        from io import StringIO

        from perplexity_search.types.search import SearchResponse

        pretty, raw = StringIO(), StringIO()
        cli.format_result_pretty(SearchResponse.model_validate(provider_payload), file=pretty)
        cli.format_result_json(provider_payload, file=raw)

        assert "AI OVERVIEW:" in pretty.getvalue()
        assert json.loads(raw.getvalue())["query"] == "capital of France"
