import subprocess
from typing import Any
from unittest.mock import MagicMock

import pytest

from resolvergen import log
from resolvergen.formatting import FormattingError, FormatterUnavailableError, PrettierFormatter
from resolvergen.generators.typescript import generate
from tests.conftest import listing_from_sdl, model_map_for

SCHEMA = """
type Query { user: User }
type User { id: ID! }
"""


def completed_process(returncode: int, stdout: str = "", stderr: str = "") -> Any:
    def _run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    return _run


class TestPrettierFormatter:
    def test_formatted_code_is_returned(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("resolvergen.formatting.subprocess.run", completed_process(0, stdout="formatted\n"))

        assert PrettierFormatter()("raw") == "formatted\n"

    def test_code_is_piped_to_prettier(self, monkeypatch: pytest.MonkeyPatch) -> None:
        run = MagicMock(return_value=subprocess.CompletedProcess([], 0, stdout="", stderr=""))
        monkeypatch.setattr("resolvergen.formatting.subprocess.run", run)

        _ = PrettierFormatter()("const a = 1")

        assert run.call_args.args[0] == ["prettier", "--parser", "typescript"]
        assert run.call_args.kwargs["input"] == "const a = 1"

    def test_non_zero_exit_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "resolvergen.formatting.subprocess.run",
            completed_process(2, stderr="SyntaxError: Unexpected token (1:5)"),
        )

        with pytest.raises(FormattingError, match="SyntaxError"):
            PrettierFormatter()("const = ;")

    def test_missing_executable_raises(self) -> None:
        with pytest.raises(FormatterUnavailableError, match="not installed"):
            PrettierFormatter(executable="resolvergen-missing-prettier")("const a = 1")


class TestFormattingFallback:
    def test_missing_formatter_warns_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        warning = MagicMock()
        monkeypatch.setattr(log, "warning", warning)
        listing = listing_from_sdl(SCHEMA)

        unformatted = generate(listing, model_map_for("User"))
        fallback = generate(listing, model_map_for("User"), formatter=PrettierFormatter("resolvergen-missing-prettier"))

        assert fallback == unformatted
        assert warning.call_count == 1
        assert "Formatter unavailable" in warning.call_args.args[0]

    def test_syntax_errors_fall_back_per_unit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        warning = MagicMock()
        monkeypatch.setattr(log, "warning", warning)
        monkeypatch.setattr(
            "resolvergen.formatting.subprocess.run",
            completed_process(2, stderr="SyntaxError: Unexpected token (1:5)"),
        )
        listing = listing_from_sdl(SCHEMA)

        unformatted = generate(listing, model_map_for("User"))
        fallback = generate(listing, model_map_for("User"), formatter=PrettierFormatter())

        assert fallback == unformatted
        assert warning.call_count == len(fallback)
        assert "unformatted code printed" in warning.call_args.args[0]

    def test_undecodable_formatter_output_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def undecodable(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        monkeypatch.setattr("resolvergen.formatting.subprocess.run", undecodable)
        listing = listing_from_sdl(SCHEMA)

        with pytest.raises(FormattingError, match="can't decode"):
            PrettierFormatter()("const a = 1")
        assert generate(listing, model_map_for("User"), formatter=PrettierFormatter()) == generate(
            listing, model_map_for("User")
        )

    def test_any_formatter_error_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        warning = MagicMock()
        monkeypatch.setattr(log, "warning", warning)

        def crashing_formatter(code: str) -> str:
            raise RuntimeError("prettier plugin crashed")

        listing = listing_from_sdl(SCHEMA)
        fallback = generate(listing, model_map_for("User"), formatter=crashing_formatter)

        assert fallback == generate(listing, model_map_for("User"))
        assert "prettier plugin crashed" in warning.call_args.args[0]
