"""Tests for the waypoint CLI — routes and check commands."""

from pathlib import Path

import pytest

from waypoint.cli import main


class TestRoutes:
    def test_lists_every_route(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes"])
        out = capsys.readouterr().out

        assert out.splitlines()[0].split() == ["PATH", "VIEW", "TEMPLATE"]
        for path in ("/login", "/profile", "/settings", "/signup", "/leaderboard", "/about"):
            assert path in out
        assert "/ (default)" in out
        assert "FormView (login)" in out
        assert "FormView (signup)" in out
        assert "unmatched paths fall back" in out

    def test_logout_has_no_template(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes"])
        rows = capsys.readouterr().out.splitlines()
        line = next(row for row in rows if row.startswith("/logout"))
        assert line.split()[-1] == "-"


class TestCheck:
    def test_bundled_templates_ok(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check"])
        assert capsys.readouterr().out.strip() == "7 templates OK"

    def test_overrides_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "menu.html").write_text("<nav></nav>")
        main(["check", "--template-dir", str(tmp_path)])
        assert "7 templates OK" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "--template-dir", str(tmp_path / "missing")])

        assert exc_info.value.code == 1
        assert "does not exist" in capsys.readouterr().err


class TestHelp:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out
