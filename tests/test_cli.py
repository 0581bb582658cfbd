"""Tests for glint.cli — argument parsing, app resolution, and commands."""

from pathlib import Path
from typing import Any

import pytest

from glint import App
from glint.cli import main
from glint.cli._resolve import resolve_app

APP_MODULE = '''
from glint import App, AppConfig, Component

app = App(AppConfig(port=9001))
app.mount(Component("counter", "<div id=\\"counter\\">{{ count }}</div>", {"count": 0}), page="/")


def create_app():
    return App()


not_an_app = 42
'''


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "glint_cli_app.py").write_text(APP_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "glint_cli_app"


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_run_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "glint" in capsys.readouterr().out


class TestCLIMissingArgs:
    def test_run_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 2

    def test_bad_log_level(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "x:app", "--log-level", "loud"])
        assert exc_info.value.code == 2


class TestResolveApp:
    def test_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_app(f"{app_module}:app"), App)

    def test_default_attribute(self, app_module: str) -> None:
        assert resolve_app(app_module).config.port == 9001

    def test_factory(self, app_module: str) -> None:
        assert isinstance(resolve_app(f"{app_module}:create_app"), App)

    def test_not_an_app(self, app_module: str) -> None:
        with pytest.raises(TypeError, match="not a glint.App"):
            resolve_app(f"{app_module}:not_an_app")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("glint_no_such_module:app")


class TestCommands:
    def test_routes(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module])
        out = capsys.readouterr().out
        assert "POST    /update/counter" in out
        assert "GET     /sse/counter" in out
        assert "GET     /" in out

    def test_run_uses_app_config(self, app_module: str, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, Any]] = []

        def fake_serve(app: App, host: str, port: int, **kwargs: Any) -> None:
            calls.append({"app": app, "host": host, "port": port, **kwargs})

        monkeypatch.setattr("glint.server.serve.run_server", fake_serve)
        main(["run", app_module, "--workers", "2"])

        assert len(calls) == 1
        call = calls[0]
        assert call["host"] == "127.0.0.1"
        assert call["port"] == 9001
        assert call["workers"] == 2
        assert call["reload"] is False
        assert call["log_level"] == "info"

    def test_run_flags_override(self, app_module: str, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(
            "glint.server.serve.run_server",
            lambda app, host, port, **kw: calls.append({"host": host, "port": port, **kw}),
        )
        main(["run", f"{app_module}:app", "--host", "0.0.0.0", "--port", "3000", "--reload"])

        assert calls[0]["host"] == "0.0.0.0"
        assert calls[0]["port"] == 3000
        assert calls[0]["reload"] is True

    def test_unresolvable_app_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "glint_no_such_module:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
