from __future__ import annotations

from pathlib import Path

import pytest

from postmeta import cli
from postmeta.errors import PostmetaError


def test_cli_help(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main([])
    captured = capsys.readouterr()
    assert "Postmeta command-line interface" in captured.out


def test_cli_version(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "__version__", "0.2.0")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == "0.2.0"


def test_cli_dispatch_parse(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run_parse(options):
        called["options"] = options

    monkeypatch.setattr(cli.pipelines, "run_parse", fake_run_parse)
    cli.main(
        [
            "parse",
            "post.md",
            "--json",
            "--duplicate-policy",
            "first",
            "--unknown-key-policy",
            "stop",
            "--trim-categories",
        ]
    )
    assert called["options"] == {
        "path": "post.md",
        "json": True,
        "duplicate_policy": "first",
        "unknown_key_policy": "stop",
        "trim_categories": True,
    }


def test_cli_parse_defaults_leave_settings_to_config(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run_parse(options):
        called["options"] = options

    monkeypatch.setattr(cli.pipelines, "run_parse", fake_run_parse)
    cli.main(["parse", "post.md", "--config-path", "/tmp/cfg.toml"])
    assert called["options"] == {"path": "post.md", "config_path": "/tmp/cfg.toml"}


def test_cli_dispatch_init(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run_init(options):
        called["options"] = options

    monkeypatch.setattr(cli.pipelines, "run_init", fake_run_init)
    cli.main(["init", "--config-path", "/tmp/cfg.toml"])
    assert called["options"] == {"config_path": "/tmp/cfg.toml"}


def test_cli_dispatch_config_show(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run_config_show(options):
        called["options"] = options

    monkeypatch.setattr(cli.pipelines, "run_config_show", fake_run_config_show)
    cli.main(["config", "show"])
    assert called["options"] == {}


def test_cli_dispatch_config_default_show(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run_config_show(options):
        called["options"] = options

    monkeypatch.setattr(cli.pipelines, "run_config_show", fake_run_config_show)
    cli.main(["config"])
    assert called["options"] == {}


def test_cli_dispatch_config_set(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run_config_set(options):
        called["options"] = options

    monkeypatch.setattr(cli.pipelines, "run_config_set", fake_run_config_set)
    cli.main(["config", "set", "duplicate_policy", "first"])
    assert called["options"] == {"key": "duplicate_policy", "value": "first"}


def test_cli_parse_end_to_end(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    post = tmp_path / "post.md"
    post.write_text('[//]: # "title: From the CLI"\n\nBody\n', encoding="utf-8")
    cli.main(["parse", str(post), "--config-path", str(tmp_path / "none.toml")])
    output = capsys.readouterr().out
    assert 'title = "From the CLI"' in output


def test_cli_error_handling(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def fake_run_parse(_options):
        raise PostmetaError("boom", hint="fix")

    monkeypatch.setattr(cli.pipelines, "run_parse", fake_run_parse)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["parse", "post.md"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "postmeta: error: boom" in captured.err
    assert "postmeta: hint: fix" in captured.err


def test_cli_reports_missing_document(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                "parse",
                str(tmp_path / "missing.md"),
                "--config-path",
                str(tmp_path / "none.toml"),
            ]
        )
    assert excinfo.value.code == 1
    assert "postmeta: error: Could not read document" in capsys.readouterr().err
