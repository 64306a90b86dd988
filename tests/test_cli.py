"""CLI integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from protogen.cli import main


def _make_tree(root: Path) -> None:
    """Create a minimal proto source tree for testing."""
    protos = root / "protos"
    protos.mkdir()
    (protos / "people.proto").write_text("message Person {}\n")
    (protos / "places.proto").write_text("message Place {}\n")
    (protos / "notes.txt").write_text("not a proto\n")
    nested = protos / "shared"
    nested.mkdir()
    (nested / "common.proto").write_text("message Common {}\n")


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_resolves_and_prints_audit_trail(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--output", "build", "protos/*.proto"]) == 0
    out = capsys.readouterr().out
    assert f"--input =  {project / 'protos' / 'people.proto'}" in out
    assert str(project / "protos" / "shared" / "common.proto") in out
    assert "notes.txt" not in out
    assert f"--src-dir =  {project}" in out
    assert f"--output =  {project / 'build' / 'people.cs'}" in out


def test_default_output_warns(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--split-output", "protos/people.proto"]) == 0
    captured = capsys.readouterr()
    assert "Warning:" in captured.err
    assert f"--output =  {project / 'output'}" in captured.out


def test_missing_files_exit_code_lists_every_file(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["-o", "out", "protos/gone.proto", "protos/people.proto", "lost.proto"]) == 2
    err = capsys.readouterr().err
    assert f"File not found: {project / 'protos' / 'gone.proto'}" in err
    assert f"File not found: {project / 'lost.proto'}" in err
    assert err.count("File not found") == 2


def test_nothing_matched_is_an_error(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-o", "out", "protos/*.idl"]) == 1
    assert "No input files matched" in capsys.readouterr().err


def test_no_arguments_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "usage: protogen" in err


def test_help_prints_usage_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--help"]) == 1
    captured = capsys.readouterr()
    assert "protogen: Protocol Buffers code generator for C#" in captured.err
    assert "Common usage:" in captured.err
    assert "--experimental-message-stack" in captured.err
    assert captured.out == ""


def test_unknown_flag_is_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--bogus", "a.proto"]) == 1
    err = capsys.readouterr().err
    assert "Error: unrecognized arguments: --bogus" in err
    assert "usage: protogen" in err


def test_missing_positional_is_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--use-tabs"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("v") or out.startswith("unknown")


def test_bad_config_file_is_an_error(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "protogen.toml").write_text('use-tabs = "yes"\n')
    assert main(["-o", "out", "--config", "protogen.toml", "protos/people.proto"]) == 1
    assert "use-tabs" in capsys.readouterr().err


def test_environment_variable_pattern(
    project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PROTO_HOME", str(project / "protos" / "shared"))
    assert main(["-o", "out", "$PROTO_HOME/*.proto"]) == 0
    out = capsys.readouterr().out
    assert f"--input =  {project / 'protos' / 'shared' / 'common.proto'}" in out
    assert f"--output =  {project / 'out' / 'common.cs'}" in out


def test_help_takes_precedence_over_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--help", "--version"]) == 1
    captured = capsys.readouterr()
    assert "usage: protogen" in captured.err
    assert captured.out == ""


def test_parent_config_file_does_not_change_defaults(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "protogen.toml").write_text('output = "gen"\nsrc-dir = "elsewhere"\n')
    work = tmp_path / "work"
    work.mkdir()
    (work / "a.proto").write_text("message A {}\n")
    monkeypatch.chdir(work)

    assert main(["a.proto"]) == 0
    captured = capsys.readouterr()
    assert "Warning:" in captured.err
    assert f"--src-dir =  {work}\n" in captured.out
    assert f"--output =  {work / 'output' / 'a.cs'}" in captured.out
