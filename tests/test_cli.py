"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from covpods.cli import _build_parser, format_pods, main
from covpods.models import Pod
from tests._fixtures.coverage_builder import CoverageDirBuilder


def test_cli_accepts_verbose_and_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "collect", "a", "b", "--origins", "--json"])
    assert args.verbose is True
    assert args.command == "collect"
    assert args.dirs == ["a", "b"]
    assert args.origins is True
    assert args.warn is None
    assert args.json is True


def test_cli_requires_a_directory() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["collect"])


def test_format_pods_includes_origins_when_tracked() -> None:
    pods = [
        Pod(meta_file="/a/meta", counter_data_files=["/a/c1", "/b/c2"], origins=[0, 1]),
        Pod(meta_file="/b/meta", counter_data_files=["/b/c3"]),
    ]
    assert format_pods(pods) == "/a/meta [\n/a/c1 o:0\n/b/c2 o:1\n]\n/b/meta [\n/b/c3\n]"


def test_main_prints_json(coverage_builder: CoverageDirBuilder, tmp_path: Path, capsys) -> None:
    origin = coverage_builder.origin("o1")
    coverage_builder.meta(origin, "m1")
    coverage_builder.counter(origin, "m1", 1)

    main(["collect", str(origin), "--origins", "--json", "--config", str(tmp_path)])

    payload = json.loads(capsys.readouterr().out)
    assert len(payload) == 1
    assert payload[0]["meta_file"].endswith("covmeta.ae7be26cdaa742ca148068d5ac90eaca")
    assert payload[0]["origins"] == [0]
    assert payload[0]["process_ids"] == [42]


def test_main_uses_config_defaults(coverage_builder: CoverageDirBuilder, tmp_path: Path, capsys) -> None:
    (tmp_path / ".covpods.yml").write_text("collect:\n  track_origins: true\n", encoding="utf-8")
    origin = coverage_builder.origin("o1")
    coverage_builder.meta(origin, "m1")
    coverage_builder.counter(origin, "m1", 1)

    main(["collect", str(origin), "--config", str(tmp_path)])

    out = capsys.readouterr().out
    assert "covcounters.ae7be26cdaa742ca148068d5ac90eaca.42.1 o:0" in out


def test_main_exits_for_unreadable_directory(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(SystemExit) as excinfo:
        main(["collect", str(missing), "--config", str(tmp_path)])
    assert excinfo.value.code == 1
    assert str(missing) in capsys.readouterr().err


def test_main_exits_for_invalid_config(tmp_path: Path, capsys) -> None:
    (tmp_path / ".covpods.yml").write_text("- nope\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["collect", str(tmp_path), "--config", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_main_writes_log_file(coverage_builder: CoverageDirBuilder, tmp_path: Path) -> None:
    origin = coverage_builder.origin("o1")
    coverage_builder.counter(origin, "orphan", 1)
    log_file = tmp_path / "covpods.log"

    main(["--log-file", str(log_file), "collect", str(origin), "--warn", "--config", str(tmp_path)])

    text = log_file.read_text(encoding="utf-8")
    assert "orphaned counter file" in text
    assert "No coverage meta-data files found" in text


def test_cli_accepts_logging_options_after_command(tmp_path: Path) -> None:
    parser = _build_parser()
    log_file = tmp_path / "run.log"
    args = parser.parse_args(["collect", "a", "-v", "--log-file", str(log_file)])
    assert args.verbose is True
    assert args.log_file == log_file


def test_cli_logging_defaults_survive_subcommand() -> None:
    parser = _build_parser()
    args = parser.parse_args(["collect", "a"])
    assert args.verbose is False
    assert args.log_file is None
