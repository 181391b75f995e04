"""Tests for the `nextlayer` command line.

NO MOCKS - real directories, commands invoked through the dispatcher.
"""
from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from nextlayer.cli._dispatcher import build_parser, main


@pytest.fixture
def search_path(layered_roots, write_layer_file) -> str:
    c, b, a = layered_roots
    write_layer_file(c, "test.tt")
    write_layer_file(a, "test.tt")
    return os.pathsep.join(layered_roots)


def test_parser_discovers_every_command() -> None:
    parser = build_parser()
    choices = parser._subparsers._group_actions[0].choices  # type: ignore[union-attr]
    assert {"chain", "next", "roots", "which"} <= set(choices)


def test_which_prints_top_layer(search_path, layered_roots, capsys) -> None:
    assert main(["which", "test.tt", "--path", search_path]) == 0
    assert capsys.readouterr().out.strip() == str(Path(layered_roots[0]) / "test.tt")


def test_next_skips_layers_without_the_file(search_path, layered_roots, capsys) -> None:
    assert main(["next", "test.tt", "--path", search_path]) == 0
    assert capsys.readouterr().out.strip() == str(Path(layered_roots[2]) / "test.tt")


def test_chain_lists_every_supplying_layer_as_json(search_path, layered_roots, capsys) -> None:
    assert main(["chain", "test.tt", "--path", search_path, "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert [h["root_index"] for h in payload["hits"]] == [0, 2]
    assert {h["relative_path"] for h in payload["hits"]} == {"test.tt"}


def test_which_missing_resource_exits_nonzero(search_path, capsys) -> None:
    assert main(["which", "missing.tt", "--path", search_path]) == 1
    assert "No layer supplies 'missing.tt'" in capsys.readouterr().err


def test_next_at_bottom_layer_reports_error_json(layered_roots, write_layer_file, capsys) -> None:
    write_layer_file(layered_roots[2], "test.tt")
    path = os.pathsep.join(layered_roots)

    assert main(["next", "test.tt", "--path", path, "--json"]) == 1

    payload = json.loads(capsys.readouterr().err)
    assert payload["code"] == "NoNextLayerError"


def test_next_rejects_absolute_tokens(search_path, layered_roots, capsys) -> None:
    token = str(Path(layered_roots[0]) / "test.tt")
    assert main(["next", token, "--path", search_path]) == 1
    assert "Expected a relative path" in capsys.readouterr().err


def test_single_root_is_not_applicable(layered_roots, capsys) -> None:
    assert main(["chain", "test.tt", "--path", layered_roots[0]]) == 1
    assert "no second root" in capsys.readouterr().err


def test_roots_reads_config_file(tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "layers.yaml"
    cfg.write_text(yaml.safe_dump({"search_path": {"roots": ["c", "b"]}}), encoding="utf-8")

    assert main(["roots", "--config", str(cfg)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [f"0: {tmp_path / 'c'}", f"1: {tmp_path / 'b'}"]


def test_invalid_config_exits_with_config_error(tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "layers.yaml"
    cfg.write_text(yaml.safe_dump({"resolver": {"probe": "stat"}}), encoding="utf-8")

    assert main(["roots", "--config", str(cfg), "--json"]) == 2
    assert json.loads(capsys.readouterr().err)["error"] == "config_error"


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: nextlayer" in capsys.readouterr().out


def test_chain_with_a_root_listed_twice_is_a_config_error(layered_roots, write_layer_file, capsys) -> None:
    c, b, _ = layered_roots
    write_layer_file(c, "test.tt")
    path = os.pathsep.join([c, b, c])

    assert main(["chain", "test.tt", "--path", path]) == 2
    assert "Duplicate search root" in capsys.readouterr().err


@pytest.mark.parametrize("command", ["which", "next", "chain"])
def test_name_help_describes_relative_paths_only(command, capsys) -> None:
    with pytest.raises(SystemExit):
        main([command, "--help"])
    out = capsys.readouterr().out
    assert "Relative" in out
    assert "absolute" not in out


def test_output_formatter_exposes_success_and_error_only() -> None:
    from nextlayer.cli import OutputFormatter

    public = {name for name in vars(OutputFormatter) if not name.startswith("_")}
    assert public == {"success", "error"}
