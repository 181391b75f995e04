from __future__ import annotations

import os
from pathlib import Path

import pytest

from nextlayer.core.exceptions import ConfigError
from nextlayer.core.layers import LayerSpec, SearchPath


def test_from_string_splits_on_path_separator_and_drops_empty_entries() -> None:
    raw = os.pathsep.join(["/c", "", "/b", "/a"])
    assert SearchPath.from_string(raw).roots == ("/c", "/b", "/a")


def test_from_roots_keeps_order(tmp_path: Path) -> None:
    sp = SearchPath.from_roots([tmp_path / "c", "/b", "/a"])
    assert sp.roots == (str(tmp_path / "c"), "/b", "/a")
    assert len(sp) == 3
    assert sp[0] == str(tmp_path / "c")


def test_index_of_reports_priority_or_none() -> None:
    sp = SearchPath.from_roots(["/c", "/b", "/a"])
    assert sp.index_of("/b") == 1
    assert sp.index_of("/z") is None


def test_search_path_is_immutable() -> None:
    sp = SearchPath.from_roots(["/c", "/b"])
    with pytest.raises(AttributeError):
        sp.layers = ()  # type: ignore[misc]


def test_from_config_accepts_strings_and_mappings(tmp_path: Path) -> None:
    cfg = {
        "search_path": {
            "roots": [
                {"id": "skin", "path": "skins/blue"},
                {"id": "retired", "path": "/old", "enabled": False},
                "/templates/default",
            ]
        }
    }

    sp = SearchPath.from_config(cfg, base_dir=tmp_path)

    assert sp.roots == (str(tmp_path / "skins" / "blue"), "/templates/default")
    assert sp.layer_by_id("skin") == LayerSpec(id="skin", path=str(tmp_path / "skins" / "blue"))
    assert sp.layer_by_id("retired") is None


def test_from_config_expands_environment_variables(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SKIN_HOME", str(tmp_path))
    cfg = {"search_path": {"roots": ["$SKIN_HOME/c", "/b"]}}

    assert SearchPath.from_config(cfg).roots == (str(tmp_path / "c"), "/b")


def test_from_config_skips_merge_markers() -> None:
    cfg = {"search_path": {"roots": ["+", "/c", "/b"]}}
    assert SearchPath.from_config(cfg).roots == ("/c", "/b")


def test_from_config_rejects_duplicate_ids() -> None:
    cfg = {"search_path": {"roots": [{"id": "x", "path": "/c"}, {"id": "x", "path": "/b"}]}}
    with pytest.raises(ConfigError):
        SearchPath.from_config(cfg)


def test_from_config_rejects_entries_without_path() -> None:
    with pytest.raises(ConfigError):
        SearchPath.from_config({"search_path": {"roots": [{"id": "x"}]}})


def test_missing_section_yields_empty_search_path() -> None:
    assert len(SearchPath.from_config({})) == 0


@pytest.mark.parametrize("roots", [["/a", "/b", "/a"], ["/a", "/b", "/a/"], ["/a", "/b", "/b/../a"]])
def test_from_roots_rejects_a_root_listed_twice(roots) -> None:
    with pytest.raises(ConfigError, match="Duplicate search root"):
        SearchPath.from_roots(roots)


def test_from_config_rejects_the_same_path_under_two_ids() -> None:
    cfg = {"search_path": {"roots": [{"id": "x", "path": "/a"}, {"id": "y", "path": "/b"}, {"id": "z", "path": "/a"}]}}
    with pytest.raises(ConfigError) as excinfo:
        SearchPath.from_config(cfg)
    assert excinfo.value.context["layer"] == "z"


def test_absolute_anchors_relative_roots_at_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    sp = SearchPath.from_roots([LayerSpec(id="skin", path="c"), "b", "/a"]).absolute()

    assert sp.roots == (str(tmp_path / "c"), str(tmp_path / "b"), "/a")
    assert sp.layer_by_id("skin") == LayerSpec(id="skin", path=str(tmp_path / "c"))
    assert sp.layer_by_id(str(tmp_path / "b")) is not None


def test_absolute_rejects_relative_roots_of_a_foreign_style() -> None:
    with pytest.raises(ConfigError):
        SearchPath.from_roots([r"C:\templates\c", r"templates\b"]).absolute(style="windows")


def test_absolute_detects_a_relative_root_duplicating_an_absolute_one(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    sp = SearchPath.from_roots(["c", str(tmp_path / "c")])
    with pytest.raises(ConfigError):
        sp.absolute()


def test_absolute_returns_the_same_instance_when_nothing_changes() -> None:
    sp = SearchPath.from_roots(["/c", "/b"])
    assert sp.absolute() is sp
