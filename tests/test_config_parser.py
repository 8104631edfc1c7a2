"""Tests for configuration loading and update-file validation."""

from __future__ import annotations

import pytest

from release_boss.config_parser import (
    ConfigError,
    FileUpdateSpec,
    ReleaseConfig,
    load_config,
    merge_paths,
    parse_config,
    parse_update_specs,
)


class TestParseUpdateSpecs:
    def test_camel_and_snake_keys(self):
        specs = parse_update_specs(
            [
                {"file": "a.txt", "findLine": "a=", "replaceLine": "a={{version}}"},
                {"file": "b.txt", "find_line": "b=", "replace_line": "b={{version}}"},
            ]
        )
        assert specs == [
            FileUpdateSpec("a.txt", "a=", "a={{version}}"),
            FileUpdateSpec("b.txt", "b=", "b={{version}}"),
        ]

    def test_invalid_entries_dropped(self):
        specs = parse_update_specs(
            [
                {"file": "a.txt", "findLine": "a="},
                {"findLine": "a=", "replaceLine": "x"},
                {"file": "", "findLine": "a=", "replaceLine": "x"},
                "not-a-mapping",
                {"file": "ok.txt", "findLine": "k", "replaceLine": "v"},
            ]
        )
        assert specs == [FileUpdateSpec("ok.txt", "k", "v")]

    def test_json_string_input(self):
        raw = '[{"file": "a.txt", "findLine": "a=", "replaceLine": "a={{version}}"}]'
        assert parse_update_specs(raw) == [FileUpdateSpec("a.txt", "a=", "a={{version}}")]

    @pytest.mark.parametrize("raw", [None, "", []])
    def test_empty(self, raw):
        assert parse_update_specs(raw) == []

    def test_non_list_rejected(self):
        with pytest.raises(ConfigError):
            parse_update_specs({"file": "a.txt"})


class TestParseConfig:
    def test_defaults(self):
        assert parse_config(None) == ReleaseConfig()
        assert ReleaseConfig().release_branch == "release"

    def test_full(self):
        cfg = parse_config(
            {
                "releaseBranch": "stable",
                "version_files": ["src/__init__.py", " "],
                "template_files": "chart.tpl.yaml",
                "update_files": [{"file": "README.md", "findLine": "pip install", "replaceLine": "pip install x=={{version}}"}],
            }
        )
        assert cfg.release_branch == "stable"
        assert cfg.version_files == ("src/__init__.py",)
        assert cfg.template_files == ("chart.tpl.yaml",)
        assert cfg.update_files == (FileUpdateSpec("README.md", "pip install", "pip install x=={{version}}"),)

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ConfigError):
            parse_config(["a"])

    def test_file_list_must_be_list(self):
        with pytest.raises(ConfigError):
            parse_config({"version_files": {"a": 1}})


class TestLoadConfig:
    def test_load_yaml(self, tmp_path):
        p = tmp_path / "release-boss.yml"
        p.write_text("release_branch: release/2.x\nversion_files:\n  - setup.cfg\n", encoding="utf-8")
        cfg = load_config(p)
        assert cfg.release_branch == "release/2.x"
        assert cfg.version_files == ("setup.cfg",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        p = tmp_path / "bad.yml"
        p.write_text("version_files: [a, b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(p)


def test_merge_paths_keeps_first_occurrence():
    assert merge_paths(["a", "b"], ["b", "c"]) == ("a", "b", "c")
