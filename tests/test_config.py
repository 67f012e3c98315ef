"""Tests for configuration loading and parsing."""
from __future__ import annotations

import logging

import yaml

from rankgraph.config import RankGraphConfig, load_config


class TestLoadConfig:
    def test_default_config_when_no_file(self, tmp_path):
        config = load_config(str(tmp_path))
        assert config == RankGraphConfig()
        assert config.enable_schemas is True
        assert config.max_depth == 10
        assert config.max_steps == 10000
        assert config.schemas == []
        assert config.custom_types_dir is None

    def test_loads_from_rankgraph_yml(self, tmp_path):
        cfg = {"debug": True, "max_depth": 4, "custom_types_dir": "types"}
        (tmp_path / "rankgraph.yml").write_text(yaml.dump(cfg))
        config = load_config(str(tmp_path))
        assert config.debug is True
        assert config.max_depth == 4
        assert config.custom_types_dir == "types"

    def test_loads_from_rankgraph_yaml(self, tmp_path):
        (tmp_path / "rankgraph.yaml").write_text(yaml.dump({"enable_schemas": False}))
        assert load_config(str(tmp_path)).enable_schemas is False

    def test_loads_from_dot_rankgraph_yml(self, tmp_path):
        (tmp_path / ".rankgraph.yml").write_text(yaml.dump({"max_steps": 50}))
        assert load_config(str(tmp_path)).max_steps == 50

    def test_first_config_file_wins(self, tmp_path):
        (tmp_path / "rankgraph.yml").write_text(yaml.dump({"max_depth": 3}))
        (tmp_path / "rankgraph.yaml").write_text(yaml.dump({"max_depth": 7}))
        assert load_config(str(tmp_path)).max_depth == 3

    def test_empty_file_gives_defaults(self, tmp_path):
        (tmp_path / "rankgraph.yml").write_text("")
        assert load_config(str(tmp_path)) == RankGraphConfig()

    def test_schema_set(self, tmp_path):
        cfg = {
            "schemas": [
                {"title": "Article", "type": "Article", "show_on": {"rules": ["post|all"]},
                 "fields": {"headline": "%post.title%"}},
            ],
        }
        (tmp_path / "rankgraph.yml").write_text(yaml.dump(cfg))
        config = load_config(str(tmp_path))
        assert config.schemas == cfg["schemas"]


class TestInvalidConfig:
    def test_non_mapping_is_ignored(self, tmp_path, caplog):
        (tmp_path / "rankgraph.yml").write_text(yaml.dump(["a", "b"]))
        with caplog.at_level(logging.WARNING, logger="rankgraph"):
            config = load_config(str(tmp_path))
        assert config == RankGraphConfig()
        assert "expected a mapping" in caplog.text

    def test_invalid_limits_fall_back(self, tmp_path, caplog):
        cfg = {"max_depth": 0, "max_steps": "lots"}
        (tmp_path / "rankgraph.yml").write_text(yaml.dump(cfg))
        with caplog.at_level(logging.WARNING, logger="rankgraph"):
            config = load_config(str(tmp_path))
        assert config.max_depth == 10
        assert config.max_steps == 10000
        assert "Invalid max_depth" in caplog.text
        assert "Invalid max_steps" in caplog.text

    def test_boolean_is_not_a_limit(self, tmp_path):
        (tmp_path / "rankgraph.yml").write_text(yaml.dump({"max_depth": True}))
        assert load_config(str(tmp_path)).max_depth == 10

    def test_invalid_flag_falls_back(self, tmp_path, caplog):
        (tmp_path / "rankgraph.yml").write_text(yaml.dump({"enable_schemas": "maybe"}))
        with caplog.at_level(logging.WARNING, logger="rankgraph"):
            assert load_config(str(tmp_path)).enable_schemas is True
        assert "Invalid enable_schemas" in caplog.text

    def test_schemas_must_be_a_list(self, tmp_path, caplog):
        (tmp_path / "rankgraph.yml").write_text(yaml.dump({"schemas": {"type": "Article"}}))
        with caplog.at_level(logging.WARNING, logger="rankgraph"):
            assert load_config(str(tmp_path)).schemas == []
        assert "Invalid schemas" in caplog.text

    def test_entries_without_type_are_skipped(self, tmp_path, caplog):
        cfg = {"schemas": [{"title": "Untyped"}, "Article", {"type": "WebSite"}]}
        (tmp_path / "rankgraph.yml").write_text(yaml.dump(cfg))
        with caplog.at_level(logging.WARNING, logger="rankgraph"):
            config = load_config(str(tmp_path))
        assert config.schemas == [{"type": "WebSite"}]
        assert caplog.text.count("Skipping schema entry") == 2
