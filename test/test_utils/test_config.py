"""Tests for the config loader functionality."""

import os

import pytest

from mcselect.config import load_config, load_config_file
from mcselect.config.errors import (
    ConfigCycleError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
)
from mcselect.config.operations import deep_merge, parse_value, set_nested_value


class TestConfigLoader:
    """Test suite for the YAML config loader."""

    def test_basic_load(self, tmp_path):
        """Test basic YAML loading without any special features."""
        config_file = tmp_path / "basic.yaml"
        config_file.write_text("""
base:
  verbosity: debug
io:
  reader:
    name: hdf5
    file_keys: events.h5
tasks:
  mc_track_selector:
    eta_max: 0.9
""")

        cfg = load_config_file(str(config_file))

        assert cfg["base"]["verbosity"] == "debug"
        assert cfg["io"]["reader"]["file_keys"] == "events.h5"
        assert cfg["tasks"]["mc_track_selector"]["eta_max"] == 0.9

    def test_top_level_include(self, tmp_path):
        """Test including another YAML file at the top level."""
        # Create base config
        base_config = tmp_path / "base.yaml"
        base_config.write_text("""
io:
  reader:
    name: hdf5
    n_entry: 10
tasks:
  mc_track_selector:
    eta_max: 0.9
    charged_only: true
""")

        # Create main config that includes base
        main_config = tmp_path / "main.yaml"
        main_config.write_text("""
include: base.yaml

tasks:
  mc_track_selector:
    eta_max: 0.5
""")

        cfg = load_config_file(str(main_config))

        # Base values should be loaded
        assert cfg["io"]["reader"]["n_entry"] == 10
        assert cfg["tasks"]["mc_track_selector"]["charged_only"] is True

        # Override should work
        assert cfg["tasks"]["mc_track_selector"]["eta_max"] == 0.5
        assert "include" not in cfg

    def test_multiple_includes(self, tmp_path):
        """Test including multiple YAML files, merged in order."""
        (tmp_path / "io.yaml").write_text("""
io:
  reader:
    name: hdf5
""")
        (tmp_path / "cuts.yaml").write_text("""
tasks:
  mc_track_selector:
    reject_k0l_neutron: true
""")
        (tmp_path / "main.yaml").write_text("""
include:
  - io.yaml
  - cuts.yaml
""")

        cfg = load_config_file(str(tmp_path / "main.yaml"))

        assert cfg["io"]["reader"]["name"] == "hdf5"
        assert cfg["tasks"]["mc_track_selector"]["reject_k0l_neutron"] is True

    def test_nested_includes(self, tmp_path):
        """Test that includes are resolved relative to the including file."""
        sub_dir = tmp_path / "sub"
        sub_dir.mkdir()
        (sub_dir / "leaf.yaml").write_text("leaf: 1\n")
        (sub_dir / "mid.yaml").write_text("include: leaf.yaml\nmid: 2\n")
        (tmp_path / "main.yaml").write_text("include: sub/mid.yaml\ntop: 3\n")

        cfg = load_config_file(str(tmp_path / "main.yaml"))

        assert cfg == {"leaf": 1, "mid": 2, "top": 3}

    def test_include_cycle(self, tmp_path):
        """Test that circular includes are detected."""
        (tmp_path / "a.yaml").write_text("include: b.yaml\n")
        (tmp_path / "b.yaml").write_text("include: a.yaml\n")

        with pytest.raises(ConfigCycleError) as excinfo:
            load_config_file(str(tmp_path / "a.yaml"))

        assert len(excinfo.value.cycle_path) == 3
        assert excinfo.value.cycle_path[0] == excinfo.value.cycle_path[-1]

    def test_include_file_not_found(self, tmp_path):
        """Test that a missing included file raises an error."""
        (tmp_path / "main.yaml").write_text("include: missing.yaml\n")

        with pytest.raises(ConfigIncludeError, match="missing.yaml"):
            load_config_file(str(tmp_path / "main.yaml"))

    def test_config_not_found(self, tmp_path):
        """Test that a missing configuration raises an error."""
        with pytest.raises(ConfigPathError):
            load_config_file(os.path.join(tmp_path, "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        """Test that a malformed configuration raises an error."""
        (tmp_path / "bad.yaml").write_text("tasks: [unclosed\n")

        with pytest.raises(ConfigIncludeError, match="Error loading"):
            load_config_file(str(tmp_path / "bad.yaml"))

    def test_empty(self, tmp_path):
        """Test that an empty file yields an empty configuration."""
        (tmp_path / "empty.yaml").write_text("")

        assert load_config_file(str(tmp_path / "empty.yaml")) == {}

    def test_dot_notation_override(self, tmp_path):
        """Test overriding values with dot notation."""
        (tmp_path / "main.yaml").write_text("""
tasks:
  mc_track_selector:
    eta_max: 0.9
""")

        cfg = load_config_file(
            str(tmp_path / "main.yaml"),
            overrides={
                "tasks.mc_track_selector.eta_max": "0.5",
                "tasks.mc_track_selector.charged_only": "true",
                "io.writer.name": "csv",
            },
        )

        assert cfg["tasks"]["mc_track_selector"]["eta_max"] == 0.5
        assert cfg["tasks"]["mc_track_selector"]["charged_only"] is True
        assert cfg["io"]["writer"]["name"] == "csv"

    def test_load_config_from_string(self, tmp_path):
        """Test loading a configuration from a string."""
        (tmp_path / "io.yaml").write_text("io:\n  reader:\n    name: hdf5\n")

        cfg = load_config(
            "include: io.yaml\ntasks:\n  mc_selector: {}\n", root_dir=str(tmp_path)
        )

        assert cfg == {"io": {"reader": {"name": "hdf5"}}, "tasks": {"mc_selector": {}}}


class TestConfigOperations:
    """Test the dictionary operations used by the loader."""

    def test_deep_merge(self):
        """Test that nested dictionaries are merged, not replaced."""
        base = {"a": {"b": 1, "c": 2}, "d": [1, 2]}
        merged = deep_merge(base, {"a": {"c": 3}, "d": [3]})

        assert merged == {"a": {"b": 1, "c": 3}, "d": [3]}
        assert base["a"]["c"] == 2

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1", 1),
            ("0.5", 0.5),
            ("false", False),
            ("[1, 2]", [1, 2]),
            ("abc", "abc"),
            ("", ""),
        ],
    )
    def test_parse_value(self, value, expected):
        """Test that string values are parsed as YAML."""
        assert parse_value(value) == expected

    def test_set_nested_value(self):
        """Test that missing levels are created."""
        cfg = set_nested_value({}, "io.writer.file_name", "out.csv")
        assert cfg == {"io": {"writer": {"file_name": "out.csv"}}}

    def test_set_nested_value_type(self):
        """Test that a path cannot traverse a scalar."""
        with pytest.raises(ConfigTypeError):
            set_nested_value({"io": 1}, "io.reader", "hdf5")
