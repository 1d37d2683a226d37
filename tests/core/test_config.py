"""Tests for configuration system."""

import os
from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel, Field

from pymapper.core.config import Config, config_properties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"pymapper": {"mapping": {"strict": True, "max_depth": 16}}})
        assert config.get("pymapper.mapping.strict") is True
        assert config.get("pymapper.mapping.max_depth") == 16

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "pymapper.yaml"
        config_file.write_text("pymapper:\n  mapping:\n    max_depth: 12\n")
        config = Config.from_file(config_file)
        assert config.get("pymapper.mapping.max_depth") == 12
        assert config.loaded_sources == [str(config_file)]

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "pymapper.toml"
        config_file.write_text("[pymapper.mapping]\nstrict = true\n")
        config = Config.from_file(config_file)
        assert config.get("pymapper.mapping.strict") is True

    def test_missing_file_gives_empty_config(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []

    def test_env_var_override(self):
        os.environ["PYMAPPER_MAPPING_STRICT"] = "true"
        try:
            config = Config({"pymapper": {"mapping": {"strict": False}}})
            assert config.get("pymapper.mapping.strict") == "true"
        finally:
            del os.environ["PYMAPPER_MAPPING_STRICT"]

    def test_env_var_reaches_section(self, monkeypatch):
        monkeypatch.setenv("PYMAPPER_MAPPING_MAX_DEPTH", "5")
        config = Config({"pymapper": {"mapping": {"strict": True}}})
        assert config.get_section("pymapper.mapping") == {"strict": True, "max_depth": "5"}


class TestProfiles:
    def test_profile_overlay_wins(self, tmp_path):
        base = tmp_path / "pymapper.yaml"
        base.write_text("pymapper:\n  mapping:\n    strict: false\n    max_depth: 10\n")
        (tmp_path / "pymapper-dev.yaml").write_text("pymapper:\n  mapping:\n    strict: true\n")

        config = Config.from_file(base, active_profiles=["dev"])

        assert config.get("pymapper.mapping.strict") is True
        assert config.get("pymapper.mapping.max_depth") == 10

    def test_missing_profile_file_is_skipped(self, tmp_path):
        base = tmp_path / "pymapper.yaml"
        base.write_text("app:\n  name: test\n")

        config = Config.from_file(base, active_profiles=["nonexistent"])
        assert config.get("app.name") == "test"


class TestBind:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="limits")
        @dataclass
        class Limits:
            depth: int = 5
            strict: bool = False

        config = Config({"limits": {"depth": "20", "strict": "yes"}})
        limits = config.bind(Limits)
        assert limits.depth == 20
        assert limits.strict is True

    def test_bind_to_pydantic_model(self):
        @config_properties(prefix="limits")
        class Limits(BaseModel):
            depth: int = Field(default=5, ge=1)

        assert Config({"limits": {"depth": "7"}}).bind(Limits).depth == 7

    def test_pydantic_validation_error_becomes_value_error(self):
        @config_properties(prefix="limits")
        class Limits(BaseModel):
            depth: int = Field(default=5, ge=1)

        with pytest.raises(ValueError, match="Configuration validation failed"):
            Config({"limits": {"depth": 0}}).bind(Limits)

    def test_undecorated_class_is_rejected(self):
        class Plain(BaseModel):
            depth: int = 5

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)


class TestPlaceholders:
    def test_resolve_env_var(self, monkeypatch):
        monkeypatch.setenv("MAX_DEPTH", "9")
        config = Config({"pymapper": {"mapping": {"max_depth": "${MAX_DEPTH}"}}})
        assert config.get("pymapper.mapping.max_depth") == "9"

    def test_resolve_config_reference(self):
        config = Config({"defaults": {"depth": 3}, "depth": "${defaults.depth}"})
        assert config.get("depth") == "3"

    def test_resolve_with_default(self):
        config = Config({"key": "${PYMAPPER_TEST_MISSING_VAR:fallback}"})
        assert config.get("key") == "fallback"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"key": "${PYMAPPER_TEST_MISSING_VAR}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("key")

    def test_circular_reference_is_detected(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError, match="circular"):
            config.get("a")
