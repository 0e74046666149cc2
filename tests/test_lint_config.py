"""
Tests for guidelint.config
"""

import pytest

from guidelint.config import (
    DEFAULT_INDEX_NAMES,
    ConfigError,
    LintConfig,
    apply_env_overrides,
)


class TestLintConfig:
    """Tests for LintConfig."""

    def test_defaults(self):
        config = LintConfig()

        assert config.fail_on == "error"
        assert config.output_format == "text"
        assert config.index_names == DEFAULT_INDEX_NAMES
        assert config.first_heading_level == 1
        assert config.near_duplicate_threshold == 0.8
        assert config.recursive is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"fail_on": "fatal"},
            {"output_format": "xml"},
            {"first_heading_level": 7},
            {"near_duplicate_threshold": 0.0},
            {"shingle_size": 0},
            {"severity_overrides": {"GL001": "loud"}},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            LintConfig(**kwargs)

    def test_round_trip(self):
        config = LintConfig(select=["GL00"], ignore=["GL004"], fail_on="warning")

        assert LintConfig.from_dict(config.to_dict()) == config

    def test_from_dict_comma_lists(self):
        config = LintConfig.from_dict({"select": "GL001, GL002", "index_names": "GUIDES.md"})

        assert config.select == ["GL001", "GL002"]
        assert config.index_names == ["GUIDES.md"]

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour"):
            LintConfig.from_dict({"colour": "red"})

    def test_from_dict_bad_type(self):
        with pytest.raises(ConfigError, match="Invalid configuration value"):
            LintConfig.from_dict({"first_heading_level": "two"})

    def test_merge_skips_none(self):
        config = LintConfig(fail_on="warning").merge(fail_on=None, output_format="json")

        assert config.fail_on == "warning"
        assert config.output_format == "json"


class TestEnvOverrides:
    """Tests for GUIDELINT_* environment overrides."""

    def test_no_env(self):
        config = apply_env_overrides(LintConfig(), environ={})

        assert config == LintConfig()

    def test_overrides(self):
        env = {
            "GUIDELINT_FORMAT": "json",
            "GUIDELINT_FAIL_ON": "info",
            "GUIDELINT_SELECT": "GL001,GL006",
            "GUIDELINT_IGNORE": "GL010",
        }

        config = apply_env_overrides(LintConfig(), environ=env)

        assert config.output_format == "json"
        assert config.fail_on == "info"
        assert config.select == ["GL001", "GL006"]
        assert config.ignore == ["GL010"]

    def test_invalid_env_value(self):
        with pytest.raises(ConfigError):
            apply_env_overrides(LintConfig(), environ={"GUIDELINT_FAIL_ON": "sometimes"})
