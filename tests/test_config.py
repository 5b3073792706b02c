"""Tests for YAML configuration and logging helpers."""

import logging

import pytest

from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled
from constants import Constants, _load_yaml_config, apply_config


@pytest.fixture
def restore_constants(monkeypatch):
    """Let tests change Constants and undo it afterwards."""
    for name in ("ALLOW_ENUMERATION", "INCLUDE_SPECIAL_FRAMEWORKS", "ENUMERATION_MAX_WORKERS", "LOG_LEVEL"):
        monkeypatch.setattr(Constants, name, getattr(Constants, name))
    monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", [])
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)


class TestLoadConfig:
    """Test locating and reading the YAML file."""

    def test_explicit_path(self, tmp_path, restore_constants):
        """Test an explicit path is read."""
        path = tmp_path / "cfg.yml"
        path.write_text("analysis:\n  max_workers: 8\n", encoding="utf-8")
        assert _load_yaml_config(str(path)) == {"analysis": {"max_workers": 8}}

    def test_environment_variable(self, tmp_path, monkeypatch, restore_constants):
        """Test the environment variable names the config file."""
        path = tmp_path / "env.yml"
        path.write_text("logging:\n  level: warning\n", encoding="utf-8")
        monkeypatch.setenv(Constants.ENV_CONFIG, str(path))
        assert _load_yaml_config() == {"logging": {"level": "warning"}}

    def test_missing_file(self, tmp_path, restore_constants):
        """Test a missing file yields an empty config."""
        assert _load_yaml_config(str(tmp_path / "absent.yml")) == {}

    def test_invalid_yaml_is_skipped(self, tmp_path, restore_constants, caplog):
        """Test unreadable YAML is logged and skipped."""
        path = tmp_path / "bad.yml"
        path.write_text("analysis: [unclosed\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert _load_yaml_config(str(path)) == {}
        assert "Couldn't read config file" in caplog.text

    def test_non_mapping_is_ignored(self, tmp_path, restore_constants):
        """Test a top level list is not a config."""
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert _load_yaml_config(str(path)) == {}


class TestApplyConfig:
    """Test applying config values onto Constants."""

    def test_applies_known_keys(self, restore_constants):
        """Test analysis and logging keys update Constants."""
        apply_config({
            "analysis": {"allow_enumeration": True, "include_special_frameworks": True, "max_workers": 2},
            "logging": {"level": "debug"},
        })
        assert Constants.ALLOW_ENUMERATION is True
        assert Constants.INCLUDE_SPECIAL_FRAMEWORKS is True
        assert Constants.ENUMERATION_MAX_WORKERS == 2
        assert Constants.LOG_LEVEL == "DEBUG"

    def test_invalid_workers_ignored(self, restore_constants):
        """Test a non-numeric worker count is ignored and low counts are clamped."""
        before = Constants.ENUMERATION_MAX_WORKERS
        apply_config({"analysis": {"max_workers": "many"}})
        assert Constants.ENUMERATION_MAX_WORKERS == before
        apply_config({"analysis": {"max_workers": 0}})
        assert Constants.ENUMERATION_MAX_WORKERS == 1

    def test_unknown_keys_ignored(self, restore_constants):
        """Test unknown sections leave Constants alone."""
        before = Constants.ALLOW_ENUMERATION
        apply_config({"other": {"allow_enumeration": not before}, "analysis": "nope"})
        assert Constants.ALLOW_ENUMERATION == before


class TestLoggingUtils:
    """Test the logging helpers."""

    def test_extra_context_drops_none(self):
        """Test unset fields are omitted."""
        assert extra_context(event="scan", target=None, count=0) == {"event": "scan", "count": 0}

    def test_is_debug_enabled(self):
        """Test the debug check follows the logger level."""
        logger = logging.getLogger("compatfinder.test.debug")
        logger.setLevel(logging.INFO)
        assert not is_debug_enabled(logger)
        logger.setLevel(logging.DEBUG)
        assert is_debug_enabled(logger)

    def test_configure_logging_level(self, monkeypatch):
        """Test an explicit level wins over the environment."""
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "ERROR")
        configure_logging("warning")
        assert root.level == logging.WARNING
        configure_logging()
        assert root.level == logging.ERROR

    def test_timer(self):
        """Test the timer reports non-negative durations."""
        with Timer() as timer:
            pass
        assert timer.duration_ms() >= 0
        assert timer.duration_sec() == timer.duration_ms() / 1000.0
        assert Timer().duration_ms() == 0
