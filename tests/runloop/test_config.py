"""Tests for runloop configuration."""

import dataclasses
import math
import os
from unittest.mock import patch

import pytest

from daemonizable.runloop.config import DEFAULT_TIMEOUT, RunloopConfig
from daemonizable.runloop.errors import ConfigurationError


class TestRunloopConfig:
    """Tests for RunloopConfig."""

    def test_default_values(self):
        """Test that defaults are sensible."""
        config = RunloopConfig()
        assert config.iteration_timeout == DEFAULT_TIMEOUT == 5
        assert config.run_once is False
        assert config.detect_leaks is False

    def test_frozen(self):
        """Test that config cannot change after construction."""
        config = RunloopConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.run_once = True

    @pytest.mark.parametrize("timeout", [-1, -0.5, -0.0, math.nan, math.inf, -math.inf])
    def test_rejects_invalid_timeout(self, timeout):
        """Test negative and non-finite timeouts are rejected at construction."""
        with pytest.raises(ConfigurationError):
            RunloopConfig(iteration_timeout=timeout)

    def test_accepts_zero_timeout(self):
        assert RunloopConfig(iteration_timeout=0).iteration_timeout == 0

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            RunloopConfig(iteration_timeout=-1)

    def test_from_env_defaults(self):
        """Test loading from environment with defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = RunloopConfig.from_env()
            assert config == RunloopConfig()

    def test_from_env_with_overrides(self):
        """Test loading from environment variables."""
        env = {
            "DAEMONIZABLE_TIMEOUT": "1.5",
            "DAEMONIZABLE_RUN_ONCE": "true",
            "DAEMONIZABLE_DETECT_LEAKS": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            config = RunloopConfig.from_env()
            assert config.iteration_timeout == 1.5
            assert config.run_once is True
            assert config.detect_leaks is True

    def test_from_env_invalid_timeout_uses_default(self):
        with patch.dict(os.environ, {"DAEMONIZABLE_TIMEOUT": "soon"}, clear=True):
            assert RunloopConfig.from_env().iteration_timeout == DEFAULT_TIMEOUT

    def test_explicit_timeout_beats_env(self):
        with patch.dict(os.environ, {"DAEMONIZABLE_TIMEOUT": "9"}, clear=True):
            config = RunloopConfig.from_env(iteration_timeout=0.25)
            assert config.iteration_timeout == 0.25

    def test_explicit_flags(self):
        with patch.dict(os.environ, {}, clear=True):
            config = RunloopConfig.from_env(run_once=True, detect_leaks=True)
            assert config.run_once is True
            assert config.detect_leaks is True

    def test_negative_env_timeout_rejected(self):
        with patch.dict(os.environ, {"DAEMONIZABLE_TIMEOUT": "-2"}, clear=True):
            with pytest.raises(ConfigurationError):
                RunloopConfig.from_env()

    def test_mode_display(self):
        assert RunloopConfig().mode_display() == "Endless"
        assert RunloopConfig(run_once=True).mode_display() == "Run-once"
        assert (
            RunloopConfig(detect_leaks=True).mode_display() == "Endless + Leak detection"
        )
