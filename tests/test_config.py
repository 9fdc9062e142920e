"""Tests for settings and logging setup."""

import pytest
import structlog
from pydantic import ValidationError
from py_hexagrid.config import Settings, configure_logging
from py_hexagrid.core.hexagrid import HexagridConfig, generate_from_settings


class TestSettings:
    """Test environment driven settings."""

    def test_defaults(self):
        config = Settings()
        assert config.default_side_size == 8
        assert config.search_iteration_count == 100
        assert config.force_circle_shape is False
        assert config.log_format == "json"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("HEXAGRID_SEARCH_ITERATION_COUNT", "7")
        monkeypatch.setenv("HEXAGRID_FORCE_CIRCLE_SHAPE", "true")

        config = Settings()
        assert config.search_iteration_count == 7
        assert config.force_circle_shape is True

    def test_invalid_budget(self, monkeypatch):
        monkeypatch.setenv("HEXAGRID_SEARCH_ITERATION_COUNT", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_side_size(self):
        with pytest.raises(ValidationError):
            Settings(default_side_size=1)


class TestFromSettings:
    """Test building meshes from settings."""

    def test_config_from_settings(self):
        config = HexagridConfig.from_settings(
            Settings(default_side_size=5, search_iteration_count=12, force_circle_shape=True)
        )
        assert config == HexagridConfig(5, 12, True)

    def test_side_size_override(self):
        config = HexagridConfig.from_settings(Settings(default_side_size=5), side_size=3)
        assert config.side_size == 3

    def test_generate_with_default_seed(self):
        config = Settings(default_side_size=3, search_iteration_count=15, default_seed="settings")
        grid1 = generate_from_settings(config=config)
        grid2 = generate_from_settings(config=config)

        assert grid1.side_size == 3
        assert grid1.quads == grid2.quads


class TestLogging:
    """Test logging configuration."""

    @pytest.mark.parametrize("log_format", ["json", "plain"])
    def test_configure_logging(self, log_format):
        configure_logging(Settings(log_format=log_format, log_level="DEBUG"))
        structlog.get_logger().info("configured", log_format=log_format)
        structlog.reset_defaults()
