"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from roadviz.config import AppConfig, ImportConfig, RenderConfig, get_config, reset_config


def test_defaults():
    config = AppConfig()

    assert config.importer.vertex_id_column == "vert_id"
    assert config.importer.analysis_period == 1.0
    assert config.render.format == "PNG"
    assert config.render.width_cm == 14.0
    assert config.render.height_cm == 14.0
    assert config.render.period == 1.0
    assert config.render.draw_intermediates is False
    assert config.render.band_step_percent == 20


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ROADVIZ_RENDER_FORMAT", "PDF")
    monkeypatch.setenv("ROADVIZ_RENDER_DRAW_INTERMEDIATES", "true")
    monkeypatch.setenv("ROADVIZ_IMPORT_ANALYSIS_PERIOD", "2.5")

    assert RenderConfig().format == "PDF"
    assert RenderConfig().draw_intermediates is True
    assert ImportConfig().analysis_period == 2.5


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        ImportConfig(analysis_period=0)
    with pytest.raises(ValidationError):
        RenderConfig(width_cm=-1)


def test_get_config_is_cached():
    first = get_config()

    assert get_config() is first
    reset_config()
    assert get_config() is not first
