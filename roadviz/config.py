"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the importer, renderer
and logging defaults.

Configuration can be overridden via environment variables:
- ROADVIZ_IMPORT_ANALYSIS_PERIOD=2.0
- ROADVIZ_RENDER_FORMAT=PDF
- ROADVIZ_RENDER_DRAW_INTERMEDIATES=true
- ROADVIZ_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImportConfig(BaseSettings):
    """Tabular graph import configuration.

    Environment variables prefixed with ROADVIZ_IMPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADVIZ_IMPORT_")

    vertices_file: str = "vertices.csv"
    edges_file: str = "edges.csv"
    vertex_id_column: str = "vert_id"
    # Raw capacities are vehicles per analysis period (hours).
    analysis_period: float = Field(default=1.0, gt=0)


class RenderConfig(BaseSettings):
    """Rendering configuration.

    Environment variables prefixed with ROADVIZ_RENDER_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADVIZ_RENDER_")

    format: str = "PNG"
    width_cm: float = Field(default=14.0, gt=0)
    height_cm: float = Field(default=14.0, gt=0)
    dpi: int = Field(default=300, gt=0)
    # Analysis period in hours used to scale capacities to flow volumes.
    period: float = Field(default=1.0, gt=0)
    draw_intermediates: bool = False
    very_thin_line_width: float = Field(default=0.1, gt=0)
    thin_line_width: float = Field(default=0.25, gt=0)
    band_step_percent: int = Field(default=20, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with ROADVIZ_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADVIZ_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.render.format)
        print(config.importer.analysis_period)

    Environment variables prefixed with ROADVIZ_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADVIZ_")

    importer: ImportConfig = Field(default_factory=ImportConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    output_dir: Path = Field(default_factory=Path.cwd)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
