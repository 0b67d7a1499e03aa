"""
Configuration management for GA Hull.

Loads settings from gahull.yaml and environment variables.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class RegionThresholds(BaseModel):
    """Aspect-ratio rules for mapping page regions to views."""

    side_min_aspect: float = 3.5
    top_min_aspect: float = 1.6
    body_min_aspect: float = 0.6
    body_max_aspect: float = 1.6


class RoleThresholds(BaseModel):
    """Per-view geometric rules for contour roles."""

    plan_outline_min_aspect: float = 3.0
    sheer_max_height_fraction: float = 0.10
    keel_min_width_fraction: float = 0.50
    keel_min_top_fraction: float = 0.50
    station_max_aspect: float = 0.5


class TracerConfig(BaseModel):
    """Edge detection and region candidate settings."""

    blur_kernel: int = 5
    canny_low: int = 50
    canny_high: int = 150
    binary_threshold: int = 200
    dilate_iterations: int = 2
    min_area_fraction: float = 0.0005
    min_dimension_fraction: float = 0.05


class SimplifyConfig(BaseModel):
    """Polyline simplification settings."""

    tolerance: float = 1.0
    max_workers: int = 1


class ExportConfig(BaseModel):
    """DXF export settings."""

    scale: float = 1.0
    closure_tolerance: float = 1.5
    acad_version: str = "AC1015"
    insunits: int = 0
    layered_dxf_version: str = "R2010"


class OCRConfig(BaseModel):
    """Tesseract OCR settings."""

    min_confidence: float = 30.0
    psm: int = 11
    keywords: dict[str, list[str]] = Field(
        default_factory=lambda: {
            "top": ["PLAN", "DECK", "TOP"],
            "side": ["PROFILE", "ELEVATION", "SIDE", "OUTBOARD", "INBOARD"],
            "body": ["BODY", "SECTION", "SECTIONS", "STATIONS", "MIDSHIP"],
        }
    )


class IngestConfig(BaseModel):
    """Raster loading settings."""

    pdf_dpi: int = 150


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """
    Main settings class for GA Hull.

    Loads configuration from gahull.yaml and environment variables.
    Values from the config file arrive as init arguments; GAHULL_ environment
    variables take precedence over them.
    """

    model_config = SettingsConfigDict(
        env_prefix="GAHULL_",
        env_nested_delimiter="__",
    )

    region: RegionThresholds = Field(default_factory=RegionThresholds)
    roles: RoleThresholds = Field(default_factory=RoleThresholds)
    tracer: TracerConfig = Field(default_factory=TracerConfig)
    simplify: SimplifyConfig = Field(default_factory=SimplifyConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    ingest: IngestConfig = Field(default_factory=IngestConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_config_file(config_path: Optional[Path] = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Looks for config files in order:
    1. Provided path
    2. gahull.local.yaml (user's local overrides)
    3. gahull.yaml (default config)

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Configuration dictionary
    """
    project_root = Path(__file__).parent.parent.parent
    config_dir = project_root / "config"

    config_files = [
        config_path,
        config_dir / "gahull.local.yaml",
        config_dir / "gahull.yaml",
    ]

    for cfg_file in config_files:
        if cfg_file and cfg_file.exists():
            with open(cfg_file) as f:
                return yaml.safe_load(f) or {}

    return {}


@lru_cache()
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get application settings (cached).

    Args:
        config_path: Optional path to config file

    Returns:
        Settings instance
    """
    config_data = load_config_file(Path(config_path) if config_path else None)
    return Settings(**config_data)


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings, clearing the cache.

    Args:
        config_path: Optional path to config file

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings(config_path)
