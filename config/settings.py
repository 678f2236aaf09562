# epidash/config/settings.py
#
# Centralized Application Configuration
# This file defines the entire application's configuration using Pydantic for
# validation and type safety. It loads settings from environment variables or
# a .env file once at startup; nothing here is re-read at runtime.

import logging
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Define Project Root ---
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# --- Logger for Settings Module ---
settings_logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# 1. NESTED CONFIGURATION MODELS
# -----------------------------------------------------------------------------

class AppConfig(BaseModel):
    """Core application metadata and operational settings."""
    name: str = "EpiDash"
    version: str = "1.0.0"
    organization_name: str = "Epidemiological Surveillance Unit"
    support_contact: str = "support@epidemiological-data.com"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: str = "%(asctime)s - %(name)s.%(funcName)s - %(levelname)s - %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"


class DirectoryConfig(BaseModel):
    """Key directory paths."""
    root: Path = PROJECT_ROOT
    assets: Path = root / "assets"


class ApiConfig(BaseModel):
    """Remote query endpoint. Only `base_url` is expected to vary per deployment."""
    base_url: str = "https://api.epidemiological-data.com"
    timeout_seconds: float = 10.0
    use_mock: bool = True


class DomainConfig(BaseModel):
    """Fixed categorical domains used by filters and the mock generator."""
    states: List[str] = ["Delhi", "Maharashtra", "Karnataka", "Tamil Nadu", "Gujarat", "Rajasthan"]
    diseases: List[str] = ["Dengue", "Malaria", "Chikungunya", "H1N1", "Typhoid", "Hepatitis"]
    weeks: List[str] = ["2024-W01", "2024-W02", "2024-W03", "2024-W04", "2024-W05"]

    dashboard_default_week: str = "2024-W05"
    climate_default_disease: str = "Dengue"


class ThemeConfig(BaseModel):
    """Centralizes all color and theme information for UI and plots."""
    primary: str = "#0088FE"
    background: str = "#F0F2F6"
    secondary_background: str = "#FFFFFF"
    text: str = "#263238"

    temperature: str = "#ef4444"
    precipitation: str = "#3b82f6"
    vegetation: str = "#22c55e"
    cases: str = "#10b981"
    cases_alt: str = "#8b5cf6"

    @computed_field
    @property
    def plotly_colorway(self) -> List[str]:
        """Defines the default categorical color sequence for Plotly charts."""
        return ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8"]


class MapConfig(BaseModel):
    """Outbreak map defaults (centered on India)."""
    default_center_lat: float = 20.5937
    default_center_lon: float = 78.9629
    default_zoom: float = 4.5
    open_style: str = "carto-positron"
    mapbox_style: str = "light"


# -----------------------------------------------------------------------------
# 2. MAIN SETTINGS CLASS
# -----------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Main settings class for the EpiDash application.
    Aggregates all configuration models and loads from environment variables,
    e.g. EPIDASH_API__BASE_URL or EPIDASH_API__USE_MOCK=false.
    """
    model_config = SettingsConfigDict(
        env_prefix='EPIDASH_',
        case_sensitive=False,
        env_nested_delimiter='__',
        env_file=f"{PROJECT_ROOT}/.env",
        extra='ignore'
    )

    # --- Nested Configuration Models ---
    app: AppConfig = Field(default_factory=AppConfig)
    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    domains: DomainConfig = Field(default_factory=DomainConfig)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    map: MapConfig = Field(default_factory=MapConfig)

    # Will automatically load EPIDASH_MAPBOX_TOKEN from environment/.env
    mapbox_token: Optional[str] = None

    # --- Asset Paths ---
    style_css_path: Path = DirectoryConfig().assets / "style.css"

    @computed_field
    @property
    def app_footer_text(self) -> str:
        """Generates the application footer text dynamically."""
        from datetime import datetime
        return f"© {datetime.now().year} {self.app.organization_name}. All Rights Reserved."

# -----------------------------------------------------------------------------
# 3. SINGLETON INSTANCE
# -----------------------------------------------------------------------------

try:
    settings = Settings()
    settings_logger.info(
        f"Settings loaded for '{settings.app.name}' v{settings.app.version}. "
        f"LOG_LEVEL={settings.app.log_level}. DATA_SOURCE="
        f"{'mock' if settings.api.use_mock else settings.api.base_url}"
    )
    if not settings.mapbox_token:
        settings_logger.warning(
            "Mapbox token not found. Set 'EPIDASH_MAPBOX_TOKEN' in your environment or .env file. "
            "Maps will use a basic, open-source style."
        )
except Exception as e:
    settings_logger.critical(f"FATAL: Could not initialize application settings. Error: {e}", exc_info=True)
    raise
