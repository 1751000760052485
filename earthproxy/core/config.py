# earthproxy/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

class Settings(BaseSettings):
    app_name: str = Field(default="EarthData Proxy API", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Keys
    nasa_api_key: str | None = Field(default=None, alias="NASA_EARTHDATA_API_KEY")

    # External fetch
    external_timeout_s: float = Field(default=10.0, gt=0, alias="EXTERNAL_TIMEOUT_S")
    ndvi_composite_lag_days: int = Field(default=16, ge=0, alias="NDVI_COMPOSITE_LAG_DAYS")
    snapshot_half_deg: float = Field(default=0.2, gt=0, alias="SNAPSHOT_HALF_DEG")
    snapshot_size_px: int = Field(default=512, gt=0, le=8192, alias="SNAPSHOT_SIZE_PX")

    # Bases
    gibs_wmts_base: str = Field(default="https://gibs.earthdata.nasa.gov/wmts/epsg4326/best", alias="GIBS_WMTS_BASE")
    worldview_base: str = Field(default="https://wvs.earthdata.nasa.gov/api/v1/snapshot", alias="WORLDVIEW_BASE")
    openet_base:    str = Field(default="https://openet-api.org", alias="OPENET_BASE")

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[1] / ".env"),  # earthproxy/.env
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

settings = Settings()
