from datetime import datetime, timedelta

from ..core.config import settings
from ..utils.geo import point_bbox
from ..schemas.common import DataSource, Location
from .range_model import Indicator

NDVI_LAYER = "MODIS_Terra_NDVI_8Day"
LST_LAYER = "MODIS_Terra_Land_Surface_Temp_Day"

def ndvi_composite_date(when: datetime) -> datetime:
    # MODIS publica compuestos de 16 días; se pide el último cerrado
    return when - timedelta(days=settings.ndvi_composite_lag_days)

def ndvi_wmts_url(when: datetime) -> str:
    dt = ndvi_composite_date(when)
    # {TileMatrix}/{TileRow}/{TileCol} quedan como plantilla: no se hace cálculo de teselas
    return (
        f"{settings.gibs_wmts_base}/{NDVI_LAYER}/default/{dt.strftime('%Y-%m-%d')}"
        "/250m/{TileMatrix}/{TileRow}/{TileCol}.png"
    )

def ndvi_tile_source(when: datetime) -> DataSource:
    return DataSource(
        name=f"GIBS WMTS {NDVI_LAYER}",
        url=ndvi_wmts_url(when),
        note="Tesela PNG (250m); requiere conversión lat/lon→tesela y decodificación de píxel.",
        auth_required=False,
        indicator=Indicator.NDVI.value,
    )

def lst_snapshot(lat: float, lon: float, when: datetime) -> DataSource:
    bbox = point_bbox(lat, lon, settings.snapshot_half_deg)
    size = settings.snapshot_size_px
    url = (
        f"{settings.worldview_base}?REQUEST=GetSnapshot"
        f"&TIME={when.strftime('%Y-%m-%d')}"
        f"&BBOX={bbox.south},{bbox.west},{bbox.north},{bbox.east}"
        f"&CRS=EPSG:4326&LAYERS={LST_LAYER}&FORMAT=image/geotiff&WIDTH={size}&HEIGHT={size}"
    )
    return DataSource(
        name=f"GIBS Worldview {LST_LAYER}",
        url=url,
        note="GeoTIFF vía Worldview Snapshots; descarga directa sin autenticación.",
        auth_required=False,
        indicator=Indicator.LST.value,
    )

def openet_source(lat: float, lon: float, when: datetime) -> DataSource:
    return DataSource(
        name="OpenET point timeseries",
        url=f"{settings.openet_base}/raster/timeseries/point?lat={lat}&lon={lon}&date={when.strftime('%Y-%m-%d')}",
        note="ET diaria (mm/día); requiere API key de OpenET.",
        auth_required=True,
        indicator=Indicator.ET.value,
    )

def integration_sources(location: Location, when: datetime) -> list[DataSource]:
    """Fuentes satelitales previstas por indicador (solo URLs, sin llamadas de red)."""
    return [
        ndvi_tile_source(when),
        lst_snapshot(location.lat, location.lon, when),
        openet_source(location.lat, location.lon, when),
    ]
