# earthproxy/services/range_model.py
"""
Modelo de rangos por zona climática y estación.

Sustituye a la fuente satelital cuando no hay datos: cada indicador se estima
a partir de la latitud (banda climática) y del mes (estación por hemisferio),
con ruido aleatorio tomado de un ``numpy.random.Generator`` que inyecta quien
llama. Con el mismo generador sembrado, los valores son reproducibles.
"""
from enum import Enum

import numpy as np

TROPIC_LAT = 23.5
TEMPERATE_LAT = 50.0

# rangos uniformes de NDVI base por zona
NDVI_BASELINE = {
    "tropical": (0.6, 0.9),
    "temperate": (0.4, 0.8),
    "polar": (0.1, 0.4),
}
NDVI_GROWING_FACTOR = 1.2
NDVI_DORMANT_FACTOR = 0.7
NDVI_RANGE = (0.0, 0.95)

LST_EQUATOR_C = 30.0
LST_LAPSE_PER_DEG = 0.6
LST_SEASON_SWING_C = 8.0
LST_NOISE_SD = 3.0

ET_RANGE = (0.5, 8.0)

_NORTH_GROWING = frozenset(range(4, 10))       # abr–sep
_SOUTH_GROWING = frozenset((10, 11, 12, 1, 2, 3))  # oct–mar
_JJA = frozenset((6, 7, 8))
_DJF = frozenset((12, 1, 2))


class Indicator(str, Enum):
    NDVI = "ndvi"
    LST = "land_surface_temperature"
    ET = "evapotranspiration"


def _check_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return month

def _clamp(x: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, x))

def is_northern(lat: float) -> bool:
    # el ecuador cuenta como hemisferio norte
    return lat >= 0

def climate_zone(lat: float) -> str:
    a = abs(lat)
    if a < TROPIC_LAT:
        return "tropical"
    if a < TEMPERATE_LAT:
        return "temperate"
    return "polar"

def in_growing_season(lat: float, month: int) -> bool:
    _check_month(month)
    return month in (_NORTH_GROWING if is_northern(lat) else _SOUTH_GROWING)

def seasonal_temperature_offset(lat: float, month: int) -> float:
    _check_month(month)
    summer, winter = (_JJA, _DJF) if is_northern(lat) else (_DJF, _JJA)
    if month in summer:
        return LST_SEASON_SWING_C
    if month in winter:
        return -LST_SEASON_SWING_C
    return 0.0


def vegetation_baseline(lat: float, month: int, rng: np.random.Generator) -> float:
    """NDVI antes del recorte: uniforme por zona × factor estacional."""
    lo, hi = NDVI_BASELINE[climate_zone(lat)]
    base = float(rng.uniform(lo, hi))
    factor = NDVI_GROWING_FACTOR if in_growing_season(lat, month) else NDVI_DORMANT_FACTOR
    return base * factor

def vegetation_index(lat: float, lon: float, month: int, rng: np.random.Generator) -> float:
    return _clamp(vegetation_baseline(lat, month, rng), *NDVI_RANGE)

def land_surface_temperature(lat: float, lon: float, month: int, rng: np.random.Generator) -> float:
    """LST (°C) con gradiente latitudinal, ajuste estacional y ruido gaussiano; 1 decimal, sin recorte."""
    t = LST_EQUATOR_C - abs(lat) * LST_LAPSE_PER_DEG
    t += seasonal_temperature_offset(lat, month)
    t += float(rng.normal(0.0, LST_NOISE_SD))
    return round(t, 1)

def evapotranspiration(lat: float, lon: float, month: int, rng: np.random.Generator) -> float:
    """
    ET (mm/día) a partir de LST y NDVI sorteados de nuevo (no los de la respuesta).
    """
    lst = land_surface_temperature(lat, lon, month, rng)
    ndvi = vegetation_index(lat, lon, month, rng)
    et = lst * 0.15 + ndvi * 4.0 + float(rng.standard_normal())
    return _clamp(et, *ET_RANGE)


_MODELS = {
    Indicator.NDVI: vegetation_index,
    Indicator.LST: land_surface_temperature,
    Indicator.ET: evapotranspiration,
}

def estimate(indicator: Indicator, lat: float, lon: float, month: int, rng: np.random.Generator) -> float:
    return _MODELS[Indicator(indicator)](lat, lon, month, rng)
