# earthproxy/services/classifier.py
from typing import Optional, Sequence, Tuple

from .range_model import Indicator

UNKNOWN = "Unknown"

# (umbral, etiqueta) en orden; gana la primera comparación estricta que se cumpla
VEGETATION_BANDS: Sequence[Tuple[float, str]] = (
    (0.7, "Excellent"),
    (0.5, "Good"),
    (0.3, "Moderate"),
    (0.1, "Poor"),
)
VEGETATION_FLOOR = "Very Poor"

TEMPERATURE_BANDS: Sequence[Tuple[float, str]] = (
    (35.0, "Very Hot"),
    (30.0, "Hot"),
    (25.0, "Warm"),
    (15.0, "Moderate"),
    (5.0, "Cool"),
)
TEMPERATURE_FLOOR = "Cold"

DROUGHT_BANDS: Sequence[Tuple[float, str]] = (
    (2.0, "High risk"),
    (4.0, "Moderate risk"),
)
DROUGHT_CEILING = "Low risk"


def _above(value: Optional[float], bands, default: str) -> str:
    if value is None:
        return UNKNOWN
    for threshold, label in bands:
        if value > threshold:
            return label
    return default

def _below(value: Optional[float], bands, default: str) -> str:
    if value is None:
        return UNKNOWN
    for threshold, label in bands:
        if value < threshold:
            return label
    return default


def vegetation_status(ndvi: Optional[float]) -> str:
    return _above(ndvi, VEGETATION_BANDS, VEGETATION_FLOOR)

def temperature_status(lst_c: Optional[float]) -> str:
    return _above(lst_c, TEMPERATURE_BANDS, TEMPERATURE_FLOOR)

def drought_risk(et_mm_day: Optional[float]) -> str:
    """ET baja = más riesgo de sequía."""
    return _below(et_mm_day, DROUGHT_BANDS, DROUGHT_CEILING)


_CLASSIFIERS = {
    Indicator.NDVI: vegetation_status,
    Indicator.LST: temperature_status,
    Indicator.ET: drought_risk,
}

def classify(indicator: Indicator, value: Optional[float]) -> str:
    return _CLASSIFIERS[Indicator(indicator)](value)
