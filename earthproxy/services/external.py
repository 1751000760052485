# earthproxy/services/external.py
"""
Capacidad de fuente externa (satélite) por indicador.

Un ``ExternalSource`` devuelve siempre un ``FetchOutcome``:
  - ``Unavailable``: la fuente no tiene dato (o no está implementada)
  - ``Success(value)``: valor real del satélite
  - ``Failure(reason)``: error al consultar

Así una integración real puede sustituir al stub sin tocar el resolver.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Union

from ..schemas.common import Location
from .gibs_worldview import ndvi_wmts_url
from .range_model import Indicator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unavailable:
    pass

@dataclass(frozen=True)
class Success:
    value: float

@dataclass(frozen=True)
class Failure:
    reason: str

FetchOutcome = Union[Unavailable, Success, Failure]


class ExternalSource(Protocol):
    async def fetch(self, indicator: Indicator, location: Location, when: datetime) -> FetchOutcome:
        ...


class GibsNdviSource:
    """
    Punto de integración con GIBS (MODIS Terra NDVI 8 días).

    Construye la URL de la tesela WMTS y la registra, pero no descarga nada:
    falta convertir lat/lon a fila/columna de tesela y leer el píxel.
    Para LST y ET no hay integración, así que también devuelve ``Unavailable``.
    """

    async def fetch(self, indicator: Indicator, location: Location, when: datetime) -> FetchOutcome:
        if indicator is not Indicator.NDVI:
            return Unavailable()
        url = ndvi_wmts_url(when)
        logger.info("Would fetch NASA NDVI tile for (%s, %s) from %s", location.lat, location.lon, url)
        return Unavailable()
