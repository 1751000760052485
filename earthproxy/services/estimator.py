# earthproxy/services/estimator.py
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import numpy as np
from pydantic.alias_generators import to_camel

from ..core.config import settings
from ..schemas.common import Location
from ..schemas.earthdata import EarthDataResponse
from ..utils.time import iso_utc
from . import range_model
from .external import GibsNdviSource
from .range_model import Indicator
from .resolver import Provenance, Reading, SourceResolver, least_authoritative

logger = logging.getLogger(__name__)

RngFactory = Callable[[Optional[int]], np.random.Generator]
Clock = Callable[[], datetime]

# orden fijo de sorteo: con la misma semilla, la misma respuesta
INDICATOR_ORDER = (Indicator.NDVI, Indicator.LST, Indicator.ET)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Estimator:
    """
    Punto de entrada de la estimación: resuelve los tres indicadores y arma la
    respuesta. Para una coordenada válida nunca propaga errores; si algo falla
    en la cadena de resolución, rehace todo con el modelo de rangos.
    """

    def __init__(self, resolver: SourceResolver, rng_factory: RngFactory = np.random.default_rng, clock: Clock = _utcnow):
        self.resolver = resolver
        self.rng_factory = rng_factory
        self.clock = clock

    def _build(self, location: Location, readings: list[Reading], data_source: Provenance, now: datetime) -> EarthDataResponse:
        values = {r.indicator: r.value for r in readings}
        return EarthDataResponse(
            latitude=location.lat,
            longitude=location.lon,
            ndvi=values.get(Indicator.NDVI),
            land_surface_temperature=values.get(Indicator.LST),
            evapotranspiration=values.get(Indicator.ET),
            timestamp=iso_utc(now),
            data_source=data_source.value,
            provenance={to_camel(r.indicator.value): r.provenance.value for r in readings},
        )

    async def estimate(self, location: Location, when: Optional[datetime] = None, seed: Optional[int] = None) -> EarthDataResponse:
        now = self.clock()
        when = when or now
        logger.info("Estimating EarthData for (%s, %s) month=%s", location.lat, location.lon, when.month)

        try:
            rng = self.rng_factory(seed)
            readings = [await self.resolver.resolve(ind, location, when, rng) for ind in INDICATOR_ORDER]
            result = self._build(location, readings, least_authoritative(r.provenance for r in readings), now)
        except Exception:
            logger.exception("EarthData estimation failed for (%s, %s), using fallback model", location.lat, location.lon)
            return self.estimate_fallback(location, when, seed, now=now)

        logger.info("EarthData for (%s, %s) from %s", location.lat, location.lon, result.data_source)
        return result

    def estimate_fallback(self, location: Location, when: Optional[datetime] = None, seed: Optional[int] = None, now: Optional[datetime] = None) -> EarthDataResponse:
        """Respuesta completa solo con el modelo de rangos (sin fuente externa)."""
        now = now or self.clock()
        when = when or now
        rng = np.random.default_rng(seed)
        readings = [
            Reading(ind, range_model.estimate(ind, location.lat, location.lon, when.month, rng), Provenance.FALLBACK)
            for ind in INDICATOR_ORDER
        ]
        return self._build(location, readings, Provenance.FALLBACK, now)


def build_estimator() -> Estimator:
    resolver = SourceResolver(GibsNdviSource(), settings.nasa_api_key, settings.external_timeout_s)
    return Estimator(resolver)
