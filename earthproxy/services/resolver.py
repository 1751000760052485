# earthproxy/services/resolver.py
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

import numpy as np

from ..schemas.common import Location
from . import range_model
from .external import ExternalSource, FetchOutcome, Failure, Success, Unavailable
from .range_model import Indicator

logger = logging.getLogger(__name__)


class Provenance(str, Enum):
    # orden: de más a menos autoritativa
    SATELLITE = "NASA MODIS/VIIRS Satellite Data"
    MODEL = "NASA MODIS Agricultural Model"
    FALLBACK = "Fallback Agricultural Model"

    @property
    def rank(self) -> int:
        return _RANK[self]

_RANK = {p: i for i, p in enumerate(Provenance)}

def least_authoritative(provenances: Iterable[Provenance]) -> Provenance:
    return max(provenances, key=lambda p: p.rank)


@dataclass(frozen=True)
class Reading:
    indicator: Indicator
    value: float
    provenance: Provenance


class SourceResolver:
    """
    Cadena de respaldo por indicador: fuente externa (si hay API key) → modelo de rangos.
    """

    def __init__(self, source: Optional[ExternalSource], api_key: Optional[str], timeout_s: float = 10.0):
        self.source = source
        self.api_key = api_key
        self.timeout_s = timeout_s

    @property
    def external_enabled(self) -> bool:
        return bool(self.api_key) and self.source is not None

    async def _attempt(self, indicator: Indicator, location: Location, when: datetime) -> FetchOutcome:
        try:
            return await asyncio.wait_for(self.source.fetch(indicator, location, when), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            return Failure(f"timeout after {self.timeout_s}s")
        except Exception as ex:
            return Failure(f"{type(ex).__name__}: {ex}")

    async def resolve(self, indicator: Indicator, location: Location, when: datetime, rng: np.random.Generator) -> Reading:
        outcome: FetchOutcome = Unavailable()
        if self.external_enabled:
            outcome = await self._attempt(indicator, location, when)

        if isinstance(outcome, Success):
            return Reading(indicator, float(outcome.value), Provenance.SATELLITE)
        if isinstance(outcome, Failure):
            logger.warning("External %s fetch failed for (%s, %s), using model: %s",
                           indicator.value, location.lat, location.lon, outcome.reason)

        value = range_model.estimate(indicator, location.lat, location.lon, when.month, rng)
        return Reading(indicator, value, Provenance.MODEL)
