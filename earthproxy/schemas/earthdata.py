# earthproxy/schemas/earthdata.py
from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel
from typing import Optional

from ..services import classifier

class EarthDataResponse(BaseModel):
    """
    Respuesta de /api/nasa/earthdata. Las etiquetas de estado se derivan del
    valor numérico en cada serialización; no se pueden asignar por separado.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    latitude: float
    longitude: float
    ndvi: Optional[float] = None
    land_surface_temperature: Optional[float] = Field(None, description="°C")
    evapotranspiration: Optional[float] = Field(None, description="mm/día")
    timestamp: str
    data_source: str
    provenance: dict[str, str] = {}

    @computed_field(alias="vegetationStatus")
    @property
    def vegetation_status(self) -> str:
        return classifier.vegetation_status(self.ndvi)

    @computed_field(alias="temperatureStatus")
    @property
    def temperature_status(self) -> str:
        return classifier.temperature_status(self.land_surface_temperature)

    @computed_field(alias="droughtRisk")
    @property
    def drought_risk(self) -> str:
        return classifier.drought_risk(self.evapotranspiration)
