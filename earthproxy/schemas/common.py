from pydantic import BaseModel, ConfigDict, Field

class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

class DataSource(BaseModel):
    name: str
    url: str
    note: str | None = None
    auth_required: bool = False
    indicator: str | None = None

class DataBundle(BaseModel):
    location: Location
    timestamp: str
    sources: list[DataSource]
