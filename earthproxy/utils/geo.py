from dataclasses import dataclass

@dataclass(frozen=True)
class BBox:
    west: float
    south: float
    east: float
    north: float

def point_bbox(lat: float, lon: float, half_size_deg: float = 0.2) -> BBox:
    # recorta a los límites del globo (polos y antimeridiano)
    return BBox(
        west=max(-180.0, lon - half_size_deg),
        south=max(-90.0, lat - half_size_deg),
        east=min(180.0, lon + half_size_deg),
        north=min(90.0, lat + half_size_deg),
    )
