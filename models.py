import math
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

# Average Earth-Moon distance, used to derive lunar distances from kilometers
LUNAR_DISTANCE_KM = 384400.0


class NeoSummary(BaseModel):
    """
    One near-Earth object as seen on a single day.

    Unknown numeric values are NaN, which is distinct from zero.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    is_hazardous: bool = False
    diameter_min_meters: float = math.nan
    diameter_max_meters: float = math.nan
    close_approach_time: datetime
    orbiting_body: str = "Earth"
    miss_distance_km: float = math.nan
    miss_distance_lunar: float = math.nan
    relative_velocity_km_per_sec: float = math.nan

    def to_api_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys; NaN (or any non-finite value) becomes None."""
        return {
            "id": self.id,
            "name": self.name,
            "isHazardous": self.is_hazardous,
            "diameterMinMeters": _nan_to_none(self.diameter_min_meters),
            "diameterMaxMeters": _nan_to_none(self.diameter_max_meters),
            "closeApproachTime": self.close_approach_time.isoformat(),
            "orbitingBody": self.orbiting_body,
            "missDistanceKm": _nan_to_none(self.miss_distance_km),
            "missDistanceLunar": _nan_to_none(self.miss_distance_lunar),
            "relativeVelocityKmPerSec": _nan_to_none(self.relative_velocity_km_per_sec),
        }


def _nan_to_none(value: float):
    return value if math.isfinite(value) else None
