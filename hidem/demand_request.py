""" Input of a demand estimation. """
# clean
from dataclasses import dataclass
from typing import Dict, Optional

from dataclasses_json import dataclass_json

from hidem import loadtypes as lt


@dataclass_json
@dataclass
class DemandEstimateRequest:

    """What a household tells about itself. Every field is optional.

    Which fields are needed depends on the strategy: a monthly mapping, an
    annual figure, or the building description for an estimation.
    """

    # kWh per month, keys 1 to 12
    monthly_usage: Optional[Dict[int, float]] = None
    # kWh
    annual_usage: Optional[float] = None
    has_heat_pump: bool = False
    needs_estimation: bool = False
    occupants: Optional[int] = None
    heating_type: Optional[str] = None
    hot_water_type: Optional[str] = None
    heat_pump_id: Optional[int] = None
    # overrides the catalogue COP of the heat pump
    heat_pump_cop: Optional[float] = None
    # m2
    house_floor_area: Optional[float] = None
    build_era: Optional[str] = None
    wall_type: Optional[str] = None
    window_type: Optional[str] = None
    roof_insulation: Optional[str] = None
    floor_insulation: Optional[str] = None
    house_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location: Optional[str] = None

    @property
    def heating_system(self) -> lt.HeatingSystemType:
        """Unified carrier of the space heating."""
        return lt.HeatingSystemType.parse(self.heating_type)

    @property
    def hot_water_system(self) -> lt.HeatingSystemType:
        """Unified carrier of the hot water."""
        return lt.HeatingSystemType.parse(self.hot_water_type)

    def has_coordinates(self) -> bool:
        """True if both latitude and longitude are given."""
        return self.latitude is not None and self.longitude is not None
