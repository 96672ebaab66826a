""" Enum classes to help against string constants.

Guidelines for enum classes:
    1. Write members names extensively, with no abbreviation, i.e., 'HEAT_PUMP' instead of 'HP'.
    2. Category strings of requests are parsed through the `parse` class methods. A string that
       matches no member resolves to the named default member of the category, never to an error.

"""
# clean
import enum
from typing import Dict, Optional, Type, TypeVar

CategoryType = TypeVar("CategoryType", bound=enum.Enum)


def _match_member(
    category: Type[CategoryType], value: Optional[str], aliases: Optional[Dict[str, CategoryType]] = None
) -> Optional[CategoryType]:
    """Returns the member whose value equals the normalized string or None if nothing matches."""
    if value is None:
        return None
    key = value.strip().lower().replace("_", "-").replace(" ", "-")
    if aliases is not None and key in aliases:
        return aliases[key]
    for member in category:
        if member.value == key:
            return member
    return None


@enum.unique
class Units(str, enum.Enum):

    """Units of the monthly series."""

    KWH = "kWh"
    KWH_PER_KWP = "kWh per kWp"
    KWH_PER_SQUARE_METER_PER_DAY = "kWh per m2 per day"
    CELSIUS = "°C"
    PERCENT = "%"


@enum.unique
class HeatingSystemType(str, enum.Enum):

    """Energy carrier of a heating or hot water system."""

    GAS = "gas"
    ELECTRIC = "electric"
    HEAT_PUMP = "heat-pump"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "HeatingSystemType":
        """Unifies the synonyms gas/gas-boiler and electric/electricity."""
        member = _match_member(
            cls,
            value,
            aliases={"gas-boiler": cls.GAS, "electricity": cls.ELECTRIC, "heatpump": cls.HEAT_PUMP},
        )
        if member is None:
            return cls.UNKNOWN
        return member


@enum.unique
class WallType(str, enum.Enum):

    """Construction of the external walls."""

    BRICK = "brick"
    CAVITY_UNINSULATED = "cavity-uninsulated"
    CAVITY_INSULATED = "cavity-insulated"
    STONE = "stone"
    MODERN = "modern"

    @classmethod
    def parse(cls, value: Optional[str]) -> "WallType":
        """Parses a wall string, the legacy 'cavity' means an uninsulated cavity wall."""
        member = _match_member(cls, value, aliases={"cavity": cls.CAVITY_UNINSULATED})
        if member is None:
            return cls.CAVITY_UNINSULATED
        return member


@enum.unique
class WindowType(str, enum.Enum):

    """Glazing of the windows."""

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"

    @classmethod
    def parse(cls, value: Optional[str]) -> "WindowType":
        """Parses a glazing string."""
        member = _match_member(cls, value)
        if member is None:
            return cls.DOUBLE
        return member


@enum.unique
class RoofInsulation(str, enum.Enum):

    """Whether the roof is insulated."""

    YES = "yes"
    NO = "no"

    @classmethod
    def parse(cls, value: Optional[str]) -> "RoofInsulation":
        """Parses a roof insulation string."""
        member = _match_member(cls, value)
        if member is None:
            return cls.NO
        return member


@enum.unique
class FloorInsulation(str, enum.Enum):

    """Insulation state of the ground floor."""

    YES = "yes"
    NO = "no"
    MODERN = "modern"

    @classmethod
    def parse(cls, value: Optional[str]) -> "FloorInsulation":
        """Parses a floor insulation string."""
        member = _match_member(cls, value)
        if member is None:
            return cls.NO
        return member


@enum.unique
class HouseType(str, enum.Enum):

    """Shape of the house, decides how much of the envelope is exposed."""

    DETACHED = "detached"
    SEMI_DETACHED = "semi-detached"
    END_TERRACED = "end-terraced"
    TERRACED = "terraced"

    @classmethod
    def parse(cls, value: Optional[str]) -> "HouseType":
        """Parses a house type string."""
        member = _match_member(cls, value, aliases={"semi": cls.SEMI_DETACHED, "end-terrace": cls.END_TERRACED})
        if member is None:
            return cls.SEMI_DETACHED
        return member


@enum.unique
class BuildEra(str, enum.Enum):

    """Construction period, decides the air tightness."""

    BEFORE_1930 = "before-1930"
    FROM_1930_TO_1980 = "1930-1980"
    FROM_1981_TO_2002 = "1981-2002"
    AFTER_2003 = "after-2003"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BuildEra":
        """Parses a build era string."""
        member = _match_member(cls, value)
        if member is None:
            return cls.FROM_1981_TO_2002
        return member


@enum.unique
class CalculationMethod(str, enum.Enum):

    """Strategy that produced a demand result."""

    USER_MONTHLY = "user_monthly"
    USER_ANNUAL_DISTRIBUTED = "user_annual_distributed"
    ESTIMATED = "estimated"


@enum.unique
class DataSourceTag(str, enum.Enum):

    """Cascade tier that delivered an external data series."""

    CACHE = "cache"
    LIVE = "live"
    LIVE_FALLBACK = "live-fallback"
    NEARBY_CACHE = "nearby-cache"
    DEFAULT = "default"
