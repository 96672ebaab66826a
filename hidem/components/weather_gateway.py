""" Gateway to external climate data with graceful degradation.

Every lookup walks an ordered list of tiers. A tier either answers with a series
and the tag of its source or returns None, which hands over to the next tier.
The last tier of each list is a static table, so a lookup always succeeds.
"""
# clean
from __future__ import annotations
import datetime
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from hidem import loadtypes as lt
from hidem import log
from hidem.components.irradiance_cache import IrradianceCache
from hidem.components import weather_data_import
from hidem.estimation_errors import ExternalDataError
from hidem.estimation_parameters import EstimationParameters
from hidem.monthly_series import MonthlySeries

# kWh per m2 per day, typical for the United Kingdom
DEFAULT_MONTHLY_IRRADIANCE = MonthlySeries(
    (0.5, 1.2, 2.5, 4.0, 5.2, 5.8, 5.5, 4.8, 3.2, 1.8, 0.8, 0.4), lt.Units.KWH_PER_SQUARE_METER_PER_DAY
)
# °C, typical for the United Kingdom
DEFAULT_MONTHLY_TEMPERATURE = MonthlySeries(
    (4.0, 4.5, 7.0, 9.5, 13.0, 16.0, 18.0, 17.5, 15.0, 11.0, 7.5, 5.0), lt.Units.CELSIUS
)


@dataclass(frozen=True)
class Coordinate:

    """Rounded coordinate of a lookup with an optional label."""

    latitude: float
    longitude: float
    location: Optional[str] = None


@dataclass(frozen=True)
class DataLookup:

    """A series together with the tier that delivered it."""

    series: MonthlySeries
    source: lt.DataSourceTag


CascadeTier = Callable[[Coordinate], Optional[DataLookup]]


def run_cascade(tiers: Sequence[CascadeTier], coordinate: Coordinate) -> DataLookup:
    """Returns the answer of the first tier that has one."""
    for tier in tiers:
        lookup = tier(coordinate)
        if lookup is not None:
            return lookup
    raise ValueError("No tier of the cascade answered. The last tier must always answer.")


class ExternalDataGateway:

    """Monthly irradiance and temperature for a coordinate.

    Irradiance tiers: fresh cache, NASA POWER time series, NASA POWER climatology,
    cache of nearby coordinates, static table. Temperature tiers: Open-Meteo archive,
    static table. Failed tiers are logged and skipped, never retried.
    """

    def __init__(
        self,
        irradiance_cache: IrradianceCache,
        irradiance_provider,
        irradiance_fallback_provider,
        temperature_provider,
        cache_max_age_in_days: int = 30,
        nearby_tolerance: float = 0.1,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ) -> None:
        """Initializes the gateway.

        Providers are objects with a `fetch(latitude, longitude)` method returning a
        MonthlySeries and raising an ExternalDataError on failure.
        """
        self.irradiance_cache = irradiance_cache
        self.irradiance_provider = irradiance_provider
        self.irradiance_fallback_provider = irradiance_fallback_provider
        self.temperature_provider = temperature_provider
        self.cache_max_age_in_days = cache_max_age_in_days
        self.nearby_tolerance = nearby_tolerance
        self.clock = clock or (lambda: datetime.datetime.now(datetime.timezone.utc))
        self.irradiance_tiers: List[CascadeTier] = [
            self._from_fresh_cache,
            self._from_live_provider,
            self._from_live_fallback_provider,
            self._from_nearby_cache,
            self._from_default_irradiance,
        ]
        self.temperature_tiers: List[CascadeTier] = [
            self._from_live_temperature,
            self._from_default_temperature,
        ]

    @classmethod
    def from_parameters(cls, parameters: EstimationParameters) -> ExternalDataGateway:
        """Gateway with the real providers and the configured cache."""
        return cls(
            irradiance_cache=IrradianceCache(parameters.cache_directory, parameters.coordinate_precision),
            irradiance_provider=weather_data_import.NasaPowerMonthlyProvider(parameters.request_timeout),
            irradiance_fallback_provider=weather_data_import.NasaPowerClimatologyProvider(parameters.request_timeout),
            temperature_provider=weather_data_import.OpenMeteoTemperatureProvider(parameters.request_timeout),
            cache_max_age_in_days=parameters.cache_max_age_in_days,
            nearby_tolerance=parameters.nearby_tolerance,
        )

    def lookup_monthly_irradiance(
        self, latitude: float, longitude: float, location: Optional[str] = None
    ) -> DataLookup:
        """Monthly daily irradiance in kWh per m2 per day and its source."""
        rounded_latitude, rounded_longitude = self.irradiance_cache.coordinate_key(latitude, longitude)
        coordinate = Coordinate(rounded_latitude, rounded_longitude, location)
        with self.irradiance_cache.lock_for(rounded_latitude, rounded_longitude):
            lookup = run_cascade(self.irradiance_tiers, coordinate)
        log.information(
            f"Irradiance for {coordinate.latitude}, {coordinate.longitude} from {lookup.source.value}: "
            f"{lookup.series.mean():.2f} kWh/m2/day on average."
        )
        return lookup

    def get_monthly_irradiance(self, latitude: float, longitude: float, location: Optional[str] = None) -> MonthlySeries:
        """Monthly daily irradiance in kWh per m2 per day."""
        return self.lookup_monthly_irradiance(latitude, longitude, location).series

    def lookup_monthly_temperature(self, latitude: float, longitude: float) -> DataLookup:
        """Monthly mean outdoor temperature in °C and its source."""
        lookup = run_cascade(self.temperature_tiers, Coordinate(latitude, longitude))
        log.debug(f"Temperatures for {latitude}, {longitude} from {lookup.source.value}.")
        return lookup

    def get_monthly_temperature(self, latitude: float, longitude: float) -> MonthlySeries:
        """Monthly mean outdoor temperature in °C."""
        return self.lookup_monthly_temperature(latitude, longitude).series

    def _from_fresh_cache(self, coordinate: Coordinate) -> Optional[DataLookup]:
        records = self.irradiance_cache.load(coordinate.latitude, coordinate.longitude)
        if not IrradianceCache.is_fresh(records, self.cache_max_age_in_days, self.clock()):
            return None
        return DataLookup(IrradianceCache.to_series(records), lt.DataSourceTag.CACHE)

    def _from_live_provider(self, coordinate: Coordinate) -> Optional[DataLookup]:
        return self._fetch_and_cache(self.irradiance_provider, coordinate, lt.DataSourceTag.LIVE)

    def _from_live_fallback_provider(self, coordinate: Coordinate) -> Optional[DataLookup]:
        return self._fetch_and_cache(self.irradiance_fallback_provider, coordinate, lt.DataSourceTag.LIVE_FALLBACK)

    def _from_nearby_cache(self, coordinate: Coordinate) -> Optional[DataLookup]:
        values = self.irradiance_cache.nearby_monthly_values(
            coordinate.latitude, coordinate.longitude, self.nearby_tolerance
        )
        if len(values) != 12:
            return None
        return DataLookup(
            MonthlySeries.from_mapping(values, lt.Units.KWH_PER_SQUARE_METER_PER_DAY), lt.DataSourceTag.NEARBY_CACHE
        )

    def _from_default_irradiance(self, coordinate: Coordinate) -> Optional[DataLookup]:
        log.warning(f"Using default irradiance for {coordinate.latitude}, {coordinate.longitude}.")
        return DataLookup(DEFAULT_MONTHLY_IRRADIANCE, lt.DataSourceTag.DEFAULT)

    def _from_live_temperature(self, coordinate: Coordinate) -> Optional[DataLookup]:
        try:
            series = self.temperature_provider.fetch(coordinate.latitude, coordinate.longitude)
        except ExternalDataError as error:
            log.warning(f"Temperature lookup failed for {coordinate.latitude}, {coordinate.longitude}: {error}")
            return None
        return DataLookup(series, lt.DataSourceTag.LIVE)

    def _from_default_temperature(self, coordinate: Coordinate) -> Optional[DataLookup]:
        log.warning(f"Using default temperatures for {coordinate.latitude}, {coordinate.longitude}.")
        return DataLookup(DEFAULT_MONTHLY_TEMPERATURE, lt.DataSourceTag.DEFAULT)

    def _fetch_and_cache(self, provider, coordinate: Coordinate, source: lt.DataSourceTag) -> Optional[DataLookup]:
        try:
            series = provider.fetch(coordinate.latitude, coordinate.longitude)
        except ExternalDataError as error:
            log.warning(
                f"{type(provider).__name__} failed for {coordinate.latitude}, {coordinate.longitude}: {error}"
            )
            return None
        self._store(coordinate, series)
        return DataLookup(series, source)

    def _store(self, coordinate: Coordinate, series: MonthlySeries) -> None:
        try:
            self.irradiance_cache.replace(
                coordinate.latitude, coordinate.longitude, series, coordinate.location, self.clock()
            )
        except OSError as error:
            # the fetched series is still valid for this request
            log.error(f"Could not cache irradiance for {coordinate.latitude}, {coordinate.longitude}: {error}")
