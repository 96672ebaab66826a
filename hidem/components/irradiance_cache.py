""" Persistent cache of monthly solar irradiance per coordinate.

Each rounded coordinate owns one CSV file with its twelve monthly records. A refresh
writes the complete new file next to the old one and renames it over the old one, so
readers either see the full previous set or the full new set.
"""
# clean
from __future__ import annotations
import datetime
import glob
import os
import tempfile
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd
from dataclasses_json import dataclass_json

from hidem import loadtypes as lt
from hidem import log
from hidem import utils
from hidem.monthly_series import MONTHS, MonthlySeries

CACHE_COLUMNS = ["latitude", "longitude", "month", "daily_irradiance", "location", "last_updated"]


@dataclass_json
@dataclass(frozen=True)
class IrradianceRecord:

    """Average daily irradiance of one month at one coordinate."""

    latitude: float
    longitude: float
    month: int
    # kWh per m2 per day
    daily_irradiance: float
    location: Optional[str]
    last_updated: datetime.datetime


class IrradianceCache:

    """File based irradiance cache with striped per coordinate locks."""

    COMPONENT_KEY = "irradiance"
    LOCK_STRIPES = 64

    def __init__(self, cache_directory: str, coordinate_precision: int = 4) -> None:
        """Initializes the cache in a directory, which is created on demand."""
        self.cache_directory = cache_directory
        self.coordinate_precision = coordinate_precision
        self._locks: Tuple[threading.RLock, ...] = tuple(threading.RLock() for _ in range(self.LOCK_STRIPES))

    def coordinate_key(self, latitude: float, longitude: float) -> Tuple[float, float]:
        """Rounded coordinate used as key."""
        return round(latitude, self.coordinate_precision), round(longitude, self.coordinate_precision)

    def lock_for(self, latitude: float, longitude: float) -> threading.RLock:
        """Lock that serializes all work on one coordinate.

        Coordinates share a fixed pool of locks, two coordinates may share one.
        """
        key = self.coordinate_key(latitude, longitude)
        return self._locks[hash(key) % self.LOCK_STRIPES]

    def _get_cache_file(self, latitude: float, longitude: float) -> Tuple[bool, str]:
        key = self.coordinate_key(latitude, longitude)
        return utils.get_coordinate_cache_file(self.COMPONENT_KEY, key[0], key[1], self.cache_directory)

    def load(self, latitude: float, longitude: float) -> List[IrradianceRecord]:
        """Records of the coordinate, an empty list if nothing usable is cached."""
        try:
            cache_exists, cache_filepath = self._get_cache_file(latitude, longitude)
        except OSError as error:
            log.warning(f"Irradiance cache in {self.cache_directory} is not usable: {error}")
            return []
        if not cache_exists:
            return []
        database = self._read_database(cache_filepath)
        if database is None:
            return []
        return self._to_records(database)

    def replace(
        self,
        latitude: float,
        longitude: float,
        monthly_irradiance: MonthlySeries,
        location: Optional[str] = None,
        last_updated: Optional[datetime.datetime] = None,
    ) -> List[IrradianceRecord]:
        """Replaces all twelve records of the coordinate at once."""
        if last_updated is None:
            last_updated = datetime.datetime.now(datetime.timezone.utc)
        key = self.coordinate_key(latitude, longitude)
        database = pd.DataFrame(
            {
                "latitude": [key[0]] * 12,
                "longitude": [key[1]] * 12,
                "month": list(MONTHS),
                "daily_irradiance": monthly_irradiance.to_list(),
                "location": [location] * 12,
                "last_updated": [last_updated.isoformat()] * 12,
            },
            columns=CACHE_COLUMNS,
        )
        with self.lock_for(latitude, longitude):
            _, cache_filepath = self._get_cache_file(latitude, longitude)
            file_descriptor, temporary_filepath = tempfile.mkstemp(
                prefix=self.COMPONENT_KEY + "_", suffix=".tmp", dir=self.cache_directory
            )
            os.close(file_descriptor)
            try:
                database.to_csv(temporary_filepath, sep=",", decimal=".", encoding="utf-8", index=False)
                os.replace(temporary_filepath, cache_filepath)
            except OSError:
                if os.path.exists(temporary_filepath):
                    os.remove(temporary_filepath)
                raise
        log.debug(f"Cached irradiance for {key[0]}, {key[1]} in {cache_filepath}.")
        return self._to_records(database)

    def find_nearby(self, latitude: float, longitude: float, tolerance: float) -> pd.DataFrame:
        """All cached records within the tolerance, nearest coordinate first.

        The distance is the sum of the absolute latitude and longitude differences.
        """
        databases = []
        for cache_filepath in sorted(glob.glob(os.path.join(self.cache_directory, self.COMPONENT_KEY + "_*.cache"))):
            database = self._read_database(cache_filepath)
            if database is not None:
                databases.append(database)
        if not databases:
            return pd.DataFrame(columns=CACHE_COLUMNS + ["distance"])
        database = pd.concat(databases, ignore_index=True)
        latitude_difference = (database["latitude"] - latitude).abs()
        longitude_difference = (database["longitude"] - longitude).abs()
        database["distance"] = latitude_difference + longitude_difference
        nearby = database[(latitude_difference < tolerance) & (longitude_difference < tolerance)]
        return nearby.sort_values(["distance", "month"], kind="mergesort").reset_index(drop=True)

    def nearby_monthly_values(self, latitude: float, longitude: float, tolerance: float) -> Dict[int, float]:
        """Per month the value of the nearest cached coordinate that has one."""
        nearby = self.find_nearby(latitude, longitude, tolerance)
        if nearby.empty:
            return {}
        first_per_month = nearby.groupby("month", sort=True)["daily_irradiance"].first()
        return {int(month): float(value) for month, value in first_per_month.items()}

    @staticmethod
    def is_fresh(records: List[IrradianceRecord], max_age_in_days: int, now: datetime.datetime) -> bool:
        """True if all twelve months are cached and the newest update is younger than the max age."""
        if len({record.month for record in records}) != 12:
            return False
        newest = max(record.last_updated for record in records)
        return newest > now - datetime.timedelta(days=max_age_in_days)

    @staticmethod
    def to_series(records: List[IrradianceRecord]) -> MonthlySeries:
        """Monthly irradiance of a complete record set."""
        return MonthlySeries.from_mapping(
            {record.month: record.daily_irradiance for record in records}, lt.Units.KWH_PER_SQUARE_METER_PER_DAY
        )

    @staticmethod
    def _read_database(cache_filepath: str) -> Optional[pd.DataFrame]:
        try:
            database = pd.read_csv(cache_filepath, sep=",", decimal=".", encoding="utf-8")
            if list(database.columns) != CACHE_COLUMNS or len(database) != 12:
                raise ValueError("expected twelve rows with the columns " + ", ".join(CACHE_COLUMNS))
            database["last_updated"] = pd.to_datetime(database["last_updated"], utc=True)
        except (OSError, ValueError) as error:
            log.warning(f"Ignoring unreadable irradiance cache file {cache_filepath}: {error}")
            return None
        return database

    @staticmethod
    def _to_records(database: pd.DataFrame) -> List[IrradianceRecord]:
        last_updated = pd.to_datetime(database["last_updated"], utc=True)
        return [
            IrradianceRecord(
                latitude=float(row.latitude),
                longitude=float(row.longitude),
                month=int(row.month),
                daily_irradiance=float(row.daily_irradiance),
                location=None if pd.isna(row.location) else str(row.location),
                last_updated=timestamp.to_pydatetime(),
            )
            for row, timestamp in zip(database.itertuples(index=False), last_updated)
        ]
