""" Catalogue of heat pumps to look up the coefficient of performance. """
# clean
from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from dataclasses_json import dataclass_json

from hidem import log
from hidem import utils


@dataclass_json
@dataclass
class HeatPumpEntry:

    """One heat pump model."""

    heat_pump_id: int
    name: str
    # seasonal coefficient of performance
    cop: float
    cost_in_gbp: float


class HeatPumpCatalogue:

    """Read only lookup of heat pumps by id."""

    def __init__(self, entries: Iterable[HeatPumpEntry], default_cop: float = 3.0) -> None:
        """Indexes the entries by id."""
        self.default_cop = default_cop
        self._entries: Dict[int, HeatPumpEntry] = {}
        for entry in entries:
            if entry.heat_pump_id in self._entries:
                raise ValueError(f"Heat pump id {entry.heat_pump_id} is listed twice.")
            if entry.cop <= 0:
                raise ValueError(f"Heat pump {entry.name} has a non positive COP of {entry.cop}.")
            self._entries[entry.heat_pump_id] = entry

    @classmethod
    def from_json_file(cls, filename: str, default_cop: float = 3.0) -> HeatPumpCatalogue:
        """Reads a list of heat pump entries."""
        with open(filename, "r", encoding="utf-8") as filestream:
            entries = [HeatPumpEntry.from_dict(entry) for entry in json.load(filestream)]  # type: ignore
        log.debug(f"Read {len(entries)} heat pumps from {filename}.")
        return cls(entries, default_cop)

    @classmethod
    def get_default(cls, default_cop: float = 3.0) -> HeatPumpCatalogue:
        """Gets the catalogue shipped with HiDEM."""
        return cls.from_json_file(utils.HIDEMPATH["heat_pumps"], default_cop)

    def find(self, heat_pump_id: Optional[int]) -> Optional[HeatPumpEntry]:
        """Returns the entry or None."""
        if heat_pump_id is None:
            return None
        return self._entries.get(heat_pump_id)

    def get_cop(self, heat_pump_id: Optional[int]) -> float:
        """COP of the heat pump, the default COP for a missing or unknown id."""
        entry = self.find(heat_pump_id)
        if entry is None:
            if heat_pump_id is not None:
                log.warning(f"Heat pump {heat_pump_id} is not in the catalogue, using a COP of {self.default_cop}.")
            return self.default_cop
        return entry.cop

    def __len__(self) -> int:
        return len(self._entries)
