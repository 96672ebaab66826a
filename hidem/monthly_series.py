""" Twelve month value series, the currency of every calculation. """
# clean
from __future__ import annotations
from collections.abc import Mapping
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from hidem import loadtypes as lt
from hidem import utils

MONTHS: Tuple[int, ...] = tuple(range(1, 13))


class MonthlySeries(Mapping):

    """Immutable mapping of the months 1 to 12 onto a value with a unit.

    A series always holds all twelve months. Partial user data is completed
    with zeros through `from_partial`.
    """

    __slots__ = ("_values", "_unit")

    def __init__(self, values: Sequence[float], unit: lt.Units = lt.Units.KWH) -> None:
        """Creates a series from twelve values, January first."""
        if len(values) != 12:
            raise ValueError(f"A monthly series needs exactly 12 values, got {len(values)}.")
        self._values: Tuple[float, ...] = tuple(float(value) for value in values)
        self._unit = unit

    @classmethod
    def from_mapping(cls, values: Mapping, unit: lt.Units = lt.Units.KWH) -> MonthlySeries:
        """Creates a series from a complete month mapping."""
        missing = [month for month in MONTHS if month not in values]
        if missing:
            raise ValueError(f"Months {missing} are missing in the monthly values.")
        return cls([values[month] for month in MONTHS], unit)

    @classmethod
    def from_partial(cls, values: Optional[Mapping], unit: lt.Units = lt.Units.KWH) -> MonthlySeries:
        """Creates a series where months without a value are zero."""
        values = values or {}
        unknown = [month for month in values if month not in MONTHS]
        if unknown:
            raise ValueError(f"Months {unknown} are not between 1 and 12.")
        return cls([values.get(month) or 0.0 for month in MONTHS], unit)

    @classmethod
    def constant(cls, value: float, unit: lt.Units = lt.Units.KWH) -> MonthlySeries:
        """Same value in every month."""
        return cls([value] * 12, unit)

    @classmethod
    def zeros(cls, unit: lt.Units = lt.Units.KWH) -> MonthlySeries:
        """All months zero."""
        return cls.constant(0.0, unit)

    @classmethod
    def from_proportions(cls, total: float, proportions: Sequence[float], unit: lt.Units = lt.Units.KWH) -> MonthlySeries:
        """Distributes a total with percentages, one per month."""
        return cls([total * proportion / 100.0 for proportion in proportions], unit)

    @property
    def unit(self) -> lt.Units:
        """Unit of all values."""
        return self._unit

    def __getitem__(self, month: int) -> float:
        if month not in MONTHS:
            raise KeyError(month)
        return self._values[month - 1]

    def __iter__(self) -> Iterator[int]:
        return iter(MONTHS)

    def __len__(self) -> int:
        return 12

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonthlySeries):
            return NotImplemented
        return self._unit == other._unit and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._unit, self._values))

    def __repr__(self) -> str:
        return f"MonthlySeries({list(self._values)}, unit={self._unit.value!r})"

    def __add__(self, other: MonthlySeries) -> MonthlySeries:
        if not isinstance(other, MonthlySeries):
            return NotImplemented
        if other.unit != self.unit:
            raise ValueError(f"Cannot add a series in {other.unit.value} to a series in {self.unit.value}.")
        return MonthlySeries([mine + theirs for mine, theirs in zip(self._values, other._values)], self._unit)

    def map(self, function: Callable[[int, float], float], unit: Optional[lt.Units] = None) -> MonthlySeries:
        """Applies a function of month and value to every month."""
        return MonthlySeries(
            [function(month, value) for month, value in zip(MONTHS, self._values)],
            self._unit if unit is None else unit,
        )

    def scale(self, factor: float, unit: Optional[lt.Units] = None) -> MonthlySeries:
        """Multiplies every month with a factor."""
        return self.map(lambda _month, value: value * factor, unit)

    def rounded(self, digits: int = 2) -> MonthlySeries:
        """Rounds every month, halves away from zero."""
        return self.map(lambda _month, value: utils.round_half_up(value, digits))

    def total(self) -> float:
        """Sum over the year."""
        return sum(self._values)

    def mean(self) -> float:
        """Average month."""
        return self.total() / 12

    def peak(self) -> Tuple[int, float]:
        """Month with the highest value, the earliest one on ties."""
        best_month = 1
        for month in MONTHS:
            if self[month] > self[best_month]:
                best_month = month
        return best_month, self[best_month]

    def low(self) -> Tuple[int, float]:
        """Month with the lowest value, the earliest one on ties."""
        best_month = 1
        for month in MONTHS:
            if self[month] < self[best_month]:
                best_month = month
        return best_month, self[best_month]

    def to_list(self) -> List[float]:
        """Values from January to December."""
        return list(self._values)

    def to_dict(self) -> Dict[int, float]:
        """Plain month to value dictionary."""
        return dict(zip(MONTHS, self._values))
