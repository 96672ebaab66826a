""" Basic electricity demand of a household from the number of occupants. """
# clean
from typing import Optional

from hidem import loadtypes as lt
from hidem.estimation_errors import InvalidInput
from hidem.monthly_series import MonthlySeries


class BasicDemandCalculator:

    """Appliances, lighting and cooking, spread evenly over the year."""

    # kWh per year
    ANNUAL_DEMAND_FIRST_OCCUPANT = 1600.0
    ANNUAL_DEMAND_PER_ADDITIONAL_OCCUPANT = 700.0

    @staticmethod
    def is_valid_occupants(occupants: Optional[int]) -> bool:
        """Occupants must be given and positive."""
        return occupants is not None and occupants > 0

    def annual_demand(self, occupants: Optional[int]) -> float:
        """Annual demand in kWh."""
        if not self.is_valid_occupants(occupants):
            raise InvalidInput(f"Number of occupants must be a positive integer, got {occupants}.")
        return self.ANNUAL_DEMAND_FIRST_OCCUPANT + self.ANNUAL_DEMAND_PER_ADDITIONAL_OCCUPANT * (occupants - 1)  # type: ignore

    def compute(self, occupants: Optional[int]) -> MonthlySeries:
        """Monthly demand, the same in every month."""
        return MonthlySeries.constant(self.annual_demand(occupants) / 12, lt.Units.KWH)
