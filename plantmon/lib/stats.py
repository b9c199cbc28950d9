"""Summary statistics over a window of readings."""

from collections.abc import Sequence
from dataclasses import dataclass
from statistics import fmean

from plantmon.lib.config import ReadingField, Unit
from plantmon.lib.reading import Reading


@dataclass(frozen=True, slots=True)
class Stats:
    """Min, max and mean of one field. Values are not rounded."""

    min: float
    max: float
    avg: float

    def format(self, unit: Unit | str = "") -> list[str]:
        """Render the summary lines shown under a history chart."""
        return [
            f"Min: {self.min:.1f}{unit}",
            f"Max: {self.max:.1f}{unit}",
            f"Avg: {self.avg:.1f}{unit}",
        ]


def compute_stats(
    windowed: Sequence[Reading], field: ReadingField
) -> Stats | None:
    """Compute stats for a field, ignoring readings where it is missing.

    Returns None when no reading in the window has a value for the field.
    """
    values = [v for r in windowed if (v := r.value(field)) is not None]
    if not values:
        return None

    lo, hi = min(values), max(values)
    # Float summation can land the mean a hair outside [lo, hi]
    avg = min(max(fmean(values), lo), hi)
    return Stats(min=lo, max=hi, avg=avg)
