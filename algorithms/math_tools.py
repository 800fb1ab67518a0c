from typing import Iterable


class MathTools:
    """Provides the arithmetic shared by the workout statistics."""

    @staticmethod
    def set_volume(weight: float, reps: int) -> float:
        """Return the training volume of a single set."""
        return float(weight) * int(reps)

    @staticmethod
    def volume(sets: Iterable[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol
