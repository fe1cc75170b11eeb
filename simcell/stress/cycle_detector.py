from dataclasses import dataclass


@dataclass(slots=True)
class HalfCycle:
    """Summary of a completed half-cycle.

    Attributes:
        charge_throughput: Charge moved during the half-cycle in Ah.
        duration: Time spent under current in s.
        average_current: Mean absolute current in A.
        full_equivalent_cycles: FEC contribution (throughput / (2 * nominal capacity)).
    """

    charge_throughput: float
    duration: float
    average_current: float
    full_equivalent_cycles: float


class HalfCycleDetector:
    """Detects half-cycles by tracking reversals of the current direction.

    A half-cycle is completed when the current changes sign (from discharging
    to charging or vice versa). Rest periods (zero current) are ignored and
    do not trigger a cycle or contribute to elapsed time.

    At every reversal the average particle concentrations of that moment are
    kept as ``reference``; the delta-concentration stress model measures the
    concentration swing against it.

    Attributes:
        reference: (positive, negative) average concentration in mol/m3 at the last reversal.
        total_fec: Cumulative full equivalent cycles.
        last_cycle: The most recently completed HalfCycle, or None.
    """

    def __init__(self, nominal_capacity: float, reference: tuple[float, float]) -> None:
        self._nominal_capacity = nominal_capacity  # Ah
        self._direction: int = 0  # +1 discharging, -1 charging, 0 unknown
        self._elapsed_time: float = 0.0  # seconds
        self._throughput: float = 0.0  # Ah
        self.reference = reference
        self.total_fec: float = 0.0
        self.last_cycle: HalfCycle | None = None

    def update(self, current: float, dt: float, averages: tuple[float, float]) -> bool:
        """Update the detector with the current applied during a timestep.

        Args:
            current: Applied current in A, positive for discharge.
            dt: Timestep in seconds.
            averages: (positive, negative) average concentrations at the start of the timestep.

        Returns:
            True if a half-cycle was completed (direction reversal detected).
        """
        if current == 0.0:
            return False

        new_direction = 1 if current > 0 else -1

        if self._direction in (0, new_direction):
            self._direction = new_direction
            self._elapsed_time += dt
            self._throughput += abs(current) * dt / 3600
            return False

        # Direction reversal, the half-cycle ended with the previous step
        cycle = self._make_half_cycle()
        self.last_cycle = cycle
        self.total_fec += cycle.full_equivalent_cycles
        self.reference = averages

        self._direction = new_direction
        self._elapsed_time = dt
        self._throughput = abs(current) * dt / 3600
        return True

    def _make_half_cycle(self) -> HalfCycle:
        average_current = self._throughput * 3600 / self._elapsed_time if self._elapsed_time > 0 else 0.0
        return HalfCycle(
            charge_throughput=self._throughput,
            duration=self._elapsed_time,
            average_current=average_current,
            full_equivalent_cycles=self._throughput / (2 * self._nominal_capacity),
        )
