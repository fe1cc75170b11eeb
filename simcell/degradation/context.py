from dataclasses import dataclass

from simcell.cell.state import CellState
from simcell.stress.stress import StressValues


@dataclass(frozen=True, slots=True)
class DegradationContext:
    """Everything a rate law may depend on, taken at the start of a timestep.

    All rate laws of one timestep see the same context, so the order in which
    they are evaluated does not matter.
    """

    state: CellState
    initial_state: CellState
    current: float  # A, positive for discharge
    dt: float  # s
    T_ref: float  # K
    potential_pos: float  # V vs Li/Li+, OCV plus overpotential of the positive electrode
    potential_neg: float  # V vs Li/Li+, OCV plus overpotential of the negative electrode
    average_pos: float  # mol/m3, average concentration in the positive particles
    average_neg: float  # mol/m3
    surface_pos: float  # m2, real reaction surface of the positive electrode
    surface_neg: float  # m2
    electrode_area: float  # m2
    particle_radius_pos: float  # m
    particle_radius_neg: float  # m
    max_crack_surface: float  # m2
    nominal_capacity: float  # Ah
    stress: StressValues

    @property
    def T(self) -> float:
        return self.state.T

    @property
    def fec_rate(self) -> float:
        "full equivalent cycles per second at the applied current"
        return abs(self.current) / (2 * 3600 * self.nominal_capacity)
