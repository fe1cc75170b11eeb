import math

from simcell.cell.format import CellFormat
from simcell.cell.properties import ThermalCellProperties


class CellThermalModel:
    """Zero-dimensional thermal model of one cell in a constant-temperature ambient.

    The cell is a single thermal node::

        dT / dt = Q_loss / C_th + (T_ambient - T) / (R_th * C_th)

    With the heat generation held constant over a timestep the ODE is solved
    exactly, so large timesteps relax towards the steady state instead of
    overshooting it.
    """

    def __init__(self, thermal_capacity: float, thermal_resistance: float) -> None:
        self.thermal_capacity = thermal_capacity  # J/K
        self.thermal_resistance = thermal_resistance  # K/W

    @classmethod
    def for_cell(cls, thermal: ThermalCellProperties, cell_format: CellFormat) -> "CellThermalModel":
        """Thermal node from the cell mass and the convective exchange over its outer surface."""
        return cls(
            thermal_capacity=thermal.mass * thermal.specific_heat,
            thermal_resistance=1 / (thermal.convection_coefficient * cell_format.area),
        )

    @property
    def time_constant(self) -> float:
        return self.thermal_capacity * self.thermal_resistance

    def update(self, T: float, loss: float, T_ambient: float, dt: float) -> float:
        """Temperature after one timestep.

        Args:
            T: Cell temperature in K.
            loss: Heat generated in the cell in W.
            T_ambient: Ambient temperature in K.
            dt: Timestep in seconds.
        """
        T_steady = T_ambient + loss * self.thermal_resistance
        return T_steady + (T - T_steady) * math.exp(-dt / self.time_constant)
