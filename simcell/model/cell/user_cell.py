import pandas as pd

from simcell.cell.chemistry import CellChemistry
from simcell.cell.format import CellFormat
from simcell.cell.properties import (
    ElectricalCellProperties,
    ElectrochemicalProperties,
    ElectrodeProperties,
    ThermalCellProperties,
)
from simcell.degradation.degradation import DegradationParameters
from simcell.model.cell.ocv import OCVTable
from simcell.stress.stress import StressParameters


class UserCell(CellChemistry):
    """Cell whose properties and open circuit potentials are supplied by the user.

    The potentials are lookup tables with the columns ``fraction`` and
    ``potential``; the entropic coefficient is a constant.

    Example::

        kokam = KokamNMC()
        cell = UserCell(
            ocv_positive=pd.DataFrame({"fraction": x, "potential": u_pos}),
            ocv_negative=pd.DataFrame({"fraction": x, "potential": u_neg}),
            electrical=kokam.electrical,
            ...
        )
    """

    def __init__(
        self,
        ocv_positive: pd.DataFrame,
        ocv_negative: pd.DataFrame,
        *,
        electrical: ElectricalCellProperties,
        thermal: ThermalCellProperties,
        cell_format: CellFormat,
        positive: ElectrodeProperties,
        negative: ElectrodeProperties,
        electrochemical: ElectrochemicalProperties,
        stress: StressParameters,
        degradation: DegradationParameters,
        entropic_coefficient: float = 0.0,  # V/K
    ) -> None:
        super().__init__(
            electrical=electrical,
            thermal=thermal,
            cell_format=cell_format,
            positive=positive,
            negative=negative,
            electrochemical=electrochemical,
            stress=stress,
            degradation=degradation,
        )
        self._ocv_positive = OCVTable.from_frame(ocv_positive)
        self._ocv_negative = OCVTable.from_frame(ocv_negative)
        self._entropic_coefficient = entropic_coefficient

    def open_circuit_voltage_positive(self, fraction: float) -> float:
        return self._ocv_positive(fraction)

    def open_circuit_voltage_negative(self, fraction: float) -> float:
        return self._ocv_negative(fraction)

    def entropic_coefficient(self, fraction_pos: float, fraction_neg: float) -> float:
        return self._entropic_coefficient
