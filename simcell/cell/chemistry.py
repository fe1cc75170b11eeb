import math
from abc import ABC, abstractmethod
from dataclasses import fields

import numpy as np

from simcell.cell.format import CellFormat
from simcell.cell.properties import (
    ElectricalCellProperties,
    ElectrochemicalProperties,
    ElectrodeProperties,
    ThermalCellProperties,
)
from simcell.cell.state import CellState, StateLimits
from simcell.constants import F
from simcell.degradation.degradation import DegradationParameters
from simcell.errors import InvalidConstructionError
from simcell.stress.stress import StressParameters

# fields which may be zero, all other numeric fields have to be strictly positive
_MAY_BE_ZERO = {"diffusivity_activation", "rate_activation", "crack_fraction"}
_FRACTIONS = {"volume_fraction", "initial_fraction", "fraction_empty", "fraction_full", "crack_fraction"}


class CellChemistry(ABC):
    """Parameter profile of one cell type.

    Bundles the constant properties of the cell and the open circuit voltage
    of both electrodes. Concrete cells subclass it and fill in their numbers.
    """

    def __init__(
        self,
        electrical: ElectricalCellProperties,
        thermal: ThermalCellProperties,
        cell_format: CellFormat,
        positive: ElectrodeProperties,
        negative: ElectrodeProperties,
        electrochemical: ElectrochemicalProperties,
        stress: StressParameters,
        degradation: DegradationParameters,
    ) -> None:
        super().__init__()
        self.electrical = electrical
        self.thermal = thermal
        self.format = cell_format
        self.positive = positive
        self.negative = negative
        self.electrochemical = electrochemical
        self.stress = stress
        self.degradation = degradation

    @abstractmethod
    def open_circuit_voltage_positive(self, fraction: float) -> float:
        "potential of the positive electrode vs Li/Li+ at the given lithium fraction"

    @abstractmethod
    def open_circuit_voltage_negative(self, fraction: float) -> float:
        "potential of the negative electrode vs Li/Li+ at the given lithium fraction"

    def entropic_coefficient(self, fraction_pos: float, fraction_neg: float) -> float:
        "dOCV/dT of the cell in V/K"
        return 0.0

    def open_circuit_voltage(self, fraction_pos: float, fraction_neg: float, T: float) -> float:
        ocv = self.open_circuit_voltage_positive(fraction_pos) - self.open_circuit_voltage_negative(fraction_neg)
        return ocv + self.entropic_coefficient(fraction_pos, fraction_neg) * (T - self.thermal.reference_temperature)

    ## derived quantities
    @property
    def cyclable_lithium(self) -> float:
        "lithium in mol corresponding to the nominal capacity"
        return self.electrical.nominal_capacity * 3600 / F

    @property
    def max_crack_surface(self) -> float:
        "in m2"
        return self.electrochemical.max_crack_factor * self.initial_anode_surface

    @property
    def initial_anode_surface(self) -> float:
        "real surface of the fresh negative electrode in m2"
        neg = self.negative
        return 3 * neg.volume_fraction / neg.particle_radius * neg.thickness * self.electrochemical.electrode_area

    @property
    def initial_cathode_surface(self) -> float:
        pos = self.positive
        return 3 * pos.volume_fraction / pos.particle_radius * pos.thickness * self.electrochemical.electrode_area

    @property
    def limits(self) -> StateLimits:
        return StateLimits(
            c_max_pos=self.positive.max_concentration,
            c_max_neg=self.negative.max_concentration,
            min_temperature=self.thermal.min_temperature,
            max_temperature=self.thermal.max_temperature,
            max_crack_surface=self.max_crack_surface,
        )

    def validate(self) -> None:
        """Raise InvalidConstructionError if a property is missing its physical range."""
        groups = {
            "electrical": self.electrical,
            "thermal": self.thermal,
            "positive": self.positive,
            "negative": self.negative,
            "electrochemical": self.electrochemical,
        }
        for group_name, group in groups.items():
            for f in fields(group):
                value = getattr(group, f.name)
                name = f"{group_name}.{f.name}"
                if not math.isfinite(value):
                    raise InvalidConstructionError(f"{name} = {value!r} is not finite")
                if value < 0 or (value == 0 and f.name not in _MAY_BE_ZERO):
                    raise InvalidConstructionError(f"{name} = {value!r} has to be positive")
                if f.name in _FRACTIONS and value > 1:
                    raise InvalidConstructionError(f"{name} = {value!r} has to be a fraction")

        if self.electrical.min_voltage >= self.electrical.max_voltage:
            raise InvalidConstructionError("electrical.min_voltage has to be below electrical.max_voltage")
        if self.thermal.min_temperature >= self.thermal.max_temperature:
            raise InvalidConstructionError("thermal.min_temperature has to be below thermal.max_temperature")
        for name, electrode in (("positive", self.positive), ("negative", self.negative)):
            if electrode.n_nodes < 2:
                raise InvalidConstructionError(f"{name}.n_nodes has to be at least 2")

    def initial_state(self) -> CellState:
        """Fresh cell at the initial lithium fractions and reference temperature."""
        pos = self.positive
        neg = self.negative
        ec = self.electrochemical

        surface_area_pos = 3 * pos.volume_fraction / pos.particle_radius
        surface_area_neg = 3 * neg.volume_fraction / neg.particle_radius
        # specific resistance such that the fresh cell has its DC resistance
        mean_surface = (pos.thickness * surface_area_pos + neg.thickness * surface_area_neg) * ec.electrode_area / 2

        return CellState.initialize(
            c_pos=np.full(pos.n_nodes, pos.initial_fraction * pos.max_concentration),
            c_neg=np.full(neg.n_nodes, neg.initial_fraction * neg.max_concentration),
            T=self.thermal.reference_temperature,
            sei_thickness=ec.sei_thickness,
            lost_lithium=0.0,
            thickness_pos=pos.thickness,
            thickness_neg=neg.thickness,
            volume_fraction_pos=pos.volume_fraction,
            volume_fraction_neg=neg.volume_fraction,
            surface_area_pos=surface_area_pos,
            surface_area_neg=surface_area_neg,
            crack_surface=ec.crack_fraction * surface_area_neg * neg.thickness * ec.electrode_area,
            diffusivity_pos=pos.diffusivity,
            diffusivity_neg=neg.diffusivity,
            resistance=ec.dc_resistance * mean_surface,
            plating_thickness=0.0,
        )
