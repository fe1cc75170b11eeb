import copy
import logging
import math
from dataclasses import dataclass
from enum import Enum

from scipy.optimize import brentq

from simcell.cell.chemistry import CellChemistry
from simcell.cell.properties import ElectrodeProperties
from simcell.cell.state import CellState, StateViolation, ViolationRule
from simcell.constants import F, R, arrhenius
from simcell.degradation.context import DegradationContext
from simcell.degradation.degradation import DegradationModel
from simcell.degradation.identifiers import DegradationIds
from simcell.diffusion.diffusion import DiffusionModel
from simcell.errors import (
    CellInvalidError,
    InvalidConstructionError,
    InvalidStateError,
    VoltageLimitError,
)
from simcell.stress.cycle_detector import HalfCycleDetector
from simcell.stress.stress import StressModel
from simcell.thermal.thermal import CellThermalModel

logger = logging.getLogger(__name__)


class CellStatus(Enum):
    STEADY = "steady"  # no current applied or requested
    CYCLING = "cycling"
    INVALID = "invalid"  # terminal, a step produced an invalid state


@dataclass(frozen=True, slots=True)
class StepResult:
    time: float  # s, simulated time at the end of the step
    current: float  # A, positive for discharge
    voltage: float  # V
    temperature: float  # K
    capacity_fraction: float  # p.u.
    resistance_fraction: float  # p.u.
    heat: float  # W


class Cell:
    """One lithium-ion cell with solid diffusion, thermal behaviour and degradation.

    The cell owns its current state and an immutable snapshot of the initial
    state, which is the reference for the state-of-health metrics. Positive
    currents discharge the cell.
    """

    def __init__(
        self,
        chemistry: CellChemistry,
        diffusion: tuple[DiffusionModel, DiffusionModel] | None = None,
        degradation: DegradationIds | DegradationModel | None = None,
    ) -> None:
        """
        Args:
            chemistry: Parameter profile of the cell.
            diffusion: (positive, negative) spatial discretization. By default a
                finite volume discretization is generated for the configured
                number of nodes and particle radii.
            degradation: Selected degradation mechanisms, no degradation by default.
                A DegradationModel with custom rate laws is copied, later changes
                to its laws do not reach the cell.

        Raises:
            InvalidConstructionError: if the chemistry or the initial state is invalid.
            StructuralMismatchError: if a diffusion model does not match the configured number of nodes
                or particle radius.
        """
        chemistry = copy.deepcopy(chemistry)
        chemistry.validate()
        self.chemistry = chemistry
        self.limits = chemistry.limits

        pos = chemistry.positive
        neg = chemistry.negative
        if diffusion is None:
            diffusion = (
                DiffusionModel.spherical(pos.n_nodes, pos.particle_radius),
                DiffusionModel.spherical(neg.n_nodes, neg.particle_radius),
            )
        self.diffusion_pos, self.diffusion_neg = diffusion
        self.diffusion_pos.check_consistency(pos.n_nodes, pos.particle_radius)
        self.diffusion_neg.check_consistency(neg.n_nodes, neg.particle_radius)

        if degradation is None:
            degradation = DegradationIds()
        if isinstance(degradation, DegradationIds):
            degradation = DegradationModel(degradation, chemistry.degradation)
        self._degradation = degradation.frozen()
        self.stress = StressModel(chemistry.stress, self.diffusion_pos, self.diffusion_neg, self._degradation.required_stress)
        self.thermal = CellThermalModel.for_cell(chemistry.thermal, chemistry.format)

        try:
            state = chemistry.initial_state().validate(self.limits)
        except InvalidStateError as e:
            raise InvalidConstructionError(f"illegal initial state: {e}") from e

        self.initial_state = state
        self._state = state
        self._current = 0.0
        self._target_current = 0.0
        self._time = 0.0
        self._invalid = False
        self.cycle_detector = HalfCycleDetector(chemistry.electrical.nominal_capacity, self._averages(state))

        logger.debug(
            "created %s cell with %d/%d nodes, stress formulations %s",
            type(chemistry).__name__,
            pos.n_nodes,
            neg.n_nodes,
            sorted(f.value for f in self.stress.formulations),
        )

    ## status
    @property
    def state(self) -> CellState:
        return self._state

    @property
    def status(self) -> CellStatus:
        if self._invalid:
            return CellStatus.INVALID
        if self._current != 0.0 or self._target_current != 0.0:
            return CellStatus.CYCLING
        return CellStatus.STEADY

    @property
    def current(self) -> float:
        "actual current in A"
        return self._current

    @property
    def target_current(self) -> float:
        return self._target_current

    @property
    def time(self) -> float:
        "simulated time in s"
        return self._time

    @property
    def degradation(self) -> DegradationModel:
        "selected rate laws, fixed at construction"
        return self._degradation

    @property
    def full_equivalent_cycles(self) -> float:
        return self.cycle_detector.total_fec

    def _check_valid(self) -> None:
        if self._invalid:
            raise CellInvalidError("the cell is in an invalid state and cannot be used any more")

    ## setup
    def set_applied_current(self, target: float) -> None:
        """Request a new current in A. The actual current follows at the ramp rate of the cell."""
        self._check_valid()
        if not math.isfinite(target):
            raise ValueError(f"target current has to be finite, got {target!r}")
        self._target_current = target

    def set_lithium_fraction(self, fraction_pos: float, fraction_neg: float) -> None:
        """Set both concentration profiles to a uniform lithium fraction.

        Raises:
            InvalidStateError: if the resulting state is invalid, the state is left unchanged.
        """
        self._check_valid()
        self._state = self._state.with_lithium_fraction(fraction_pos, fraction_neg, self.limits)
        self.cycle_detector.reference = self._averages(self._state)

    def set_voltage(self, voltage: float) -> float:
        """Seed a uniform state whose open circuit voltage is ``voltage``.

        The lithium fractions are interpolated linearly over the stoichiometry
        window of both electrodes.

        Returns:
            The state of charge in p.u. of the window.
        """
        self._check_valid()
        T = self._state.T

        def residual(soc: float) -> float:
            return self.chemistry.open_circuit_voltage(*self._window_fractions(soc), T) - voltage

        if residual(0.0) > 0 or residual(1.0) < 0:
            raise ValueError(f"voltage {voltage} V is outside the open circuit voltage window of the cell")

        soc = brentq(residual, 0.0, 1.0)
        self.set_lithium_fraction(*self._window_fractions(soc))
        return soc

    def _window_fractions(self, soc: float) -> tuple[float, float]:
        pos = self.chemistry.positive
        neg = self.chemistry.negative
        return (
            pos.fraction_empty + soc * (pos.fraction_full - pos.fraction_empty),
            neg.fraction_empty + soc * (neg.fraction_full - neg.fraction_empty),
        )

    ## electrochemistry
    def _averages(self, state: CellState) -> tuple[float, float]:
        return (
            self.diffusion_pos.average_concentration(state.c_pos),
            self.diffusion_neg.average_concentration(state.c_neg),
        )

    def _surface_fractions(self, state: CellState) -> tuple[float, float]:
        return (
            self.diffusion_pos.surface_concentration(state.c_pos) / self.chemistry.positive.max_concentration,
            self.diffusion_neg.surface_concentration(state.c_neg) / self.chemistry.negative.max_concentration,
        )

    def _real_surfaces(self, state: CellState) -> tuple[float, float]:
        area = self.chemistry.electrochemical.electrode_area
        return (
            state.surface_area_pos * state.thickness_pos * area,
            state.surface_area_neg * state.thickness_neg * area,
        )

    def _main_fluxes(self, state: CellState, current: float) -> tuple[float, float]:
        "molar flux out of the (positive, negative) particles in mol/m2/s"
        surface_pos, surface_neg = self._real_surfaces(state)
        n = self.chemistry.electrochemical.electrons
        return -current / (surface_pos * n * F), current / (surface_neg * n * F)

    def _overpotential(self, electrode: ElectrodeProperties, flux: float, fraction: float, T: float) -> float:
        "Butler-Volmer overpotential with symmetric charge transfer"
        if flux == 0.0:
            return 0.0
        chem = self.chemistry
        k = arrhenius(electrode.rate_constant, electrode.rate_activation, T, chem.thermal.reference_temperature)
        c_surf = fraction * electrode.max_concentration
        product = chem.electrochemical.electrolyte_concentration * c_surf * (electrode.max_concentration - c_surf)
        if product <= 0:
            return math.copysign(math.inf, flux)
        i0 = k * math.sqrt(product)
        n = chem.electrochemical.electrons
        return 2 * R * T / (n * F) * math.asinh(flux / (2 * i0))

    def _ohmic_resistance(self, state: CellState) -> float:
        surface_pos, surface_neg = self._real_surfaces(state)
        return state.resistance / ((surface_pos + surface_neg) / 2)

    def _terminal_voltage(self, state: CellState, current: float) -> float:
        fraction_pos, fraction_neg = self._surface_fractions(state)
        j_pos, j_neg = self._main_fluxes(state, current)
        eta_pos = self._overpotential(self.chemistry.positive, j_pos, fraction_pos, state.T)
        eta_neg = self._overpotential(self.chemistry.negative, j_neg, fraction_neg, state.T)
        ocv = self.chemistry.open_circuit_voltage(fraction_pos, fraction_neg, state.T)
        return ocv + eta_pos - eta_neg - current * self._ohmic_resistance(state)

    def voltage(self) -> float:
        "terminal voltage in V at the actual current"
        return self._terminal_voltage(self._state, self._current)

    @property
    def cathode_surface(self) -> float:
        "real reaction surface of the positive electrode in m2"
        return self._real_surfaces(self._state)[0]

    @property
    def anode_surface(self) -> float:
        "real reaction surface of the negative electrode in m2"
        return self._real_surfaces(self._state)[1]

    ## state of health
    def capacity_fraction(self, state: CellState | None = None) -> float:
        """Remaining capacity relative to the initial state.

        The capacity is limited by the active volume of either electrode and
        by the remaining cyclable lithium.
        """
        state = self._state if state is None else state
        initial = self.initial_state
        pos = state.volume_fraction_pos * state.thickness_pos / (initial.volume_fraction_pos * initial.thickness_pos)
        neg = state.volume_fraction_neg * state.thickness_neg / (initial.volume_fraction_neg * initial.thickness_neg)
        lithium = 1 - state.lost_lithium / self.chemistry.cyclable_lithium
        return min(pos, neg, lithium)

    def resistance_fraction(self, state: CellState | None = None) -> float:
        state = self._state if state is None else state
        return self._ohmic_resistance(state) / self._ohmic_resistance(self.initial_state)

    ## simulation
    def _ramp(self, dt: float) -> float:
        max_change = self.chemistry.electrical.current_ramp_rate * dt
        delta = self._target_current - self._current
        if abs(delta) <= max_change:
            return self._target_current
        return self._current + math.copysign(max_change, delta)

    def step(self, dt: float, ambient_temperature: float) -> StepResult:
        """Advance the cell by one timestep.

        Degradation rates, overpotentials and heat are evaluated on the state at
        the start of the step; the new state is accepted only as a whole.

        Args:
            dt: Timestep in s.
            ambient_temperature: Ambient temperature in K.

        Raises:
            CellInvalidError: if the cell is already invalid.
            InvalidStateError: if the new state is invalid, the cell becomes invalid.
            VoltageLimitError: if the terminal voltage would leave the voltage window,
                the step is not applied and the cell stays usable.
        """
        self._check_valid()
        if not dt > 0:
            raise ValueError(f"timestep has to be positive, got {dt!r}")
        if not math.isfinite(ambient_temperature):
            raise ValueError(f"ambient temperature has to be finite, got {ambient_temperature!r}")

        chem = self.chemistry
        T_ref = chem.thermal.reference_temperature
        state = self._state
        T = state.T
        current = self._ramp(dt)

        # electrode potentials at the start of the step
        fraction_pos, fraction_neg = self._surface_fractions(state)
        j_pos, j_neg = self._main_fluxes(state, current)
        eta_pos = self._overpotential(chem.positive, j_pos, fraction_pos, T)
        eta_neg = self._overpotential(chem.negative, j_neg, fraction_neg, T)
        surface_pos, surface_neg = self._real_surfaces(state)
        averages = self._averages(state)

        ctx = DegradationContext(
            state=state,
            initial_state=self.initial_state,
            current=current,
            dt=dt,
            T_ref=T_ref,
            potential_pos=chem.open_circuit_voltage_positive(fraction_pos) + eta_pos,
            potential_neg=chem.open_circuit_voltage_negative(fraction_neg) + eta_neg,
            average_pos=averages[0],
            average_neg=averages[1],
            surface_pos=surface_pos,
            surface_neg=surface_neg,
            electrode_area=chem.electrochemical.electrode_area,
            particle_radius_pos=chem.positive.particle_radius,
            particle_radius_neg=chem.negative.particle_radius,
            max_crack_surface=self.limits.max_crack_surface,
            nominal_capacity=chem.electrical.nominal_capacity,
            stress=self.stress.compute(state, self.cycle_detector.reference),
        )
        rates = self._degradation.rates(ctx)
        j_side = self._degradation.side_flux(ctx, rates)

        # solid diffusion, side reactions consume lithium of the negative particles
        D_pos = arrhenius(state.diffusivity_pos, chem.positive.diffusivity_activation, T, T_ref)
        D_neg = arrhenius(state.diffusivity_neg, chem.negative.diffusivity_activation, T, T_ref)
        c_pos = self.diffusion_pos.step(state.c_pos, j_pos, dt, D_pos)
        c_neg = self.diffusion_neg.step(state.c_neg, j_neg + j_side, dt, D_neg)

        # irreversible and reversible heat
        ocv = chem.open_circuit_voltage(fraction_pos, fraction_neg, T)
        v_start = ocv + eta_pos - eta_neg - current * self._ohmic_resistance(state)
        heat = current * (ocv - v_start) - current * T * chem.entropic_coefficient(fraction_pos, fraction_neg)
        T_new = self.thermal.update(T, heat, ambient_temperature, dt)

        changes = self._degradation.apply(ctx, rates)
        try:
            new_state = state.evolve(self.limits, c_pos=c_pos, c_neg=c_neg, T=T_new, **changes)
        except InvalidStateError as e:
            self._fail(e)
            raise

        voltage = self._terminal_voltage(new_state, current)
        if math.isnan(voltage):
            e = InvalidStateError(StateViolation("voltage", ViolationRule.NOT_FINITE, voltage))
            self._fail(e)
            raise e

        electrical = chem.electrical
        if voltage < electrical.min_voltage or voltage > electrical.max_voltage:
            limit = electrical.min_voltage if voltage < electrical.min_voltage else electrical.max_voltage
            logger.info("step at t = %.1f s rejected, voltage %.4f V outside limits", self._time, voltage)
            raise VoltageLimitError(voltage, limit)

        self.cycle_detector.update(current, dt, averages)
        self._state = new_state
        self._current = current
        self._time += dt

        return StepResult(
            time=self._time,
            current=current,
            voltage=voltage,
            temperature=new_state.T,
            capacity_fraction=self.capacity_fraction(new_state),
            resistance_fraction=self.resistance_fraction(new_state),
            heat=heat,
        )

    def _fail(self, error: InvalidStateError) -> None:
        self._invalid = True
        logger.warning("cell became invalid at t = %.1f s: %s", self._time, error)
