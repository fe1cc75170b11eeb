"""Mechanical stress in the electrode particles.

Two formulations are available:

* ``DAI``: diffusion induced stress of a spherical particle, from the radial
  concentration gradient (Dai et al.). The tangential stress at the surface
  and the radial stress in the centre are::

      sigma_t(R) = Omega E (c_avg - c_surf) / (3 (1 - nu))
      sigma_r(0) = 2 Omega E (c_avg - c_0) / (9 (1 - nu))

  and the one with the larger magnitude is reported.

* ``LARESGOITI``: stress from the swing of the average concentration since
  the last current reversal (Laresgoiti et al.)::

      sigma = |Omega| E |c_avg - c_ref| / (3 (1 - nu))

All stresses are returned in MPa.
"""

from dataclasses import dataclass
from enum import Enum

from simcell.cell.state import CellState
from simcell.diffusion.diffusion import DiffusionModel


class StressFormulation(Enum):
    DAI = "dai"
    LARESGOITI = "laresgoiti"


@dataclass(frozen=True)
class StressParameters:
    """
    omega_pos, omega_neg :
        partial molar volume of lithium in the active material in m3/mol
    young_pos, young_neg :
        Young's modulus in Pa
    poisson_pos, poisson_neg :
        Poisson's ratio
    """

    omega_pos: float
    young_pos: float
    poisson_pos: float
    omega_neg: float
    young_neg: float
    poisson_neg: float

    def factor(self, electrode: str) -> float:
        "Omega E / (3 (1 - nu)) in MPa m3/mol"
        omega = getattr(self, f"omega_{electrode}")
        young = getattr(self, f"young_{electrode}")
        poisson = getattr(self, f"poisson_{electrode}")
        return omega * young / (3 * (1 - poisson)) * 1e-6


@dataclass(frozen=True, slots=True)
class StressValues:
    """(positive, negative) stress in MPa per formulation, None if not computed."""

    dai: tuple[float, float] | None = None
    laresgoiti: tuple[float, float] | None = None


class StressModel:
    """Computes the stress formulations some degradation mechanism depends on.

    Formulations not passed at construction are never evaluated.
    """

    def __init__(
        self,
        params: StressParameters,
        diffusion_pos: DiffusionModel,
        diffusion_neg: DiffusionModel,
        formulations=frozenset(),
    ) -> None:
        self.params = params
        self.formulations = frozenset(formulations)
        self._diffusion = {"pos": diffusion_pos, "neg": diffusion_neg}

    def compute(self, state: CellState, reference: tuple[float, float]) -> StressValues:
        """
        Args:
            state: State to compute the stress for.
            reference: (positive, negative) average concentration at the last current reversal.
        """
        dai = self.dai(state) if StressFormulation.DAI in self.formulations else None
        laresgoiti = self.laresgoiti(state, reference) if StressFormulation.LARESGOITI in self.formulations else None
        return StressValues(dai=dai, laresgoiti=laresgoiti)

    def dai(self, state: CellState) -> tuple[float, float]:
        return self._dai("pos", state.c_pos), self._dai("neg", state.c_neg)

    def _dai(self, electrode: str, profile) -> float:
        model = self._diffusion[electrode]
        factor = self.params.factor(electrode)
        c_avg = model.average_concentration(profile)

        surface_tangential = factor * (c_avg - model.surface_concentration(profile))
        centre_radial = 2 / 3 * factor * (c_avg - model.centre_concentration(profile))
        return max(surface_tangential, centre_radial, key=abs)

    def laresgoiti(self, state: CellState, reference: tuple[float, float]) -> tuple[float, float]:
        ref_pos, ref_neg = reference
        avg_pos = self._diffusion["pos"].average_concentration(state.c_pos)
        avg_neg = self._diffusion["neg"].average_concentration(state.c_neg)
        return (
            abs(self.params.factor("pos")) * abs(avg_pos - ref_pos),
            abs(self.params.factor("neg")) * abs(avg_neg - ref_neg),
        )
