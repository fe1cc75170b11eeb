import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from simcell.constants import F, R, arrhenius
from simcell.degradation.context import DegradationContext
from simcell.degradation.identifiers import PlatingModel
from simcell.stress.stress import StressFormulation


@dataclass(frozen=True)
class PlatingParameters:
    """
    k, k_T :
        rate constant in mol/m2/s and its activation energy in J/mol, a negative
        activation energy makes plating faster at low temperature
    electrons :
        number of electrons transferred in the plating reaction
    alpha :
        charge transfer coefficient
    ocv :
        equilibrium potential of lithium plating in V vs Li/Li+
    molar_volume :
        molar volume of metallic lithium in m3/mol
    resistivity :
        resistivity of the plated layer in ohm m
    """

    k: float
    k_T: float
    electrons: int = 1
    alpha: float = 1.0
    ocv: float = 0.0
    molar_volume: float = 13.0e-6
    resistivity: float = 1e5


class LithiumPlating(ABC):
    """Rate law of one lithium plating model."""

    stress: StressFormulation | None = None

    def __init__(self, params: PlatingParameters) -> None:
        self.params = params

    @abstractmethod
    def current_density(self, ctx: DegradationContext) -> float:
        """Current density of the plating side reaction in A/m2."""


class _NoPlating(LithiumPlating):
    def current_density(self, ctx: DegradationContext) -> float:
        return 0.0


class TafelPlating(LithiumPlating):
    """Tafel kinetics driven by the potential of the negative electrode vs the plating potential.

    The rate grows exponentially as the negative electrode is polarised
    towards 0 V vs Li/Li+, i.e. at low temperature and high charge rate.
    """

    def current_density(self, ctx: DegradationContext) -> float:
        p = self.params
        k = arrhenius(p.k, p.k_T, ctx.T, ctx.T_ref)
        return p.electrons * F * k * math.exp(-p.alpha * p.electrons * F / (R * ctx.T) * (ctx.potential_neg - p.ocv))


PLATING_LAWS: dict[PlatingModel, type[LithiumPlating]] = {
    PlatingModel.NONE: _NoPlating,
    PlatingModel.TAFEL: TafelPlating,
}
