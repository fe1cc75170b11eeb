"""Growth of the solid electrolyte interphase on the negative electrode.

Each law returns the current density of the SEI side reaction in A/m2 of
reacting surface. The DegradationModel turns it into SEI thickness, lost
lithium, resistance and (optionally) porosity changes.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from simcell.constants import F, R, arrhenius
from simcell.degradation.context import DegradationContext
from simcell.degradation.identifiers import SEIModel
from simcell.stress.stress import StressFormulation


@dataclass(frozen=True)
class SEIParameters:
    """
    kinetic_k, kinetic_k_T :
        rate constant (m/s) and its activation energy (J/mol) of the kinetic model
    diffusion_k, diffusion_k_T :
        rate constant (m/s) and its activation energy (J/mol) of the diffusion limited model
    diffusion_D, diffusion_D_T :
        solvent diffusion constant through the SEI (m2/s) and its activation energy (J/mol)
    electrons :
        number of electrons transferred in the SEI reaction
    alpha :
        charge transfer coefficient
    ocv :
        equilibrium potential of the SEI reaction in V vs Li/Li+
    solvent_concentration :
        solvent concentration at the particle surface in mol/m3
    molar_volume :
        molar volume of the SEI in m3/mol
    resistivity :
        ionic resistivity of the SEI in ohm m
    """

    kinetic_k: float
    kinetic_k_T: float
    diffusion_k: float
    diffusion_k_T: float
    diffusion_D: float
    diffusion_D_T: float
    electrons: int = 1
    alpha: float = 1.0
    ocv: float = 0.4
    solvent_concentration: float = 4.541
    molar_volume: float = 64.39e-6
    resistivity: float = 2037.4


class SEIGrowth(ABC):
    """Rate law of one SEI growth model."""

    stress: StressFormulation | None = None

    def __init__(self, params: SEIParameters) -> None:
        self.params = params

    @abstractmethod
    def current_density(self, ctx: DegradationContext) -> float:
        """Current density of the SEI side reaction in A/m2 (positive, consuming lithium)."""

    def _tafel(self, ctx: DegradationContext) -> float:
        p = self.params
        return math.exp(-p.alpha * p.electrons * F / (R * ctx.T) * (ctx.potential_neg - p.ocv))


class _NoGrowth(SEIGrowth):
    def current_density(self, ctx: DegradationContext) -> float:
        return 0.0


class KineticSEI(SEIGrowth):
    """Reaction limited growth, the rate does not depend on the layer thickness."""

    def current_density(self, ctx: DegradationContext) -> float:
        p = self.params
        k = arrhenius(p.kinetic_k, p.kinetic_k_T, ctx.T, ctx.T_ref)
        return p.electrons * F * p.solvent_concentration * k * self._tafel(ctx)


class DiffusionLimitedSEI(SEIGrowth):
    """Reaction in series with solvent diffusion through the layer (Pinson & Bazant).

    Thin layers grow reaction limited, thick layers diffusion limited with
    the well known square root of time behaviour.
    """

    def current_density(self, ctx: DegradationContext) -> float:
        p = self.params
        k = arrhenius(p.diffusion_k, p.diffusion_k_T, ctx.T, ctx.T_ref)
        D = arrhenius(p.diffusion_D, p.diffusion_D_T, ctx.T, ctx.T_ref)
        resistance = 1 / (k * self._tafel(ctx)) + ctx.state.sei_thickness / D
        return p.electrons * F * p.solvent_concentration / resistance


SEI_LAWS: dict[SEIModel, type[SEIGrowth]] = {
    SEIModel.NONE: _NoGrowth,
    SEIModel.KINETIC: KineticSEI,
    SEIModel.DIFFUSION_LIMITED: DiffusionLimitedSEI,
}
