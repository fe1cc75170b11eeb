"""Growth of the crack surface of the negative electrode particles.

Each law returns the crack growth rate in m2/s. The DegradationModel caps
the increment so that the crack surface never exceeds its maximum.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from simcell.constants import F, R, arrhenius
from simcell.degradation.context import DegradationContext
from simcell.degradation.identifiers import CrackModel
from simcell.stress.stress import StressFormulation


@dataclass(frozen=True)
class CrackParameters:
    """
    laresgoiti_alpha :
        growth in m2/(s A MPa2) per squared concentration swing stress and current
    dai_alpha :
        growth in m2/(s MPa2) per squared diffusion induced stress
    barai_alpha :
        relative approach to the maximum crack surface per second at 1C
    ekstrom_k, ekstrom_k_T :
        relative growth rate in 1/s and its activation energy in J/mol
    diffusion_exponent :
        exponent of the crack surface ratio reducing the diffusion constant
    """

    laresgoiti_alpha: float
    dai_alpha: float
    barai_alpha: float
    ekstrom_k: float
    ekstrom_k_T: float
    diffusion_exponent: float = 2.0


class CrackGrowth(ABC):
    """Rate law of one crack growth model."""

    stress: StressFormulation | None = None

    def __init__(self, params: CrackParameters) -> None:
        self.params = params

    @abstractmethod
    def rate(self, ctx: DegradationContext) -> float:
        """Crack growth in m2/s."""


class _NoCracks(CrackGrowth):
    def rate(self, ctx: DegradationContext) -> float:
        return 0.0


class LaresgoitiCracks(CrackGrowth):
    stress = StressFormulation.LARESGOITI

    def rate(self, ctx: DegradationContext) -> float:
        _, sigma_neg = ctx.stress.laresgoiti
        return self.params.laresgoiti_alpha * sigma_neg**2 * abs(ctx.current)


class DaiCracks(CrackGrowth):
    stress = StressFormulation.DAI

    def rate(self, ctx: DegradationContext) -> float:
        _, sigma_neg = ctx.stress.dai
        return self.params.dai_alpha * sigma_neg**2


class BaraiCracks(CrackGrowth):
    """Growth towards the maximum crack surface, proportional to the C-rate."""

    def rate(self, ctx: DegradationContext) -> float:
        remaining = ctx.max_crack_surface - ctx.state.crack_surface
        return self.params.barai_alpha * remaining * abs(ctx.current) / ctx.nominal_capacity


class EkstromCracks(CrackGrowth):
    def rate(self, ctx: DegradationContext) -> float:
        p = self.params
        k = arrhenius(p.ekstrom_k, p.ekstrom_k_T, ctx.T, ctx.T_ref)
        return k * ctx.state.crack_surface * math.exp(-F / (R * ctx.T) * ctx.potential_neg)


CRACK_LAWS: dict[CrackModel, type[CrackGrowth]] = {
    CrackModel.NONE: _NoCracks,
    CrackModel.LARESGOITI: LaresgoitiCracks,
    CrackModel.DAI: DaiCracks,
    CrackModel.BARAI: BaraiCracks,
    CrackModel.EKSTROM: EkstromCracks,
}
