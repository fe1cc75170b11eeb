"""Loss of active material.

Each law returns the relative loss rate of active volume in 1/s for the
(positive, negative) electrode.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from simcell.constants import F, R, arrhenius
from simcell.degradation.context import DegradationContext
from simcell.degradation.identifiers import LAMModel
from simcell.stress.stress import StressFormulation


@dataclass(frozen=True)
class LAMParameters:
    """
    dai_alpha_pos, dai_alpha_neg :
        relative loss in 1/(s MPa) per diffusion induced stress
    delacourt_alpha_pos, delacourt_alpha_neg :
        relative loss per full equivalent cycle
    kindermann_k, kindermann_k_T :
        relative loss rate in 1/s of the positive electrode and its activation energy in J/mol
    kindermann_ocv :
        potential of the positive electrode above which dissolution accelerates in V
    thickness_share :
        share of the lost active volume taken from the electrode thickness,
        the rest is taken from the volume fraction
    """

    dai_alpha_pos: float
    dai_alpha_neg: float
    delacourt_alpha_pos: float
    delacourt_alpha_neg: float
    kindermann_k: float
    kindermann_k_T: float
    kindermann_ocv: float = 4.1
    thickness_share: float = 0.5


class ActiveMaterialLoss(ABC):
    """Rate law of one LAM model."""

    stress: StressFormulation | None = None

    def __init__(self, params: LAMParameters) -> None:
        self.params = params

    @abstractmethod
    def rate(self, ctx: DegradationContext) -> tuple[float, float]:
        """Relative active volume loss in 1/s of the (positive, negative) electrode."""


class _NoLoss(ActiveMaterialLoss):
    def rate(self, ctx: DegradationContext) -> tuple[float, float]:
        return 0.0, 0.0


class DaiLAM(ActiveMaterialLoss):
    stress = StressFormulation.DAI

    def rate(self, ctx: DegradationContext) -> tuple[float, float]:
        sigma_pos, sigma_neg = ctx.stress.dai
        return self.params.dai_alpha_pos * abs(sigma_pos), self.params.dai_alpha_neg * abs(sigma_neg)


class DelacourtLAM(ActiveMaterialLoss):
    def rate(self, ctx: DegradationContext) -> tuple[float, float]:
        fec_rate = ctx.fec_rate
        return self.params.delacourt_alpha_pos * fec_rate, self.params.delacourt_alpha_neg * fec_rate


class KindermannLAM(ActiveMaterialLoss):
    """Dissolution of the positive electrode, accelerating above ``kindermann_ocv``."""

    def rate(self, ctx: DegradationContext) -> tuple[float, float]:
        p = self.params
        k = arrhenius(p.kindermann_k, p.kindermann_k_T, ctx.T, ctx.T_ref)
        return k * math.exp(F / (R * ctx.T) * (ctx.potential_pos - p.kindermann_ocv)), 0.0


LAM_LAWS: dict[LAMModel, type[ActiveMaterialLoss]] = {
    LAMModel.NONE: _NoLoss,
    LAMModel.DAI: DaiLAM,
    LAMModel.DELACOURT: DelacourtLAM,
    LAMModel.KINDERMANN: KindermannLAM,
}
