import copy
from dataclasses import dataclass

from simcell.constants import F
from simcell.degradation.context import DegradationContext
from simcell.degradation.cracking import CRACK_LAWS, CrackGrowth, CrackParameters
from simcell.degradation.identifiers import DegradationIds
from simcell.degradation.lam import LAM_LAWS, ActiveMaterialLoss, LAMParameters
from simcell.degradation.plating import PLATING_LAWS, LithiumPlating, PlatingParameters
from simcell.degradation.sei import SEI_LAWS, SEIGrowth, SEIParameters


@dataclass(frozen=True)
class DegradationParameters:
    """Fitting parameters of all degradation mechanisms of one chemistry."""

    sei: SEIParameters
    plating: PlatingParameters
    cracking: CrackParameters
    lam: LAMParameters


@dataclass(frozen=True, slots=True)
class DegradationRates:
    """Summed rates of every mechanism family for one timestep."""

    sei_current: float = 0.0  # A/m2
    plating_current: float = 0.0  # A/m2
    crack_growth: float = 0.0  # m2/s
    lam_pos: float = 0.0  # 1/s
    lam_neg: float = 0.0  # 1/s


class DegradationModel:
    """Composes the rate laws selected by a DegradationIds.

    This is the object a Cell evaluates every timestep. Laws of one family are
    summed; all laws see the same start-of-step context and their effects are
    applied together by :meth:`apply`.

    Custom rate laws can be appended to the ``sei``, ``cracking`` and ``lam``
    lists (or replace ``plating``) before the model is passed to a Cell. The
    Cell keeps a :meth:`frozen` copy, so the selection is fixed from then on.
    """

    _frozen = False

    def __init__(self, ids: DegradationIds, params: DegradationParameters) -> None:
        self.ids = ids
        self.params = params
        self.sei: list[SEIGrowth] = [SEI_LAWS[model](params.sei) for model in ids.sei]
        self.plating: LithiumPlating = PLATING_LAWS[ids.plating](params.plating)
        self.cracking: list[CrackGrowth] = [CRACK_LAWS[model](params.cracking) for model in ids.cracking]
        self.lam: list[ActiveMaterialLoss] = [LAM_LAWS[model](params.lam) for model in ids.lam]

    def __setattr__(self, name, value):
        if self._frozen:
            raise AttributeError(f"cannot set {name!r}, the degradation model is frozen")
        super().__setattr__(name, value)

    def frozen(self) -> "DegradationModel":
        """Copy of this model whose rate laws can no longer be added, removed or replaced."""
        if self._frozen:
            return self
        model = copy.copy(self)
        model.sei = tuple(self.sei)
        model.cracking = tuple(self.cracking)
        model.lam = tuple(self.lam)
        model._frozen = True
        return model

    @classmethod
    def none(cls, params: DegradationParameters) -> "DegradationModel":
        """Create a model without any degradation."""
        return cls(DegradationIds(), params)

    @property
    def laws(self) -> list:
        return [*self.sei, self.plating, *self.cracking, *self.lam]

    @property
    def required_stress(self) -> frozenset:
        """Stress formulations at least one selected law depends on."""
        return frozenset(law.stress for law in self.laws if law.stress is not None)

    def rates(self, ctx: DegradationContext) -> DegradationRates:
        lam = [law.rate(ctx) for law in self.lam]
        return DegradationRates(
            sei_current=sum(law.current_density(ctx) for law in self.sei),
            plating_current=self.plating.current_density(ctx),
            crack_growth=sum(law.rate(ctx) for law in self.cracking),
            lam_pos=sum(pos for pos, _ in lam),
            lam_neg=sum(neg for _, neg in lam),
        )

    def side_flux(self, ctx: DegradationContext, rates: DegradationRates) -> float:
        """Lithium flux out of the negative particles consumed by side reactions in mol/m2/s.

        SEI forms on the particle surface and on the crack surface, plating on
        the particle surface only.
        """
        sei = rates.sei_current * (ctx.surface_neg + ctx.state.crack_surface) / (self.params.sei.electrons * F)
        plating = rates.plating_current * ctx.surface_neg / (self.params.plating.electrons * F)
        return (sei + plating) / ctx.surface_neg

    def apply(self, ctx: DegradationContext, rates: DegradationRates) -> dict:
        """Degradation related fields of the state at the end of the timestep.

        Returns:
            Field name to new value, to be passed to ``CellState.evolve``.
        """
        state = ctx.state
        dt = ctx.dt
        sei = self.params.sei
        plating = self.params.plating

        d_sei = rates.sei_current * sei.molar_volume / (sei.electrons * F) * dt
        d_plating = rates.plating_current * plating.molar_volume / (plating.electrons * F) * dt
        lost_lithium = state.lost_lithium + self.side_flux(ctx, rates) * ctx.surface_neg * dt

        # crack growth stops at the maximum crack surface
        crack_surface = min(state.crack_surface + rates.crack_growth * dt, ctx.max_crack_surface)

        changes = {
            "sei_thickness": state.sei_thickness + d_sei,
            "plating_thickness": state.plating_thickness + d_plating,
            "resistance": state.resistance + sei.resistivity * d_sei + plating.resistivity * d_plating,
            "crack_surface": crack_surface,
        }

        if self.ids.crack_diffusion:
            initial = ctx.initial_state
            initial_surface = initial.surface_area_neg * initial.thickness_neg * ctx.electrode_area
            ratio = (initial_surface + initial.crack_surface) / (initial_surface + crack_surface)
            changes["diffusivity_neg"] = initial.diffusivity_neg * ratio**self.params.cracking.diffusion_exponent

        porosity_loss = state.surface_area_neg * d_sei if self.ids.sei_porosity else 0.0
        if rates.lam_pos != 0.0 or rates.lam_neg != 0.0 or porosity_loss != 0.0:
            share = self.params.lam.thickness_share
            lost_pos = rates.lam_pos * dt
            lost_neg = rates.lam_neg * dt

            e_pos = state.volume_fraction_pos * (1 - (1 - share) * lost_pos)
            e_neg = state.volume_fraction_neg * (1 - (1 - share) * lost_neg) - porosity_loss
            L_pos = state.thickness_pos * (1 - share * lost_pos)
            L_neg = state.thickness_neg * (1 - share * lost_neg)

            # lithium stored in the removed active material is lost as well
            removed_pos = (state.volume_fraction_pos * state.thickness_pos - e_pos * L_pos) * ctx.electrode_area
            removed_neg = (state.volume_fraction_neg * state.thickness_neg - e_neg * L_neg) * ctx.electrode_area
            lost_lithium += removed_pos * ctx.average_pos + removed_neg * ctx.average_neg

            changes.update(
                volume_fraction_pos=e_pos,
                volume_fraction_neg=e_neg,
                thickness_pos=L_pos,
                thickness_neg=L_neg,
                surface_area_pos=3 * e_pos / ctx.particle_radius_pos,
                surface_area_neg=3 * e_neg / ctx.particle_radius_neg,
            )

        changes["lost_lithium"] = lost_lithium
        return changes
