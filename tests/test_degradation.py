"""Unit tests for the degradation rate laws and the DegradationModel."""

from dataclasses import replace

import pytest

from simcell.constants import F
from simcell.degradation import (
    CrackModel,
    DegradationContext,
    DegradationIds,
    DegradationModel,
    DegradationRates,
    LAMModel,
    PlatingModel,
    SEIModel,
)
from simcell.degradation.cracking import CRACK_LAWS
from simcell.degradation.lam import LAM_LAWS, KindermannLAM
from simcell.degradation.plating import PLATING_LAWS
from simcell.degradation.sei import SEI_LAWS, DiffusionLimitedSEI, KineticSEI
from simcell.model.cell.kokam_nmc import KokamNMC
from simcell.stress.stress import StressFormulation, StressValues

CHEM = KokamNMC()
PARAMS = CHEM.degradation


def _context(current=2.7, dt=10.0, potential_neg=0.1, potential_pos=3.8, state=None) -> DegradationContext:
    initial = CHEM.initial_state()
    return DegradationContext(
        state=initial if state is None else state,
        initial_state=initial,
        current=current,
        dt=dt,
        T_ref=298.15,
        potential_pos=potential_pos,
        potential_neg=potential_neg,
        average_pos=0.689332 * 51385,
        average_neg=0.479283 * 30555,
        surface_pos=CHEM.initial_cathode_surface,
        surface_neg=CHEM.initial_anode_surface,
        electrode_area=CHEM.electrochemical.electrode_area,
        particle_radius_pos=CHEM.positive.particle_radius,
        particle_radius_neg=CHEM.negative.particle_radius,
        max_crack_surface=CHEM.max_crack_surface,
        nominal_capacity=CHEM.electrical.nominal_capacity,
        stress=StressValues(dai=(-200.0, 500.0), laresgoiti=(100.0, 300.0)),
    )


# ===================================================================
# Mechanism selection
# ===================================================================
class TestDegradationIds:
    def test_default_has_no_degradation(self):
        ids = DegradationIds()
        assert ids.sei == (SEIModel.NONE,)
        assert ids.plating is PlatingModel.NONE
        assert not ids.sei_porosity

    def test_single_model_is_wrapped(self):
        ids = DegradationIds(cracking=CrackModel.DAI)
        assert ids.cracking == (CrackModel.DAI,)

    def test_wrong_type_rejected(self):
        with pytest.raises(TypeError):
            DegradationIds(sei=(CrackModel.DAI,))
        with pytest.raises(TypeError):
            DegradationIds(plating=SEIModel.KINETIC)

    def test_required_stress(self):
        model = DegradationModel(
            DegradationIds(cracking=(CrackModel.LARESGOITI, CrackModel.BARAI), lam=LAMModel.DAI),
            PARAMS,
        )
        assert model.required_stress == {StressFormulation.LARESGOITI, StressFormulation.DAI}

    def test_no_stress_required_without_stress_laws(self):
        model = DegradationModel(DegradationIds(sei=SEIModel.KINETIC, lam=LAMModel.DELACOURT), PARAMS)
        assert model.required_stress == frozenset()


# ===================================================================
# Rate laws
# ===================================================================
class TestRateLaws:
    @pytest.mark.parametrize("current", [2.7, -2.7, 0.0])
    def test_all_laws_non_negative(self, current):
        ctx = _context(current=current)
        for model, law in SEI_LAWS.items():
            assert law(PARAMS.sei).current_density(ctx) >= 0, model
        for model, law in PLATING_LAWS.items():
            assert law(PARAMS.plating).current_density(ctx) >= 0, model
        for model, law in CRACK_LAWS.items():
            assert law(PARAMS.cracking).rate(ctx) >= 0, model
        for model, law in LAM_LAWS.items():
            r_pos, r_neg = law(PARAMS.lam).rate(ctx)
            assert r_pos >= 0 and r_neg >= 0, model

    def test_none_laws_are_zero(self):
        ctx = _context()
        assert SEI_LAWS[SEIModel.NONE](PARAMS.sei).current_density(ctx) == 0.0
        assert PLATING_LAWS[PlatingModel.NONE](PARAMS.plating).current_density(ctx) == 0.0
        assert CRACK_LAWS[CrackModel.NONE](PARAMS.cracking).rate(ctx) == 0.0
        assert LAM_LAWS[LAMModel.NONE](PARAMS.lam).rate(ctx) == (0.0, 0.0)

    def test_sei_slower_at_higher_potential(self):
        law = KineticSEI(PARAMS.sei)
        assert law.current_density(_context(potential_neg=0.05)) > law.current_density(_context(potential_neg=0.2))

    def test_sei_faster_when_hot(self):
        law = KineticSEI(PARAMS.sei)
        hot = replace(CHEM.initial_state(), T=318.15)
        assert law.current_density(_context(state=hot)) > law.current_density(_context())

    def test_diffusion_limited_sei_slows_with_thickness(self):
        law = DiffusionLimitedSEI(PARAMS.sei)
        thick = replace(CHEM.initial_state(), sei_thickness=1e-7)
        assert law.current_density(_context(state=thick)) < law.current_density(_context())

    def test_diffusion_limited_below_kinetic(self):
        """Solvent diffusion in series can only slow the reaction down."""
        params = replace(PARAMS.sei, diffusion_k=PARAMS.sei.kinetic_k, diffusion_k_T=PARAMS.sei.kinetic_k_T)
        ctx = _context()
        assert DiffusionLimitedSEI(params).current_density(ctx) < KineticSEI(params).current_density(ctx)

    def test_plating_faster_at_low_potential(self):
        law = PLATING_LAWS[PlatingModel.TAFEL](PARAMS.plating)
        assert law.current_density(_context(potential_neg=-0.01)) > law.current_density(_context(potential_neg=0.1))

    def test_stress_driven_cracks_follow_stress(self):
        ctx = _context()
        dai = CRACK_LAWS[CrackModel.DAI](PARAMS.cracking)
        laresgoiti = CRACK_LAWS[CrackModel.LARESGOITI](PARAMS.cracking)
        assert dai.rate(ctx) == pytest.approx(PARAMS.cracking.dai_alpha * 500.0**2)
        assert laresgoiti.rate(ctx) == pytest.approx(PARAMS.cracking.laresgoiti_alpha * 300.0**2 * 2.7)

    def test_barai_cracks_saturate(self):
        law = CRACK_LAWS[CrackModel.BARAI](PARAMS.cracking)
        full = replace(CHEM.initial_state(), crack_surface=CHEM.max_crack_surface)
        assert law.rate(_context(state=full)) == 0.0
        assert law.rate(_context(current=0.0)) == 0.0

    def test_kindermann_only_positive_electrode(self):
        r_pos, r_neg = KindermannLAM(PARAMS.lam).rate(_context(potential_pos=4.2))
        assert r_pos > 0
        assert r_neg == 0.0

    def test_kindermann_accelerates_at_high_potential(self):
        law = KindermannLAM(PARAMS.lam)
        assert law.rate(_context(potential_pos=4.2))[0] > law.rate(_context(potential_pos=3.7))[0]

    def test_delacourt_proportional_to_throughput(self):
        law = LAM_LAWS[LAMModel.DELACOURT](PARAMS.lam)
        ctx = _context(current=2.7)
        expected = PARAMS.lam.delacourt_alpha_pos * 2.7 / (2 * 3600 * 2.7)
        assert law.rate(ctx)[0] == pytest.approx(expected)
        assert law.rate(_context(current=-5.4))[0] == pytest.approx(2 * expected)


# ===================================================================
# DegradationModel
# ===================================================================
class TestDegradationModel:
    def test_laws_of_one_family_are_summed(self):
        ctx = _context()
        both = DegradationModel(DegradationIds(sei=(SEIModel.KINETIC, SEIModel.DIFFUSION_LIMITED)), PARAMS)
        expected = KineticSEI(PARAMS.sei).current_density(ctx) + DiffusionLimitedSEI(PARAMS.sei).current_density(ctx)
        assert both.rates(ctx).sei_current == pytest.approx(expected)

    def test_frozen_copy(self):
        model = DegradationModel(DegradationIds(sei=SEIModel.KINETIC), PARAMS)
        frozen = model.frozen()
        model.sei.append(DiffusionLimitedSEI(PARAMS.sei))
        assert len(frozen.sei) == 1
        assert frozen.frozen() is frozen
        with pytest.raises(AttributeError):
            frozen.plating = model.plating

    def test_no_degradation_leaves_state_unchanged(self):
        ctx = _context()
        model = DegradationModel.none(PARAMS)
        rates = model.rates(ctx)
        assert rates == DegradationRates()
        changes = model.apply(ctx, rates)
        state = ctx.state
        for name, value in changes.items():
            assert value == getattr(state, name), name
        assert "volume_fraction_neg" not in changes
        assert "diffusivity_neg" not in changes

    def test_side_flux_includes_crack_surface(self):
        ctx = _context()
        model = DegradationModel.none(PARAMS)
        flux = model.side_flux(ctx, DegradationRates(sei_current=1.0))
        expected = (ctx.surface_neg + ctx.state.crack_surface) / F
        assert flux * ctx.surface_neg == pytest.approx(expected)

    def test_side_reactions_consume_lithium(self):
        ctx = _context()
        model = DegradationModel.none(PARAMS)
        changes = model.apply(ctx, DegradationRates(sei_current=1e-3, plating_current=1e-3))
        assert changes["lost_lithium"] > ctx.state.lost_lithium
        assert changes["sei_thickness"] > ctx.state.sei_thickness
        assert changes["plating_thickness"] > 0.0
        assert changes["resistance"] > ctx.state.resistance

    def test_crack_growth_capped(self):
        ctx = _context()
        model = DegradationModel.none(PARAMS)
        changes = model.apply(ctx, DegradationRates(crack_growth=1e3))
        assert changes["crack_surface"] == ctx.max_crack_surface

    def test_crack_diffusion(self):
        ctx = _context()
        model = DegradationModel(DegradationIds(crack_diffusion=True), PARAMS)
        changes = model.apply(ctx, DegradationRates(crack_growth=1e-2))
        initial = ctx.initial_state
        ratio = (ctx.surface_neg + initial.crack_surface) / (ctx.surface_neg + changes["crack_surface"])
        assert changes["diffusivity_neg"] == pytest.approx(initial.diffusivity_neg * ratio**2)
        assert changes["diffusivity_neg"] < initial.diffusivity_neg

    def test_sei_porosity(self):
        ctx = _context()
        sei_only = DegradationModel.none(PARAMS)
        porous = DegradationModel(DegradationIds(sei_porosity=True), PARAMS)
        rates = DegradationRates(sei_current=1.0)
        dense = sei_only.apply(ctx, rates)
        changes = porous.apply(ctx, rates)

        growth = changes["sei_thickness"] - ctx.state.sei_thickness
        expected = ctx.state.volume_fraction_neg - ctx.state.surface_area_neg * growth
        assert changes["volume_fraction_neg"] == pytest.approx(expected)
        assert changes["surface_area_neg"] < ctx.state.surface_area_neg
        # lithium in the clogged pores is lost on top of the side reaction
        assert changes["lost_lithium"] > dense["lost_lithium"]

    def test_lam_splits_thickness_and_volume_fraction(self):
        ctx = _context()
        model = DegradationModel.none(PARAMS)
        changes = model.apply(ctx, DegradationRates(lam_pos=1e-4))
        state = ctx.state
        assert changes["thickness_pos"] == pytest.approx(state.thickness_pos * (1 - 0.5e-3))
        assert changes["volume_fraction_pos"] == pytest.approx(state.volume_fraction_pos * (1 - 0.5e-3))
        assert changes["thickness_neg"] == state.thickness_neg
        assert changes["surface_area_pos"] == pytest.approx(3 * changes["volume_fraction_pos"] / CHEM.positive.particle_radius)

    def test_lam_loses_stored_lithium(self):
        ctx = _context()
        model = DegradationModel.none(PARAMS)
        changes = model.apply(ctx, DegradationRates(lam_pos=1e-4))
        state = ctx.state
        before = state.volume_fraction_pos * state.thickness_pos
        after = changes["volume_fraction_pos"] * changes["thickness_pos"]
        removed = (before - after) * ctx.electrode_area * ctx.average_pos
        assert changes["lost_lithium"] == pytest.approx(removed)
