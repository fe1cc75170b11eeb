"""Unit tests for the spherical particle diffusion model."""

import numpy as np
import pytest

from simcell.diffusion.diffusion import DiffusionModel
from simcell.errors import StructuralMismatchError

RADIUS = 1e-5
D = 1e-14


@pytest.fixture
def model() -> DiffusionModel:
    return DiffusionModel.spherical(10, RADIUS)


class TestDiscretization:
    def test_shapes(self, model):
        assert model.n_nodes == 10
        assert model.laplacian.shape == (10, 10)
        assert model.volume_weights.sum() == pytest.approx(1.0)

    def test_too_few_nodes(self):
        with pytest.raises(ValueError):
            DiffusionModel.spherical(1, RADIUS)

    def test_consistency_check_passes(self, model):
        model.check_consistency(10)

    def test_consistency_check_node_mismatch(self, model):
        with pytest.raises(StructuralMismatchError, match="laplacian"):
            model.check_consistency(12)

    def test_consistency_check_inconsistent_vectors(self):
        model = DiffusionModel(np.zeros((3, 3)), np.zeros(3), np.zeros(4))
        with pytest.raises(StructuralMismatchError, match="surface_vector"):
            model.check_consistency(3)

    def test_consistency_check_radius_mismatch(self, model):
        with pytest.raises(StructuralMismatchError, match="radius"):
            model.check_consistency(10, 2 * RADIUS)

    def test_consistency_check_matching_radius(self, model):
        model.check_consistency(10, RADIUS * (1 + 1e-12))

    def test_default_weights_are_uniform(self):
        model = DiffusionModel(np.zeros((4, 4)), np.zeros(4), np.array([0, 0, 0, 1.0]))
        assert model.average_concentration([1.0, 2.0, 3.0, 4.0]) == pytest.approx(2.5)


class TestConcentrations:
    def test_surface_average_centre(self, model):
        profile = np.linspace(1000.0, 2000.0, 10)
        assert model.surface_concentration(profile) == 2000.0
        assert model.centre_concentration(profile) == 1000.0
        # outer shells hold more volume
        assert model.average_concentration(profile) > 1500.0


class TestStep:
    def test_uniform_profile_without_flux_is_stationary(self, model):
        profile = np.full(10, 1500.0)
        new = model.step(profile, flux=0.0, dt=100.0, diffusivity=D)
        np.testing.assert_allclose(new, profile)

    def test_lithium_conserved_without_flux(self, model):
        profile = np.linspace(1000.0, 2000.0, 10)
        new = model.step(profile, flux=0.0, dt=100.0, diffusivity=D)
        assert model.average_concentration(new) == pytest.approx(model.average_concentration(profile))
        # gradients relax
        assert np.ptp(new) < np.ptp(profile)

    def test_average_follows_surface_flux(self, model):
        """A flux j out of the surface removes 3 j dt / R from the average."""
        profile = np.full(10, 1500.0)
        flux = 1e-5  # mol/m2/s
        dt = 10.0
        new = model.step(profile, flux=flux, dt=dt, diffusivity=D)
        expected = 1500.0 - 3 * flux * dt / RADIUS
        assert model.average_concentration(new) == pytest.approx(expected)

    def test_extraction_depletes_surface_first(self, model):
        profile = np.full(10, 1500.0)
        new = model.step(profile, flux=1e-5, dt=10.0, diffusivity=D)
        assert model.surface_concentration(new) < model.average_concentration(new)
        assert model.centre_concentration(new) > model.average_concentration(new)

    def test_insertion_fills_surface_first(self, model):
        profile = np.full(10, 1500.0)
        new = model.step(profile, flux=-1e-5, dt=10.0, diffusivity=D)
        assert model.surface_concentration(new) > model.average_concentration(new)

    def test_input_not_modified(self, model):
        profile = np.full(10, 1500.0)
        model.step(profile, flux=1e-5, dt=10.0, diffusivity=D)
        assert np.all(profile == 1500.0)
