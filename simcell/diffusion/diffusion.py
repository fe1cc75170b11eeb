import math

import numpy as np

from simcell.errors import StructuralMismatchError


class DiffusionModel:
    """Spatial discretization of solid diffusion in one spherical electrode particle.

    The matrices are given for a unit diffusion constant, so that::

        dc/dt = D * laplacian @ c + flux_vector * j

    where ``j`` is the molar flux out of the particle surface in mol/m2/s.
    The surface concentration is ``surface_vector @ c`` and the particle
    average is ``volume_weights @ c``.
    """

    def __init__(
        self,
        laplacian,
        flux_vector,
        surface_vector,
        volume_weights=None,
        radius: float | None = None,
    ) -> None:
        self.laplacian = np.asarray(laplacian, dtype=float)
        self.flux_vector = np.asarray(flux_vector, dtype=float)
        self.surface_vector = np.asarray(surface_vector, dtype=float)
        if volume_weights is None:
            n = len(self.flux_vector)
            volume_weights = np.full(n, 1.0 / n)
        self.volume_weights = np.asarray(volume_weights, dtype=float)
        self.radius = radius

    @classmethod
    def spherical(cls, n_nodes: int, radius: float) -> "DiffusionModel":
        """Finite volume discretization with ``n_nodes`` shells of equal thickness.

        Node 0 is the centre shell, node ``n_nodes - 1`` the outer shell whose
        value is taken as the surface concentration.
        """
        if n_nodes < 2:
            raise ValueError("at least two nodes are required")
        dr = radius / n_nodes
        edges = np.arange(n_nodes + 1) * dr
        volumes = 4 / 3 * math.pi * (edges[1:] ** 3 - edges[:-1] ** 3)
        areas = 4 * math.pi * edges**2

        laplacian = np.zeros((n_nodes, n_nodes))
        for i in range(n_nodes - 1):
            g = areas[i + 1] / dr  # conductance of the face between shell i and i+1
            laplacian[i, i] -= g / volumes[i]
            laplacian[i, i + 1] += g / volumes[i]
            laplacian[i + 1, i + 1] -= g / volumes[i + 1]
            laplacian[i + 1, i] += g / volumes[i + 1]

        flux_vector = np.zeros(n_nodes)
        flux_vector[-1] = -areas[-1] / volumes[-1]

        surface_vector = np.zeros(n_nodes)
        surface_vector[-1] = 1.0

        return cls(laplacian, flux_vector, surface_vector, volumes / volumes.sum(), radius)

    @property
    def n_nodes(self) -> int:
        return len(self.flux_vector)

    def check_consistency(self, n_nodes: int, radius: float | None = None) -> None:
        """Raise StructuralMismatchError unless every matrix is sized for ``n_nodes`` nodes.

        If both this model and the caller know the particle radius, the two have to agree.
        """
        expected = {
            "laplacian": (n_nodes, n_nodes),
            "flux_vector": (n_nodes,),
            "surface_vector": (n_nodes,),
            "volume_weights": (n_nodes,),
        }
        for name, shape in expected.items():
            actual = getattr(self, name).shape
            if actual != shape:
                raise StructuralMismatchError(f"{name} has shape {actual}, expected {shape} for {n_nodes} nodes")
        if radius is not None and self.radius is not None and not math.isclose(self.radius, radius):
            raise StructuralMismatchError(f"discretization generated for radius {self.radius} m, particles have {radius} m")

    def step(self, profile, flux: float, dt: float, diffusivity: float) -> np.ndarray:
        """Advance the profile by ``dt`` seconds under a constant surface flux (implicit Euler).

        Args:
            profile: Concentrations per node in mol/m3.
            flux: Molar flux out of the particle surface in mol/m2/s.
            dt: Timestep in s.
            diffusivity: Diffusion constant in m2/s at the current temperature.

        Returns:
            A new array with the updated concentrations.
        """
        profile = np.asarray(profile, dtype=float)
        lhs = np.eye(self.n_nodes) - dt * diffusivity * self.laplacian
        rhs = profile + dt * self.flux_vector * flux
        return np.linalg.solve(lhs, rhs)

    def surface_concentration(self, profile) -> float:
        return float(self.surface_vector @ np.asarray(profile, dtype=float))

    def average_concentration(self, profile) -> float:
        return float(self.volume_weights @ np.asarray(profile, dtype=float))

    def centre_concentration(self, profile) -> float:
        return float(np.asarray(profile, dtype=float)[0])
