import math
from dataclasses import dataclass, fields, replace
from enum import Enum

import numpy as np

from simcell.errors import InvalidConstructionError, InvalidStateError


class ViolationRule(Enum):
    NOT_FINITE = "must be finite"
    NEGATIVE = "must not be negative"
    NOT_POSITIVE = "must be strictly positive"
    ABOVE_MAXIMUM = "must not exceed its maximum"
    BELOW_MINIMUM = "must not fall below its minimum"
    DECREASED = "must not decrease"


@dataclass(frozen=True, slots=True)
class StateViolation:
    """First invariant a state breaks."""

    field: str
    rule: ViolationRule
    value: float
    bound: float | None = None

    def __str__(self) -> str:
        msg = f"{self.field} = {self.value!r} {self.rule.value}"
        if self.bound is not None:
            msg += f" ({self.bound!r})"
        return msg


@dataclass(frozen=True, slots=True)
class StateLimits:
    """Chemistry dependent bounds a state is validated against."""

    c_max_pos: float  # mol/m3
    c_max_neg: float  # mol/m3
    min_temperature: float  # K
    max_temperature: float  # K
    max_crack_surface: float  # m2


@dataclass(frozen=True, slots=True, eq=False)
class CellState:
    """Physical and ageing state of one cell.

    Instances are immutable: every change goes through :meth:`evolve`, which
    returns a new, validated state. The concentration profiles are stored as
    read-only arrays.
    """

    c_pos: np.ndarray  # mol/m3, per node of the positive particle
    c_neg: np.ndarray  # mol/m3, per node of the negative particle
    T: float  # K
    sei_thickness: float  # m
    lost_lithium: float  # mol
    thickness_pos: float  # m
    thickness_neg: float  # m
    volume_fraction_pos: float  # p.u.
    volume_fraction_neg: float  # p.u.
    surface_area_pos: float  # 1/m, specific surface area
    surface_area_neg: float  # 1/m
    crack_surface: float  # m2
    diffusivity_pos: float  # m2/s at reference temperature
    diffusivity_neg: float  # m2/s at reference temperature
    resistance: float  # ohm m2, specific resistance of the electrode stack
    plating_thickness: float  # m

    def __post_init__(self):
        for name in ("c_pos", "c_neg"):
            profile = np.array(getattr(self, name), dtype=float)
            profile.flags.writeable = False
            object.__setattr__(self, name, profile)

    @classmethod
    def initialize(
        cls,
        c_pos,
        c_neg,
        T: float,
        sei_thickness: float,
        lost_lithium: float,
        thickness_pos: float,
        thickness_neg: float,
        volume_fraction_pos: float,
        volume_fraction_neg: float,
        crack_surface: float,
        diffusivity_pos: float,
        diffusivity_neg: float,
        resistance: float,
        plating_thickness: float = 0.0,
        surface_area_pos: float | None = None,
        surface_area_neg: float | None = None,
        particle_radius_pos: float | None = None,
        particle_radius_neg: float | None = None,
    ) -> "CellState":
        """Build a state from explicit physical values.

        Specific surface areas that are not given are derived from the volume
        fraction and the particle radius (a = 3 e / R).

        Raises:
            InvalidConstructionError: if the SEI thickness is not strictly
                positive or any value is negative or not finite.
        """
        surface_area_pos = cls._derive_surface_area("surface_area_pos", surface_area_pos, volume_fraction_pos, particle_radius_pos)
        surface_area_neg = cls._derive_surface_area("surface_area_neg", surface_area_neg, volume_fraction_neg, particle_radius_neg)

        state = cls(
            c_pos=c_pos,
            c_neg=c_neg,
            T=T,
            sei_thickness=sei_thickness,
            lost_lithium=lost_lithium,
            thickness_pos=thickness_pos,
            thickness_neg=thickness_neg,
            volume_fraction_pos=volume_fraction_pos,
            volume_fraction_neg=volume_fraction_neg,
            surface_area_pos=surface_area_pos,
            surface_area_neg=surface_area_neg,
            crack_surface=crack_surface,
            diffusivity_pos=diffusivity_pos,
            diffusivity_neg=diffusivity_neg,
            resistance=resistance,
            plating_thickness=plating_thickness,
        )
        violation = state.find_violation()
        if violation is not None:
            raise InvalidConstructionError(f"illegal initial state: {violation}")
        return state

    @staticmethod
    def _derive_surface_area(name, area, volume_fraction, radius) -> float:
        if area is not None:
            return area
        if radius is None or radius <= 0:
            raise InvalidConstructionError(f"{name} not given and no positive particle radius to derive it from")
        return 3 * volume_fraction / radius

    def find_violation(self, limits: StateLimits | None = None, previous: "CellState | None" = None) -> StateViolation | None:
        """Check the invariants of the state.

        Args:
            limits: Chemistry bounds. Without limits only the bound-free rules
                (finiteness, signs) are checked.
            previous: State this one was derived from, used to check that the
                lost lithium does not decrease.

        Returns:
            The first violated invariant, or None if the state is valid.
        """
        c_max = {"c_pos": None, "c_neg": None}
        if limits is not None:
            c_max = {"c_pos": limits.c_max_pos, "c_neg": limits.c_max_neg}

        for name, bound in c_max.items():
            profile = getattr(self, name)
            if not np.all(np.isfinite(profile)):
                bad = profile[~np.isfinite(profile)][0]
                return StateViolation(name, ViolationRule.NOT_FINITE, float(bad))
            if profile.min() < 0:
                return StateViolation(name, ViolationRule.NEGATIVE, float(profile.min()), 0.0)
            if bound is not None and profile.max() > bound:
                return StateViolation(name, ViolationRule.ABOVE_MAXIMUM, float(profile.max()), bound)

        for f in fields(self):
            if f.name in c_max:
                continue
            value = getattr(self, f.name)
            if not math.isfinite(value):
                return StateViolation(f.name, ViolationRule.NOT_FINITE, value)

        strictly_positive = (
            "T",
            "sei_thickness",
            "thickness_pos",
            "thickness_neg",
            "volume_fraction_pos",
            "volume_fraction_neg",
            "diffusivity_pos",
            "diffusivity_neg",
            "resistance",
        )
        for name in strictly_positive:
            value = getattr(self, name)
            if value <= 0:
                return StateViolation(name, ViolationRule.NOT_POSITIVE, value, 0.0)

        non_negative = ("lost_lithium", "surface_area_pos", "surface_area_neg", "crack_surface", "plating_thickness")
        for name in non_negative:
            value = getattr(self, name)
            if value < 0:
                return StateViolation(name, ViolationRule.NEGATIVE, value, 0.0)

        for name in ("volume_fraction_pos", "volume_fraction_neg"):
            value = getattr(self, name)
            if value > 1:
                return StateViolation(name, ViolationRule.ABOVE_MAXIMUM, value, 1.0)

        if limits is not None:
            if self.T < limits.min_temperature:
                return StateViolation("T", ViolationRule.BELOW_MINIMUM, self.T, limits.min_temperature)
            if self.T > limits.max_temperature:
                return StateViolation("T", ViolationRule.ABOVE_MAXIMUM, self.T, limits.max_temperature)
            if self.crack_surface > limits.max_crack_surface:
                return StateViolation("crack_surface", ViolationRule.ABOVE_MAXIMUM, self.crack_surface, limits.max_crack_surface)

        if previous is not None and self.lost_lithium < previous.lost_lithium:
            return StateViolation("lost_lithium", ViolationRule.DECREASED, self.lost_lithium, previous.lost_lithium)

        return None

    def validate(self, limits: StateLimits, previous: "CellState | None" = None) -> "CellState":
        """Return the state itself if it is valid, raise InvalidStateError otherwise."""
        violation = self.find_violation(limits, previous)
        if violation is not None:
            raise InvalidStateError(violation)
        return self

    def evolve(self, limits: StateLimits, **changes) -> "CellState":
        """Return a validated copy of the state with some fields replaced."""
        return replace(self, **changes).validate(limits, previous=self)

    def with_lithium_fraction(self, fraction_pos: float, fraction_neg: float, limits: StateLimits) -> "CellState":
        """Return a copy with uniform profiles at the given fraction of the maximum concentration."""
        return self.evolve(
            limits,
            c_pos=np.full(self.c_pos.shape, fraction_pos * limits.c_max_pos),
            c_neg=np.full(self.c_neg.shape, fraction_neg * limits.c_max_neg),
        )

    def to_dict(self) -> dict:
        """Structured dump of all fields, profiles as lists."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["c_pos"] = self.c_pos.tolist()
        data["c_neg"] = self.c_neg.tolist()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CellState":
        """Rebuild a state from :meth:`to_dict` output."""
        return cls.initialize(**data)
