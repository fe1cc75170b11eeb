"""Open circuit potentials of common electrode materials and a table lookup."""

import math

import numpy as np
import pandas as pd
from scipy.interpolate import make_interp_spline


def nmc_potential(x: float) -> float:
    """NMC positive electrode vs Li/Li+ over the lithium fraction x.

    Source: Chen et al., "Development of Experimental Techniques for
    Parameterization of Multi-scale Lithium-ion Battery Models."
    Journal of The Electrochemical Society (2020).
    """
    return (
        -0.8090 * x
        + 4.4875
        - 0.0428 * math.tanh(18.5138 * (x - 0.5542))
        - 17.7326 * math.tanh(15.7890 * (x - 0.3117))
        + 17.5842 * math.tanh(15.9308 * (x - 0.3120))
    )


def graphite_potential(x: float) -> float:
    """Graphite negative electrode vs Li/Li+ over the lithium fraction x (Chen 2020)."""
    return (
        1.9793 * math.exp(-39.3631 * x)
        + 0.2482
        - 0.0909 * math.tanh(29.8538 * (x - 0.1234))
        - 0.04478 * math.tanh(14.9159 * (x - 0.2769))
        - 0.0205 * math.tanh(30.4444 * (x - 0.6103))
    )


class OCVTable:
    """Piecewise linear open circuit potential from a lookup table.

    Lithium fractions outside the table give NaN, the table is never extrapolated.
    """

    def __init__(self, fractions, potentials) -> None:
        fractions = np.asarray(fractions, dtype=float)
        potentials = np.asarray(potentials, dtype=float)
        order = np.argsort(fractions)
        self._interp = make_interp_spline(fractions[order], potentials[order], k=1)
        self.min_fraction = float(fractions[order][0])
        self.max_fraction = float(fractions[order][-1])

    @classmethod
    def from_frame(cls, df: pd.DataFrame, fraction: str = "fraction", potential: str = "potential") -> "OCVTable":
        df = df[[fraction, potential]].dropna()
        return cls(df[fraction].to_numpy(), df[potential].to_numpy())

    def __call__(self, x: float) -> float:
        if not self.min_fraction <= x <= self.max_fraction:
            return math.nan
        return float(self._interp(x))
