import math

# Faraday constant [C/mol]
F = 96485.3329
# Gas constant [J/(K*mol)]
R = 8.3144598
# 0 degC in K
KELVIN = 273.15


def arrhenius(k_ref: float, activation_energy: float, T: float, T_ref: float) -> float:
    """Scale a rate constant given at T_ref to temperature T."""
    return k_ref * math.exp(activation_energy / R * (1.0 / T_ref - 1.0 / T))
