from simcell.cell.chemistry import CellChemistry
from simcell.cell.format import RoundCell18650
from simcell.cell.properties import (
    ElectricalCellProperties,
    ElectrochemicalProperties,
    ElectrodeProperties,
    ThermalCellProperties,
)
from simcell.degradation.cracking import CrackParameters
from simcell.degradation.degradation import DegradationParameters
from simcell.degradation.lam import LAMParameters
from simcell.degradation.plating import PlatingParameters
from simcell.degradation.sei import SEIParameters
from simcell.model.cell.ocv import graphite_potential, nmc_potential
from simcell.stress.stress import StressParameters


class LGChemNMC(CellChemistry):
    """High energy 18650 NMC/graphite cell manufactured by LG Chem."""

    def __init__(self, n_nodes: int = 20) -> None:
        super().__init__(
            electrical=ElectricalCellProperties(
                nominal_capacity=3.35,  # Ah
                max_voltage=4.2,  # V
                min_voltage=2.7,  # V
                current_step=1.0,  # A
                current_step_time=1e-2,  # s
            ),
            thermal=ThermalCellProperties(
                min_temperature=233.15,  # K
                max_temperature=333.15,  # K
                mass=0.046,  # kg per cell
                specific_heat=830,  # J/kgK
                convection_coefficient=30,  # W/m2K, cell on a shelf
                reference_temperature=298.15,  # K
            ),
            cell_format=RoundCell18650(),
            positive=ElectrodeProperties(
                max_concentration=51385,  # mol/m3
                particle_radius=6e-6,  # m
                thickness=75e-6,  # m
                volume_fraction=0.6,
                diffusivity=5e-14,  # m2/s
                diffusivity_activation=29000,  # J/mol
                rate_constant=3e-11,
                rate_activation=58000,  # J/mol
                n_nodes=n_nodes,
                initial_fraction=0.68,
                fraction_empty=0.9518,
                fraction_full=0.4082,
            ),
            negative=ElectrodeProperties(
                max_concentration=30555,  # mol/m3
                particle_radius=1.1e-5,  # m
                thickness=85e-6,  # m
                volume_fraction=0.55,
                diffusivity=5e-14,  # m2/s
                diffusivity_activation=35000,  # J/mol
                rate_constant=1.5e-11,
                rate_activation=20000,  # J/mol
                n_nodes=n_nodes,
                initial_fraction=0.49,
                fraction_empty=0.05,
                fraction_full=0.93,
            ),
            electrochemical=ElectrochemicalProperties(
                electrode_area=0.1,  # m2
                electrolyte_concentration=1000,  # mol/m3
                dc_resistance=0.025,  # ohm
                electrons=1,
                sei_thickness=5e-9,  # m
                crack_fraction=0.01,
                max_crack_factor=5.0,
            ),
            stress=StressParameters(
                omega_pos=7.28e-7,  # m3/mol
                young_pos=138.73e9,  # Pa
                poisson_pos=0.3,
                omega_neg=3.1e-6,  # m3/mol
                young_neg=15e9,  # Pa
                poisson_neg=0.3,
            ),
            degradation=DegradationParameters(
                sei=SEIParameters(
                    kinetic_k=4e-17,  # m/s
                    kinetic_k_T=60000,  # J/mol
                    diffusion_k=4e-17,  # m/s
                    diffusion_k_T=60000,  # J/mol
                    diffusion_D=5e-21,  # m2/s
                    diffusion_D_T=20000,  # J/mol
                ),
                plating=PlatingParameters(
                    k=1e-10,  # mol/m2/s
                    k_T=-2.0e5,  # J/mol
                ),
                cracking=CrackParameters(
                    laresgoiti_alpha=5e-20,
                    dai_alpha=1e-15,
                    barai_alpha=5e-11,
                    ekstrom_k=1e-5,
                    ekstrom_k_T=-127040,
                    diffusion_exponent=2.0,
                ),
                lam=LAMParameters(
                    dai_alpha_pos=5e-13,
                    dai_alpha_neg=5e-13,
                    delacourt_alpha_pos=5e-6,
                    delacourt_alpha_neg=5e-6,
                    kindermann_k=2e-11,
                    kindermann_k_T=50000,
                    kindermann_ocv=4.1,
                ),
            ),
        )

    def open_circuit_voltage_positive(self, fraction: float) -> float:
        return nmc_potential(fraction)

    def open_circuit_voltage_negative(self, fraction: float) -> float:
        return graphite_potential(fraction)
