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


class KokamNMC(CellChemistry):
    """
    High power 18650 NMC/graphite cell manufactured by Kokam.

    The degradation parameters are chosen such that each mechanism clearly
    affects the cell life, they are not fitted to ageing data.
    """

    def __init__(self, n_nodes: int = 20) -> None:
        super().__init__(
            electrical=ElectricalCellProperties(
                nominal_capacity=2.7,  # Ah
                max_voltage=4.2,  # V
                min_voltage=2.7,  # V
                current_step=1.0,  # A
                current_step_time=1e-2,  # s
            ),
            thermal=ThermalCellProperties(
                min_temperature=233.15,  # K
                max_temperature=333.15,  # K
                mass=0.0269,  # kg per cell
                specific_heat=750,  # J/kgK
                convection_coefficient=90,  # W/m2K, forced cooling
                reference_temperature=298.15,  # K
            ),
            cell_format=RoundCell18650(),
            positive=ElectrodeProperties(
                max_concentration=51385,  # mol/m3
                particle_radius=8.5e-6,  # m
                thickness=70e-6,  # m
                volume_fraction=0.5,
                diffusivity=8e-14,  # m2/s
                diffusivity_activation=29000,  # J/mol
                rate_constant=5e-11,
                rate_activation=58000,  # J/mol
                n_nodes=n_nodes,
                initial_fraction=0.689332,  # 50 % soc
                fraction_empty=0.958,
                fraction_full=0.421,
            ),
            negative=ElectrodeProperties(
                max_concentration=30555,  # mol/m3
                particle_radius=1.25e-5,  # m
                thickness=73.5e-6,  # m
                volume_fraction=0.5,
                diffusivity=7e-14,  # m2/s
                diffusivity_activation=35000,  # J/mol
                rate_constant=1.764e-11,
                rate_activation=20000,  # J/mol
                n_nodes=n_nodes,
                initial_fraction=0.479283,  # 50 % soc
                fraction_empty=0.05,
                fraction_full=0.91,
            ),
            electrochemical=ElectrochemicalProperties(
                electrode_area=0.0982,  # m2
                electrolyte_concentration=1000,  # mol/m3
                dc_resistance=0.0102,  # ohm
                electrons=1,
                sei_thickness=1e-9,  # m
                crack_fraction=0.01,
                max_crack_factor=5.0,
            ),
            stress=StressParameters(
                omega_pos=7.28e-7,  # m3/mol
                young_pos=138.73e9,  # Pa
                poisson_pos=0.3,
                omega_neg=3.1e-6,  # m3/mol
                young_neg=10e9,  # Pa
                poisson_neg=0.3,
            ),
            degradation=DegradationParameters(
                sei=SEIParameters(
                    kinetic_k=1e-16,  # m/s
                    kinetic_k_T=65000,  # J/mol
                    diffusion_k=1e-16,  # m/s
                    diffusion_k_T=65000,  # J/mol
                    diffusion_D=1e-20,  # m2/s
                    diffusion_D_T=20000,  # J/mol
                ),
                plating=PlatingParameters(
                    k=4.5e-10,  # mol/m2/s
                    k_T=-2.014008e5,  # J/mol
                ),
                cracking=CrackParameters(
                    laresgoiti_alpha=1e-19,
                    dai_alpha=3e-15,
                    barai_alpha=1e-10,
                    ekstrom_k=2e-5,
                    ekstrom_k_T=-127040,
                    diffusion_exponent=2.0,
                ),
                lam=LAMParameters(
                    dai_alpha_pos=1e-12,
                    dai_alpha_neg=1e-12,
                    delacourt_alpha_pos=1e-5,
                    delacourt_alpha_neg=1e-5,
                    kindermann_k=5e-11,
                    kindermann_k_T=50000,
                    kindermann_ocv=4.1,
                ),
            ),
        )

    def open_circuit_voltage_positive(self, fraction: float) -> float:
        return nmc_potential(fraction)

    def open_circuit_voltage_negative(self, fraction: float) -> float:
        return graphite_potential(fraction)

    def entropic_coefficient(self, fraction_pos: float, fraction_neg: float) -> float:
        return -1e-4  # V/K
