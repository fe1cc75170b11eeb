from dataclasses import dataclass


@dataclass(frozen=True)
class ElectricalCellProperties:
    """
    nominal_capacity :
        nominal capacity of one cell in Ah
    min_voltage :
        minimum allowed voltage of one cell in V
    max_voltage :
        maximum allowed voltage of one cell in V
    current_step :
        current change in A the cell can follow within ``current_step_time``
    current_step_time :
        time in s needed for a current change of ``current_step``
    """

    nominal_capacity: float
    min_voltage: float
    max_voltage: float
    current_step: float = 1.0
    current_step_time: float = 1e-2

    @property
    def current_ramp_rate(self) -> float:
        "maximum current slew rate in A/s"
        return self.current_step / self.current_step_time


@dataclass(frozen=True)
class ThermalCellProperties:
    """
    min_temperature :
        minimum allowed temperature for the cell in K
    max_temperature :
        maximum allowed temperature for the cell in K
    mass :
        mass of one cell in kg
    specific_heat :
        specific heat of the cell in J/kgK
    convection_coefficient :
        convection coefficient in W/m2K
    reference_temperature :
        temperature in K at which rate constants and diffusion constants are given
    """

    min_temperature: float
    max_temperature: float
    mass: float
    specific_heat: float
    convection_coefficient: float
    reference_temperature: float = 298.15


@dataclass(frozen=True)
class ElectrodeProperties:
    """
    max_concentration :
        maximum lithium concentration in the active material in mol/m3
    particle_radius :
        radius of the spherical particles in m, the diffusion model has to be generated for it
    thickness :
        initial thickness of the electrode in m
    volume_fraction :
        initial volume fraction of active material in p.u.
    diffusivity :
        solid diffusion constant at reference temperature in m2/s
    diffusivity_activation :
        activation energy of the diffusion constant in J/mol
    rate_constant :
        rate constant of the main lithium reaction at reference temperature
    rate_activation :
        activation energy of the main lithium reaction in J/mol
    n_nodes :
        number of nodes of the spatial discretization
    initial_fraction :
        lithium fraction in p.u. the cell is seeded with
    fraction_empty, fraction_full :
        lithium fraction at 0 % and 100 % state of charge
    """

    max_concentration: float
    particle_radius: float
    thickness: float
    volume_fraction: float
    diffusivity: float
    diffusivity_activation: float
    rate_constant: float
    rate_activation: float
    n_nodes: int
    initial_fraction: float
    fraction_empty: float
    fraction_full: float


@dataclass(frozen=True)
class ElectrochemicalProperties:
    """
    electrode_area :
        geometric surface of the electrodes in m2
    electrolyte_concentration :
        lithium concentration in the electrolyte in mol/m3
    dc_resistance :
        DC resistance of the fresh cell in ohm
    electrons :
        number of electrons transferred in the main reaction
    sei_thickness :
        initial SEI thickness in m, a fresh cell after formation has a thin layer
    crack_fraction :
        initial crack surface as a fraction of the real negative electrode surface
    max_crack_factor :
        maximum crack surface as a multiple of the initial real negative electrode surface
    """

    electrode_area: float
    electrolyte_concentration: float
    dc_resistance: float
    electrons: int = 1
    sei_thickness: float = 1e-9
    crack_fraction: float = 0.01
    max_crack_factor: float = 5.0
