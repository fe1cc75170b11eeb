from dataclasses import dataclass
from enum import Enum


class SEIModel(Enum):
    NONE = 0
    KINETIC = 1  # reaction limited growth
    DIFFUSION_LIMITED = 2  # reaction in series with solvent diffusion through the layer


class PlatingModel(Enum):
    NONE = 0
    TAFEL = 1


class CrackModel(Enum):
    NONE = 0
    LARESGOITI = 1  # stress from the concentration swing since the last reversal
    DAI = 2  # diffusion induced stress
    BARAI = 3  # saturating growth with charge throughput
    EKSTROM = 4  # kinetic growth depending on the negative electrode potential


class LAMModel(Enum):
    NONE = 0
    DAI = 1  # diffusion induced stress
    DELACOURT = 2  # proportional to full equivalent cycles
    KINDERMANN = 3  # dissolution of the positive electrode at high potential


def _as_tuple(value, enum_type) -> tuple:
    models = (value,) if isinstance(value, enum_type) else tuple(value)
    for model in models:
        if not isinstance(model, enum_type):
            raise TypeError(f"expected {enum_type.__name__}, got {model!r}")
    return models


@dataclass(frozen=True)
class DegradationIds:
    """Selection of the degradation mechanisms of one cell.

    The models listed within a family are evaluated independently and their
    rates are summed. The default selection has no degradation at all.

    sei_porosity :
        SEI growth also decreases the active volume fraction of the negative electrode
    crack_diffusion :
        crack growth decreases the diffusion constant of the negative electrode
    """

    sei: tuple[SEIModel, ...] = (SEIModel.NONE,)
    cracking: tuple[CrackModel, ...] = (CrackModel.NONE,)
    lam: tuple[LAMModel, ...] = (LAMModel.NONE,)
    plating: PlatingModel = PlatingModel.NONE
    sei_porosity: bool = False
    crack_diffusion: bool = False

    def __post_init__(self):
        object.__setattr__(self, "sei", _as_tuple(self.sei, SEIModel))
        object.__setattr__(self, "cracking", _as_tuple(self.cracking, CrackModel))
        object.__setattr__(self, "lam", _as_tuple(self.lam, LAMModel))
        if not isinstance(self.plating, PlatingModel):
            raise TypeError(f"expected PlatingModel, got {self.plating!r}")
