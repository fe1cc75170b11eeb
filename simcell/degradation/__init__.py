from simcell.degradation.context import DegradationContext
from simcell.degradation.cracking import CrackGrowth, CrackParameters
from simcell.degradation.degradation import DegradationModel, DegradationParameters, DegradationRates
from simcell.degradation.identifiers import CrackModel, DegradationIds, LAMModel, PlatingModel, SEIModel
from simcell.degradation.lam import ActiveMaterialLoss, LAMParameters
from simcell.degradation.plating import LithiumPlating, PlatingParameters
from simcell.degradation.sei import SEIGrowth, SEIParameters

__all__ = [
    "ActiveMaterialLoss",
    "CrackGrowth",
    "CrackModel",
    "CrackParameters",
    "DegradationContext",
    "DegradationIds",
    "DegradationModel",
    "DegradationParameters",
    "DegradationRates",
    "LAMModel",
    "LAMParameters",
    "LithiumPlating",
    "PlatingModel",
    "PlatingParameters",
    "SEIGrowth",
    "SEIModel",
    "SEIParameters",
]
