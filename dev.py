from simcell.cell.cell import Cell
from simcell.constants import KELVIN
from simcell.degradation import CrackModel, DegradationIds, LAMModel, SEIModel
from simcell.errors import VoltageLimitError
from simcell.model.cell.kokam_nmc import KokamNMC

ids = DegradationIds(sei=SEIModel.KINETIC, cracking=CrackModel.DAI, lam=LAMModel.DELACOURT)
cell = Cell(KokamNMC(), degradation=ids)
cell.set_voltage(3.9)

print(cell.state.to_dict())

cell.set_applied_current(2.7)
try:
    while True:
        result = cell.step(10.0, KELVIN + 25)
except VoltageLimitError as e:
    print(f"{cell.time:.0f} s: {e}")

print(result)

cell.set_applied_current(-2.7)
for _ in range(180):
    result = cell.step(10.0, KELVIN + 25)

print(result)
