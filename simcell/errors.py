"""Exceptions raised by the cell model.

Construction errors are fatal for the object being built. An
``InvalidStateError`` raised from ``Cell.step`` moves the cell into its
terminal INVALID status, while ``VoltageLimitError`` only rejects the step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simcell.cell.state import StateViolation


class CellError(Exception):
    """Base class for all errors of the cell model."""


class InvalidConstructionError(CellError):
    """A chemistry profile or an initial state does not satisfy the state invariants."""


class StructuralMismatchError(CellError):
    """A diffusion discretization does not match the configured number of nodes."""


class InvalidStateError(CellError):
    """A state failed validation.

    Attributes:
        violation: The first violated invariant (field, rule, value and bound).
    """

    def __init__(self, violation: StateViolation) -> None:
        super().__init__(str(violation))
        self.violation = violation


class CellInvalidError(CellError):
    """The cell is in its terminal INVALID status and cannot be stepped."""


class VoltageLimitError(CellError):
    """The terminal voltage left the allowed window; the step was not applied.

    Attributes:
        voltage: Terminal voltage the step would have produced in V.
        limit: The violated voltage limit in V.
    """

    def __init__(self, voltage: float, limit: float) -> None:
        side = "below minimum" if voltage < limit else "above maximum"
        super().__init__(f"terminal voltage {voltage:.4f} V is {side} voltage {limit:.4f} V")
        self.voltage = voltage
        self.limit = limit
