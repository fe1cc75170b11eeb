"""Outer geometry of a cell, used for its convective heat exchange. Dimensions in mm."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


class CellFormat(ABC):
    @property
    @abstractmethod
    def volume(self) -> float:
        "in m³"

    @property
    @abstractmethod
    def area(self) -> float:
        "in m², surface exposed to the ambient"


@dataclass(frozen=True)
class RoundCell(CellFormat):
    diameter: float  # in mm
    length: float  # in mm

    @property
    def volume(self) -> float:
        return math.pi * (self.diameter / 2) ** 2 * self.length * 1e-9

    @property
    def area(self) -> float:
        caps = 2 * math.pi * (self.diameter / 2) ** 2
        return (math.pi * self.diameter * self.length + caps) * 1e-6


@dataclass(frozen=True)
class RoundCell18650(RoundCell):
    diameter: float = 18
    length: float = 65


@dataclass(frozen=True)
class PouchCell(CellFormat):
    height: float  # in mm
    width: float  # in mm
    thickness: float  # in mm

    @property
    def volume(self) -> float:
        return self.height * self.width * self.thickness * 1e-9

    @property
    def area(self) -> float:
        h, w, t = self.height, self.width, self.thickness
        return 2 * (h * w + h * t + w * t) * 1e-6
