from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from span_beam.domain.beam import Beam
from span_beam.domain.conditions import Condition, Quantity


def _frozen_array(values) -> np.ndarray:
    a = np.array(values, dtype=float, copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class Equation:
    """
    Curva muestreada: x ascendente desde 0 hasta la longitud total,
    y = respuesta (deflexión, momento o corte) en cada x.
    Ambos arreglos son de solo lectura.
    """
    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        x = _frozen_array(self.x)
        y = _frozen_array(self.y)
        if x.shape != y.shape or x.ndim != 1:
            raise ValueError(f"x e y deben ser 1D y del mismo largo ({x.shape} vs {y.shape}).")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __len__(self) -> int:
        return int(self.x.size)

    def points(self) -> Iterator[Tuple[float, float]]:
        for xi, yi in zip(self.x.tolist(), self.y.tolist()):
            yield xi, yi

    def at(self, x: float) -> float:
        """Valor y de la muestra más cercana a x (primera en caso de empate)."""
        i = int(np.argmin(np.abs(self.x - float(x))))
        return float(self.y[i])

    def extrema(self) -> Tuple[float, float, float, float]:
        """(x_min, y_min, x_max, y_max) ignorando valores no finitos."""
        finite = np.isfinite(self.y)
        if not np.any(finite):
            return float("nan"), float("nan"), float("nan"), float("nan")
        idx = np.nonzero(finite)[0]
        i_min = int(idx[np.argmin(self.y[finite])])
        i_max = int(idx[np.argmax(self.y[finite])])
        return float(self.x[i_min]), float(self.y[i_min]), float(self.x[i_max]), float(self.y[i_max])


@dataclass(frozen=True)
class AnalysisResult:
    beam: Beam
    load: float
    equation: Equation

    condition: Condition
    quantity: Quantity


@dataclass(frozen=True)
class SupportReactions:
    """
    Reacciones de la viga continua de dos tramos:
      - M1: momento sobre el apoyo interior
      - R1, R3: apoyos extremos
      - R2: apoyo interior
    """
    M1: float
    R1: float
    R2: float
    R3: float

    @property
    def total_vertical(self) -> float:
        return self.R1 + self.R2 + self.R3
