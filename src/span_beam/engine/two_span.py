from __future__ import annotations

import numpy as np

from span_beam.domain.beam import Beam
from span_beam.domain.results import Equation, SupportReactions
from span_beam.engine.sampling import deflection_output, round1, sample_positions, snap_to

INTERVALS = 1000


def solve_reactions(L1: float, L2: float, w: float) -> SupportReactions:
    """
    Viga continua de dos tramos con carga uniforme w en todo el largo.

    Hiperestática de grado 1: se cierra el sistema con el momento sobre el
    apoyo interior (ecuación de los tres momentos con extremos articulados):
      M1 = -(w·L2³ + w·L1³) / (8·(L1+L2))
    Luego, por equilibrio de cada tramo:
      R1 = M1/L1 + w·L1/2
      R3 = M1/L2 + w·L2/2
      R2 = w·(L1+L2) - R1 - R3
    """
    L1 = float(L1)
    L2 = float(L2)
    w = float(w)

    # np.divide: tramos nulos => inf/nan en lugar de ZeroDivisionError
    with np.errstate(divide="ignore", invalid="ignore"):
        M1 = np.divide(-(w * L2**3 + w * L1**3), 8.0 * (L1 + L2))
        R1 = np.divide(M1, L1) + w * L1 / 2.0
        R3 = np.divide(M1, L2) + w * L2 / 2.0
        R2 = w * L1 + w * L2 - R1 - R3

    return SupportReactions(M1=float(M1), R1=float(R1), R2=float(R2), R3=float(R3))


class TwoSpanUnequalAnalyzer:
    """
    Viga continua sobre tres apoyos, tramos L1 (primary_span) y L2 (secondary_span).

    Las tres curvas se evalúan en x ∈ [0, L1+L2], partidas en el apoyo interior x = L1.
    Desempate en x == L1:
      - momento: fórmula izquierda (sin R2) => curva continua
      - corte: R2 - w·x => salto vertical entre las muestras L1⁻ y L1
    Las reacciones se recalculan en cada llamada.
    """

    def _positions(self, beam: Beam) -> np.ndarray:
        x = sample_positions(beam.total_length, INTERVALS)
        return snap_to(x, float(beam.primary_span))

    def reactions(self, beam: Beam, load: float) -> SupportReactions:
        return solve_reactions(beam.primary_span, beam.secondary_span, load)

    def get_deflection_equation(self, beam: Beam, load: float) -> Equation:
        L1 = float(beam.primary_span)
        L2 = float(beam.secondary_span)
        w = float(load)
        EI = float(beam.material.flexural_rigidity)
        r = self.reactions(beam, w)
        R1, R2 = r.R1, r.R2

        x = self._positions(beam)
        s = x - L1

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            left = (x / (24.0 * EI)) * (4.0 * R1 * x**2 - w * x**3 + w * L1**3 - 4.0 * R1 * L1**2)
            right = (
                (R1 * x / 6.0) * (x**2 - L1**2)
                + (R2 * s / 6.0) * (s**2 - 3.0 * L1 * s + 3.0 * L1**2)
                - R2 * L1**3 / 6.0
                - (w * s / 24.0) * (s**3 - L2**3)
            ) / EI

        raw = np.where(x <= L1, left, right)
        return Equation(x=x, y=deflection_output(raw, beam.material.deflection_scale))

    def get_bending_moment_equation(self, beam: Beam, load: float) -> Equation:
        L1 = float(beam.primary_span)
        T = beam.total_length
        w = float(load)
        r = self.reactions(beam, w)
        R1, R2 = r.R1, r.R2

        x = self._positions(beam)

        with np.errstate(invalid="ignore", over="ignore"):
            left = -(R1 * x - 0.5 * w * x**2)
            at_support = -(R1 * L1 - 0.5 * w * L1**2)
            right = -(R1 * x + R2 * (x - L1) - 0.5 * w * x**2)

        M = np.select(
            [(x == 0.0) | (x == T), x < L1, x == L1],
            [0.0, left, at_support],
            default=right,
        )
        return Equation(x=x, y=round1(M))

    def get_shear_force_equation(self, beam: Beam, load: float) -> Equation:
        L1 = float(beam.primary_span)
        w = float(load)
        r = self.reactions(beam, w)
        R1, R2 = r.R1, r.R2

        x = self._positions(beam)

        with np.errstate(invalid="ignore", over="ignore"):
            left = R1 - w * x
            at_support = R2 - w * x
            right = R2 - w * (x - L1)

        V = np.select([x < L1, x == L1], [left, at_support], default=right)
        return Equation(x=x, y=round1(V))
