from __future__ import annotations

import numpy as np

from span_beam.domain.beam import Beam
from span_beam.domain.results import Equation
from span_beam.engine.sampling import deflection_output, round1, sample_positions

DEFLECTION_INTERVALS = 8
MOMENT_INTERVALS = 10
SHEAR_INTERVALS = 10


class SimplySupportedAnalyzer:
    """
    Viga simplemente apoyada, un tramo L, carga uniforme w.

    Convención: momento negativo en el tramo (M = -(w·x/2)(L-x)),
    deflexión negativa hacia abajo. Las x registradas se redondean a
    1 decimal; y se evalúa en la x sin redondear.
    """

    def get_deflection_equation(self, beam: Beam, load: float) -> Equation:
        L = float(beam.primary_span)
        w = float(load)
        EI = float(beam.material.flexural_rigidity)

        x = sample_positions(L, DEFLECTION_INTERVALS)
        with np.errstate(divide="ignore", invalid="ignore"):
            raw = -(w * x / (24.0 * EI)) * (L**3 - 2.0 * L * x**2 + x**3)
        y = deflection_output(raw, beam.material.deflection_scale)
        return Equation(x=round1(x), y=y)

    def get_bending_moment_equation(self, beam: Beam, load: float) -> Equation:
        L = float(beam.primary_span)
        w = float(load)

        x = sample_positions(L, MOMENT_INTERVALS)
        M = -(w * x / 2.0) * (L - x)
        return Equation(x=round1(x), y=round1(M))

    def get_shear_force_equation(self, beam: Beam, load: float) -> Equation:
        L = float(beam.primary_span)
        w = float(load)

        x = sample_positions(L, SHEAR_INTERVALS)
        V = w * (L / 2.0 - x)
        return Equation(x=round1(x), y=round1(V))
