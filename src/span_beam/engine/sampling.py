from __future__ import annotations

import numpy as np

DEFLECTION_OUTPUT_SCALE = 1e9   # unidad "de display" para la deflexión
DEFLECTION_UNIT_SCALE = 1000.0


def sample_positions(length: float, intervals: int) -> np.ndarray:
    """
    intervals+1 posiciones equiespaciadas en [0, length], ambos extremos incluidos.
    x_i = length*i/intervals (el último punto es exactamente length).
    """
    n = int(intervals)
    if n <= 0:
        raise ValueError(f"intervals debe ser > 0 (intervals={intervals}).")
    i = np.arange(n + 1, dtype=float)
    with np.errstate(invalid="ignore"):
        x = (i * float(length)) / float(n)
    x[-1] = float(length)
    return x


def snap_to(x: np.ndarray, x0: float, *, tol: float = 1e-9) -> np.ndarray:
    """Lleva a x0 exacto las muestras que caen sobre x0 (tolerancia relativa)."""
    scale = max(1.0, abs(float(x0)))
    mask = np.isclose(x, x0, rtol=0.0, atol=tol * scale)
    if np.any(mask):
        x = x.copy()
        x[mask] = float(x0)
    return x


def round1(values: np.ndarray) -> np.ndarray:
    return np.round(np.asarray(values, dtype=float), 1)


def deflection_output(raw: np.ndarray, deflection_scale: float) -> np.ndarray:
    """Deflexión -> unidad de salida: ×1000×scale, redondeo a 1 decimal y luego ×1e9."""
    with np.errstate(invalid="ignore", over="ignore"):
        y = np.asarray(raw, dtype=float) * float(deflection_scale) * DEFLECTION_UNIT_SCALE
        return round1(y) * DEFLECTION_OUTPUT_SCALE
