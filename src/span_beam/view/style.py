from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class CurveStyle:
    curve_lw: float = 1.4
    baseline_lw: float = 1.0
    support_lw: float = 0.8

    grid_alpha: float = 0.25
    y_pad: float = 1.15

    marker_size: float = 18.0
    font_size: int = 8

    # Separación mínima entre etiquetas de extremos (% del ancho)
    extrema_min_dx_pct: float = 3.0
    # Amplitud mínima para etiquetar (% del máximo |y|)
    extrema_min_abs_pct: float = 1.0
