from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np
from matplotlib.figure import Figure

from span_beam.domain.conditions import Condition, Quantity
from span_beam.domain.results import AnalysisResult, Equation
from span_beam.view.style import CurveStyle

TITLES: Dict[Quantity, str] = {
    Quantity.DEFLECTION: "Deflexión y(x)",
    Quantity.BENDING_MOMENT: "Momento flector M(x)",
    Quantity.SHEAR_FORCE: "Esfuerzo de corte V(x)",
}

Y_LABELS: Dict[Quantity, str] = {
    Quantity.DEFLECTION: "y [×1e9]",
    Quantity.BENDING_MOMENT: "M",
    Quantity.SHEAR_FORCE: "V",
}


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 2) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


def _finite_max_abs(y: np.ndarray) -> float:
    f = np.asarray(y, dtype=float)
    f = f[np.isfinite(f)]
    return float(np.max(np.abs(f))) if f.size else 0.0


# -------------------------
# Extremos locales
# -------------------------
def find_local_extrema(y: np.ndarray, *, tol_slope: float) -> List[Tuple[str, int]]:
    """
    Detecta extremos locales por cambios de signo en dy, IGNORANDO mesetas (dy≈0).
    Devuelve lista de ("max"/"min", idx_en_y).
    """
    y = np.asarray(y, dtype=float)
    if len(y) < 5 or not np.all(np.isfinite(y)):
        return []

    dy = np.diff(y)
    s = np.zeros_like(dy, dtype=int)
    s[dy > +tol_slope] = +1
    s[dy < -tol_slope] = -1

    nz = np.nonzero(s)[0]
    if nz.size < 2:
        return []

    s_nz = s[nz]
    out: List[Tuple[str, int]] = []

    # + a - => máximo; - a + => mínimo
    for k in range(1, len(s_nz)):
        if s_nz[k - 1] > 0 and s_nz[k] < 0:
            out.append(("max", int(nz[k - 1] + 1)))
        elif s_nz[k - 1] < 0 and s_nz[k] > 0:
            out.append(("min", int(nz[k - 1] + 1)))

    return out


def _select_with_spacing(
    x: np.ndarray,
    y: np.ndarray,
    candidates: Iterable[Tuple[str, int]],
    *,
    y_abs_min: float,
    min_dx: float,
) -> List[Tuple[str, int]]:
    """Prioriza por |y| y descarta extremos chicos o demasiado cercanos en x."""
    cand = [(k, i) for (k, i) in candidates if abs(float(y[i])) >= y_abs_min]
    cand.sort(key=lambda ki: abs(float(y[ki[1]])), reverse=True)

    picked: List[Tuple[str, int]] = []
    picked_x: List[float] = []
    for kind, i in cand:
        xi = float(x[i])
        if all(abs(xi - xj) >= min_dx for xj in picked_x):
            picked.append((kind, i))
            picked_x.append(xi)

    picked.sort(key=lambda ki: float(x[ki[1]]))
    return picked


def curve_extrema(equation: Equation, style: Optional[CurveStyle] = None) -> List[Tuple[str, float, float]]:
    """
    Extremos relevantes de la curva: [(kind, x, y)], ordenados por x.
    Incluye el máximo y mínimo globales; no etiqueta valores ≈ 0.
    """
    st = style or CurveStyle()
    x = np.asarray(equation.x, dtype=float)
    y = np.asarray(equation.y, dtype=float)
    if x.size == 0 or not np.all(np.isfinite(y)):
        return []

    max_abs = max(_finite_max_abs(y), 1e-12)
    extrema = find_local_extrema(y, tol_slope=1e-6 * max_abs)
    extrema.extend([("max", int(np.argmax(y))), ("min", int(np.argmin(y)))])

    seen: Set[int] = set()
    uniq: List[Tuple[str, int]] = []
    for kind, i in extrema:
        if i in seen:
            continue
        seen.add(i)
        uniq.append((kind, i))

    x_span = max(float(x[-1] - x[0]), 1e-12)
    picked = _select_with_spacing(
        x, y, uniq,
        y_abs_min=max(st.extrema_min_abs_pct / 100.0 * max_abs, 1e-9),
        min_dx=st.extrema_min_dx_pct / 100.0 * x_span,
    )
    return [(kind, float(x[i]), float(y[i])) for kind, i in picked]


def _annotate_extrema(ax, equation: Equation, style: CurveStyle):
    picked = curve_extrema(equation, style)
    if not picked:
        return

    x_min, x_max = ax.get_xlim()
    y_min, y_max = ax.get_ylim()
    mx = 0.03 * (x_max - x_min)
    my = 0.03 * (y_max - y_min)

    for kind, xi, yi in picked:
        ax.scatter([xi], [yi], s=style.marker_size, zorder=6)
        if kind == "max":
            ty, va = yi + my, "bottom"
        else:
            ty, va = yi - my, "top"
        tx = _clamp(xi, x_min + mx, x_max - mx)
        ty = _clamp(ty, y_min + my, y_max - my)
        ax.text(tx, ty, _fmt_plain(yi, 2), ha="center", va=va, fontsize=style.font_size, zorder=7)


# -------------------------
# Render
# -------------------------
def render_curve(ax, result: AnalysisResult, style: Optional[CurveStyle] = None, y_zoom: float = 1.0):
    st = style or CurveStyle()
    eq = result.equation
    ax.clear()

    ax.plot(eq.x, eq.y, linewidth=st.curve_lw)
    ax.axhline(0.0, linewidth=st.baseline_lw)

    total = float(eq.x[-1]) if len(eq) else 1.0
    ax.set_xlim(0.0, total if np.isfinite(total) and total > 0 else 1.0)

    # apoyo interior
    if result.condition is Condition.TWO_SPAN_UNEQUAL:
        ax.axvline(float(result.beam.primary_span), linewidth=st.support_lw, linestyle="--")

    ymax = max(_finite_max_abs(eq.y), 1.0)
    ax.set_ylim(-ymax * y_zoom * st.y_pad, ymax * y_zoom * st.y_pad)

    _annotate_extrema(ax, eq, st)

    ax.set_ylabel(Y_LABELS[result.quantity])
    ax.set_xlabel("x")
    ax.set_title(TITLES[result.quantity])
    ax.grid(True, alpha=st.grid_alpha)


def render_all(results: Dict[Quantity, AnalysisResult], style: Optional[CurveStyle] = None) -> Figure:
    """Figura con un eje por curva (orden: deflexión, momento, corte)."""
    ordered = [results[q] for q in Quantity if q in results]
    fig = Figure(figsize=(8.0, 2.8 * max(1, len(ordered))), layout="constrained")
    axes = fig.subplots(max(1, len(ordered)), 1, squeeze=False)
    for ax, res in zip(axes[:, 0], ordered):
        render_curve(ax, res, style)
    return fig


def save_figure(fig: Figure, path: str, dpi: int = 120) -> str:
    fig.savefig(path, dpi=dpi)
    return path
