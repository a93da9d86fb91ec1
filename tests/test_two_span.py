import math

import numpy as np
import pytest

from span_beam.domain.beam import Beam
from span_beam.domain.material import Material
from span_beam.engine.two_span import INTERVALS, TwoSpanUnequalAnalyzer, solve_reactions


def _beam(L1=4.0, L2=6.0, EI=210000000.0):
    return Beam(primary_span=L1, secondary_span=L2, material=Material.of("Acero", flexural_rigidity=EI))


def test_reactions_reference_case():
    r = solve_reactions(4.0, 6.0, 10.0)
    assert r.M1 == pytest.approx(-35.0)
    assert r.R1 == pytest.approx(11.25)
    assert r.R3 == pytest.approx(24.0 + 1.0 / 6.0)
    assert r.R2 == pytest.approx(64.5 + 1.0 / 12.0)


@pytest.mark.parametrize(
    "L1,L2,w",
    [(4.0, 6.0, 10.0), (1.0, 1.0, 1.0), (3.7, 12.25, 4.2), (10.0, 0.5, -7.5), (6.0, 6.0, 0.0)],
)
def test_reactions_equilibrium(L1, L2, w):
    r = solve_reactions(L1, L2, w)
    assert r.total_vertical == pytest.approx(w * (L1 + L2), abs=1e-9)


def test_equal_spans_match_textbook():
    # dos tramos iguales: R_ext = 3wL/8, R_int = 10wL/8, M = -wL²/8
    r = solve_reactions(5.0, 5.0, 2.0)
    assert r.M1 == pytest.approx(-2.0 * 25.0 / 8.0)
    assert r.R1 == pytest.approx(3.0 * 2.0 * 5.0 / 8.0)
    assert r.R3 == pytest.approx(r.R1)
    assert r.R2 == pytest.approx(10.0 * 2.0 * 5.0 / 8.0)


def test_zero_spans_do_not_raise():
    r = solve_reactions(0.0, 0.0, 10.0)
    assert math.isnan(r.M1)


def test_sample_counts_and_positions():
    a = TwoSpanUnequalAnalyzer()
    beam = _beam()
    for eq in (
        a.get_deflection_equation(beam, 10.0),
        a.get_bending_moment_equation(beam, 10.0),
        a.get_shear_force_equation(beam, 10.0),
    ):
        assert len(eq) == INTERVALS + 1 == 1001
        assert eq.x[0] == 0.0
        assert eq.x[-1] == 10.0
        assert np.all(np.diff(eq.x) > 0)


def test_moment_zero_at_ends():
    a = TwoSpanUnequalAnalyzer()
    for L1, L2, w in [(4.0, 6.0, 10.0), (3.3, 7.1, 2.5), (9.0, 1.0, 100.0)]:
        M = a.get_bending_moment_equation(_beam(L1, L2), w)
        assert M.y[0] == 0
        assert M.y[-1] == 0


def test_moment_at_interior_support_excludes_R2():
    M = TwoSpanUnequalAnalyzer().get_bending_moment_equation(_beam(), 10.0)
    assert M.x[400] == 4.0
    # -(R1·L1 - w·L1²/2) = -(45 - 80)
    assert M.y[400] == 35.0
    # continua a ambos lados del apoyo
    assert abs(M.y[401] - M.y[400]) < 1.0
    assert abs(M.y[399] - M.y[400]) < 1.0


def test_shear_jumps_at_interior_support():
    V = TwoSpanUnequalAnalyzer().get_shear_force_equation(_beam(), 10.0)
    # R1 = 11.25; np.round redondea al par => 11.2
    assert V.y[0] == 11.2
    assert V.y[399] == pytest.approx(-28.65, abs=0.06)
    # en x == L1: R2 - w·x
    assert V.y[400] == pytest.approx(24.6)
    # a la derecha: R2 - w·(x - L1)
    assert V.y[401] == pytest.approx(64.5)
    assert V.y[399] < 0 < V.y[400]


def test_interior_support_snapped_when_not_exact():
    # muestra sobre el apoyo interior con tramos no enteros
    beam = _beam(L1=0.3, L2=0.7)
    V = TwoSpanUnequalAnalyzer().get_shear_force_equation(beam, 10.0)
    assert V.x[300] == 0.3
    r = solve_reactions(0.3, 0.7, 10.0)
    assert V.y[300] == pytest.approx(round(r.R2 - 10.0 * 0.3, 1))


def test_deflection_zero_at_left_end_and_interior_support():
    y = TwoSpanUnequalAnalyzer().get_deflection_equation(_beam(), 10.0)
    assert y.y[0] == 0
    assert y.y[400] == 0
    assert np.all(np.isfinite(y.y))


def test_zero_rigidity_propagates_non_finite():
    y = TwoSpanUnequalAnalyzer().get_deflection_equation(_beam(EI=0.0), 10.0)
    assert len(y) == 1001
    assert not np.all(np.isfinite(y.y))
