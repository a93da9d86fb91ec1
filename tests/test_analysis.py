import numpy as np
import pytest

from span_beam.domain.beam import Beam
from span_beam.domain.conditions import Condition, Quantity
from span_beam.domain.errors import InvalidConditionError
from span_beam.domain.material import Material
from span_beam.engine.analysis import BeamAnalysis
from span_beam.engine.simply_supported import SimplySupportedAnalyzer


MAT = Material.of("Acero", flexural_rigidity=210000000.0, deflection_scale=1.0)


class SpyAnalyzer:
    def __init__(self):
        self.calls = []

    def get_deflection_equation(self, beam, load):
        self.calls.append("deflection")
        return SimplySupportedAnalyzer().get_deflection_equation(beam, load)

    def get_bending_moment_equation(self, beam, load):
        self.calls.append("moment")
        return SimplySupportedAnalyzer().get_bending_moment_equation(beam, load)

    def get_shear_force_equation(self, beam, load):
        self.calls.append("shear")
        return SimplySupportedAnalyzer().get_shear_force_equation(beam, load)


def test_result_wraps_inputs():
    beam = Beam.single_span(8.0, MAT)
    res = BeamAnalysis().get_shear_force(beam, 10.0, "simply-supported")
    assert res.beam is beam
    assert res.load == 10.0
    assert res.condition is Condition.SIMPLY_SUPPORTED
    assert res.quantity is Quantity.SHEAR_FORCE
    assert res.equation.y[0] == 40.0


def test_each_operation_dispatches_to_matching_equation():
    beam = Beam(primary_span=4.0, secondary_span=6.0, material=MAT)
    a = BeamAnalysis()
    assert len(a.get_deflection(beam, 10.0, "two-span-unequal").equation) == 1001
    assert len(a.get_bending_moment(beam, 10.0, Condition.TWO_SPAN_UNEQUAL).equation) == 1001
    assert len(a.get_shear_force(beam, 10.0, "two-span-unequal").equation) == 1001
    assert len(a.get_deflection(beam, 10.0, "simply-supported").equation) == 9


def test_condition_string_is_normalized():
    beam = Beam.single_span(8.0, MAT)
    res = BeamAnalysis().get_bending_moment(beam, 10.0, "  Simply-Supported ")
    assert res.condition is Condition.SIMPLY_SUPPORTED


@pytest.mark.parametrize("op", ["get_deflection", "get_bending_moment", "get_shear_force", "analyze"])
def test_invalid_condition_raises(op):
    beam = Beam(primary_span=4.0, secondary_span=6.0, material=MAT)
    with pytest.raises(InvalidConditionError) as exc:
        getattr(BeamAnalysis(), op)(beam, 10.0, "three-span")
    assert exc.value.condition == "three-span"


def test_invalid_condition_is_a_value_error():
    with pytest.raises(ValueError):
        Condition.parse(None)


def test_unregistered_condition_performs_no_computation():
    spy = SpyAnalyzer()
    a = BeamAnalysis({Condition.SIMPLY_SUPPORTED: spy})
    beam = Beam(primary_span=4.0, secondary_span=6.0, material=MAT)

    with pytest.raises(InvalidConditionError):
        a.get_bending_moment(beam, 10.0, "two-span-unequal")
    with pytest.raises(InvalidConditionError):
        a.analyze(beam, 10.0, "two-span-unequal")
    assert spy.calls == []

    a.get_bending_moment(beam, 10.0, "simply-supported")
    assert spy.calls == ["moment"]


def test_registry_is_read_only():
    a = BeamAnalysis()
    assert set(a.conditions) == {Condition.SIMPLY_SUPPORTED, Condition.TWO_SPAN_UNEQUAL}
    with pytest.raises(TypeError):
        a._analyzers[Condition.SIMPLY_SUPPORTED] = None


def test_analyze_returns_three_curves():
    beam = Beam(primary_span=4.0, secondary_span=6.0, material=MAT)
    out = BeamAnalysis().analyze(beam, 10.0, "two-span-unequal")
    assert list(out) == [Quantity.DEFLECTION, Quantity.BENDING_MOMENT, Quantity.SHEAR_FORCE]
    M = out[Quantity.BENDING_MOMENT].equation
    assert M.y[0] == 0 and M.y[-1] == 0


def test_calls_are_independent():
    beam = Beam(primary_span=4.0, secondary_span=6.0, material=MAT)
    a = BeamAnalysis()
    r1 = a.get_shear_force(beam, 10.0, "two-span-unequal")
    r2 = a.get_shear_force(beam, 20.0, "two-span-unequal")
    r3 = a.get_shear_force(beam, 10.0, "two-span-unequal")
    assert np.array_equal(r1.equation.y, r3.equation.y)
    assert r1.equation.y is not r3.equation.y
    assert r2.equation.y[0] == pytest.approx(2.0 * 11.25, abs=0.15)
