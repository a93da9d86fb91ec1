from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Protocol, Tuple, Union

from span_beam.domain.beam import Beam
from span_beam.domain.conditions import Condition, Quantity
from span_beam.domain.errors import InvalidConditionError
from span_beam.domain.results import AnalysisResult, Equation
from span_beam.engine.simply_supported import SimplySupportedAnalyzer
from span_beam.engine.two_span import TwoSpanUnequalAnalyzer

logger = logging.getLogger(__name__)

ConditionLike = Union[Condition, str]


class Analyzer(Protocol):
    def get_deflection_equation(self, beam: Beam, load: float) -> Equation: ...

    def get_bending_moment_equation(self, beam: Beam, load: float) -> Equation: ...

    def get_shear_force_equation(self, beam: Beam, load: float) -> Equation: ...


_EQUATION_METHOD: Dict[Quantity, str] = {
    Quantity.DEFLECTION: "get_deflection_equation",
    Quantity.BENDING_MOMENT: "get_bending_moment_equation",
    Quantity.SHEAR_FORCE: "get_shear_force_equation",
}


def default_analyzers() -> Dict[Condition, Analyzer]:
    return {
        Condition.SIMPLY_SUPPORTED: SimplySupportedAnalyzer(),
        Condition.TWO_SPAN_UNEQUAL: TwoSpanUnequalAnalyzer(),
    }


class BeamAnalysis:
    """
    Punto de entrada único: elige el analizador por condición de apoyo y
    devuelve {beam, load, equation}.

    La única validación es la condición (InvalidConditionError antes de
    calcular nada). No se valida geometría ni signo de la carga.
    """

    def __init__(self, analyzers: Optional[Mapping[Condition, Analyzer]] = None):
        table = default_analyzers() if analyzers is None else dict(analyzers)
        self._analyzers: Mapping[Condition, Analyzer] = MappingProxyType(table)

    @property
    def conditions(self) -> Tuple[Condition, ...]:
        return tuple(self._analyzers.keys())

    def analyzer_for(self, condition: ConditionLike) -> Analyzer:
        cond = Condition.parse(condition)
        analyzer = self._analyzers.get(cond)
        if analyzer is None:
            raise InvalidConditionError(condition)
        return analyzer

    def _run(self, quantity: Quantity, beam: Beam, load: float, condition: ConditionLike) -> AnalysisResult:
        cond = Condition.parse(condition)
        analyzer = self.analyzer_for(cond)

        logger.debug(
            "%s: condition=%s L1=%g L2=%g w=%g",
            quantity.value, cond.value, beam.primary_span, beam.secondary_span, load,
        )
        equation = getattr(analyzer, _EQUATION_METHOD[quantity])(beam, load)

        return AnalysisResult(
            beam=beam,
            load=load,
            equation=equation,
            condition=cond,
            quantity=quantity,
        )

    def get_deflection(self, beam: Beam, load: float, condition: ConditionLike) -> AnalysisResult:
        return self._run(Quantity.DEFLECTION, beam, load, condition)

    def get_bending_moment(self, beam: Beam, load: float, condition: ConditionLike) -> AnalysisResult:
        return self._run(Quantity.BENDING_MOMENT, beam, load, condition)

    def get_shear_force(self, beam: Beam, load: float, condition: ConditionLike) -> AnalysisResult:
        return self._run(Quantity.SHEAR_FORCE, beam, load, condition)

    def analyze(self, beam: Beam, load: float, condition: ConditionLike) -> Dict[Quantity, AnalysisResult]:
        """Las tres curvas en una llamada (mismo orden: deflexión, momento, corte)."""
        cond = Condition.parse(condition)
        self.analyzer_for(cond)
        return {q: self._run(q, beam, load, cond) for q in Quantity}
