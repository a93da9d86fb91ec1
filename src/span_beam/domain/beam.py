from __future__ import annotations

from dataclasses import dataclass

from span_beam.domain.conditions import Condition
from span_beam.domain.material import Material


@dataclass(frozen=True)
class Beam:
    """
    Geometría de la viga.
      - primary_span: primer (o único) tramo
      - secondary_span: segundo tramo; 0 para viga de un tramo
    Para two-span-unequal ambos tramos deben ser > 0 (no se valida).
    """
    primary_span: float
    secondary_span: float
    material: Material

    @classmethod
    def single_span(cls, span: float, material: Material) -> "Beam":
        return cls(primary_span=span, secondary_span=0.0, material=material)

    @property
    def total_length(self) -> float:
        return float(self.primary_span) + float(self.secondary_span)

    def span_for(self, condition: Condition) -> float:
        """Longitud que se muestrea para la condición dada."""
        if Condition.parse(condition) is Condition.SIMPLY_SUPPORTED:
            return float(self.primary_span)
        return self.total_length
