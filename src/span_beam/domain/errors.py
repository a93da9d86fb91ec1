from __future__ import annotations

from typing import Any


class SpanBeamError(Exception):
    """Error base del paquete."""


class InvalidConditionError(SpanBeamError, ValueError):
    """
    Condición de apoyo no registrada.
    Se lanza antes de cualquier cálculo (no hay resultado parcial).
    """

    def __init__(self, condition: Any):
        self.condition = condition
        super().__init__(f"Invalid condition: {condition!r}")


class MaterialError(SpanBeamError, ValueError):
    """Material sin EI / escala de deflexión, o con valores no numéricos."""
