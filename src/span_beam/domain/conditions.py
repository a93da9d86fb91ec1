from __future__ import annotations

from enum import Enum
from typing import Union

from span_beam.domain.errors import InvalidConditionError


class Condition(str, Enum):
    SIMPLY_SUPPORTED = "simply-supported"
    TWO_SPAN_UNEQUAL = "two-span-unequal"

    @classmethod
    def parse(cls, value: Union["Condition", str]) -> "Condition":
        """
        Acepta el miembro o su valor string ("simply-supported", ...).
        Ignora espacios y mayúsculas.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for c in cls:
                if c.value == key:
                    return c
        raise InvalidConditionError(value)


class Quantity(str, Enum):
    DEFLECTION = "deflection"
    BENDING_MOMENT = "bending-moment"
    SHEAR_FORCE = "shear-force"
