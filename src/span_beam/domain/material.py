from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from span_beam.domain.errors import MaterialError

# Símbolos obligatorios del bag de propiedades
EI_SYMBOL = "EI"
SCALE_SYMBOL = "scale"


def _as_number(symbol: str, value: object) -> float:
    if isinstance(value, bool):
        raise MaterialError(f"Propiedad '{symbol}' no numérica: {value!r}")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise MaterialError(f"Propiedad '{symbol}' no numérica: {value!r}") from None


@dataclass(frozen=True)
class Material:
    """
    Material de la viga: nombre + propiedades por símbolo.

    Mínimos:
      - EI    : rigidez a flexión
      - scale : factor de escala aplicado a la deflexión

    Otros símbolos (GA, etc.) se conservan para consulta con get().
    Valores cero o negativos NO se rechazan: la evaluación numérica
    devuelve inf / nan en las curvas.
    """
    name: str
    properties: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        props = {}
        for k, v in dict(self.properties).items():
            props[str(k).strip()] = _as_number(str(k), v)

        for symbol in (EI_SYMBOL, SCALE_SYMBOL):
            if symbol not in props:
                raise MaterialError(f"Material '{self.name}': falta la propiedad '{symbol}'.")

        object.__setattr__(self, "properties", MappingProxyType(props))

    @classmethod
    def of(cls, name: str, flexural_rigidity: float, deflection_scale: float = 1.0, **extra: float) -> "Material":
        props = dict(extra)
        props[EI_SYMBOL] = flexural_rigidity
        props[SCALE_SYMBOL] = deflection_scale
        return cls(name=name, properties=props)

    @property
    def flexural_rigidity(self) -> float:
        return self.properties[EI_SYMBOL]

    @property
    def deflection_scale(self) -> float:
        return self.properties[SCALE_SYMBOL]

    def get(self, symbol: str, default: Optional[float] = None) -> Optional[float]:
        return self.properties.get((symbol or "").strip(), default)
