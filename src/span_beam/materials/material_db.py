from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from span_beam.domain.errors import MaterialError
from span_beam.domain.material import EI_SYMBOL, SCALE_SYMBOL, Material

logger = logging.getLogger(__name__)

NAME_COLUMNS = {"name", "id", "material"}


class MaterialDB:
    def __init__(self, materials: List[Material]):
        self.materials: List[Material] = list(materials)
        self.by_name: Dict[str, Material] = {m.name.strip(): m for m in self.materials if m.name.strip()}

    def names(self) -> List[str]:
        return [m.name for m in self.materials]

    def get(self, name: str) -> Optional[Material]:
        return self.by_name.get((name or "").strip())

    def require(self, name: str) -> Material:
        mat = self.get(name)
        if mat is None:
            raise KeyError(f"Material no encontrado: {name!r}")
        return mat

    @staticmethod
    def _norm(s: str) -> str:
        return (s or "").strip()

    @classmethod
    def from_txt(cls, path: str | Path) -> "MaterialDB":
        """
        Lee un TXT separado por ';'.

        Formato:
          # comentario
          name;EI;scale;GA
          Acero S275;210000000;1;80000000

        - 'scale' es opcional (default 1.0).
        - Cualquier otra columna numérica se guarda como propiedad del material.
        - Acepta coma decimal.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"No existe el archivo de materiales: {p}")

        lines = p.read_text(encoding="utf-8", errors="replace").splitlines()
        rows: List[List[str]] = []
        for ln in lines:
            t = ln.strip()
            if not t:
                continue
            if t.startswith("#") or t.startswith("//"):
                continue
            rows.append([c.strip() for c in t.split(";")])

        if not rows:
            raise ValueError("Archivo de materiales vacío o sin filas válidas.")

        # Detectar header; sin header se asume name;EI;scale
        first = [h.strip() for h in rows[0]]
        if any(h.lower() in NAME_COLUMNS or h == EI_SYMBOL for h in first):
            header = first
            data_rows = rows[1:]
        else:
            header = ["name", EI_SYMBOL, SCALE_SYMBOL]
            data_rows = rows

        i_name = next((i for i, h in enumerate(header) if h.lower() in NAME_COLUMNS), 0)

        def try_float(s: str) -> Optional[float]:
            t = (s or "").strip().replace(",", ".")
            if t == "":
                return None
            try:
                return float(t)
            except ValueError:
                return None

        mats: List[Material] = []
        for r in data_rows:
            name = cls._norm(r[i_name] if i_name < len(r) else "")
            if not name:
                continue

            props: Dict[str, float] = {}
            for i, h in enumerate(header):
                if i == i_name or not h or i >= len(r):
                    continue
                v = try_float(r[i])
                if v is not None:
                    props[h] = v
            props.setdefault(SCALE_SYMBOL, 1.0)

            try:
                mats.append(Material(name=name, properties=props))
            except MaterialError as exc:
                # fila sin EI: no sirve para calcular
                logger.warning("Material ignorado (%s): %s", name, exc)

        if not mats:
            raise ValueError("No se pudieron cargar materiales: faltan columnas o valores de EI.")

        # ordenar por nombre para listados estables
        mats.sort(key=lambda m: m.name.upper())
        return cls(mats)


def default_materials_path() -> Path:
    """
    Ruta del TXT incluido en el paquete:
      src/span_beam/data/materials.txt
    """
    here = Path(__file__).resolve()
    return here.parents[1] / "data" / "materials.txt"
