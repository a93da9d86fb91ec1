# path: src/span_beam/services/memoria_pdf.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from span_beam.domain.conditions import Condition, Quantity
from span_beam.domain.results import AnalysisResult
from span_beam.engine.two_span import solve_reactions
from span_beam.view.renderer_curves import TITLES, curve_extrema

# Nota: este módulo no grafica. Acepta paths a imágenes ya generadas
# (claves "deflection", "bending-moment", "shear-force").


@dataclass(frozen=True)
class MemoriaHeader:
    titulo: str
    cliente_proyecto: str = ""
    autor: str = ""
    fecha: Optional[datetime] = None
    revision: str = "A"


EQUATIONS: Dict[Condition, List[str]] = {
    Condition.SIMPLY_SUPPORTED: [
        "y(x) = -(w·x / (24·EI)) · (L³ - 2·L·x² + x³) · scale · 1000",
        "M(x) = -(w·x / 2) · (L - x)",
        "V(x) = w · (L/2 - x)",
    ],
    Condition.TWO_SPAN_UNEQUAL: [
        "M1 = -(w·L2³ + w·L1³) / (8·(L1 + L2))",
        "R1 = M1/L1 + w·L1/2 ;  R3 = M1/L2 + w·L2/2",
        "R2 = w·L1 + w·L2 - R1 - R3",
        "M(x) = 0                                 x = 0 ; x = L1 + L2",
        "M(x) = -(R1·x - w·x²/2)                  0 < x < L1",
        "M(L1) = -(R1·L1 - w·L1²/2)               x = L1 (sin R2)",
        "M(x) = -(R1·x + R2·(x - L1) - w·x²/2)    x > L1",
        "V(x) = R1 - w·x                          x < L1",
        "V(L1) = R2 - w·L1                        x = L1",
        "V(x) = R2 - w·(x - L1)                   x > L1",
    ],
}


def export_memoria_pdf(
    out_pdf_path: str,
    header: MemoriaHeader,
    results: Dict[Quantity, AnalysisResult],
    imagenes: Optional[Dict[str, str]] = None,
    page_size=pagesizes.A4,
) -> None:
    """
    Memoria de cálculo en PDF (A4) para un análisis completo
    (las tres curvas de una misma viga/carga/condición).
    """
    if not results:
        raise ValueError("Sin resultados para exportar.")

    imgs = _normalize_images_dict(imagenes)
    first = next(iter(results.values()))
    beam, load, condition = first.beam, first.load, first.condition

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.titulo,
    )

    story: List[object] = []

    # ----------------- Portada -----------------
    story.append(Paragraph(header.titulo, styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    fecha = header.fecha or datetime.now()
    meta_rows = [
        ["Proyecto / Cliente:", header.cliente_proyecto or "-"],
        ["Autor:", header.autor or "-"],
        ["Fecha:", fecha.strftime("%Y-%m-%d %H:%M")],
        ["Revisión:", header.revision],
        ["Condición:", condition.value],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("Base teórica y supuestos", styles["Heading2"]))
    base = [
        "Viga de Euler-Bernoulli: material elástico lineal, pequeñas deformaciones, sección prismática.",
        "Carga única uniformemente distribuida w sobre toda la longitud.",
        "Deflexión ×1000·scale, redondeada a 1 decimal y luego ×1e9 para presentación; momento y corte sin escalar.",
    ]
    if condition is Condition.TWO_SPAN_UNEQUAL:
        base.append(
            "Viga continua de dos tramos (hiperestática): el momento sobre el apoyo interior "
            "cierra el sistema y las reacciones salen por equilibrio de cada tramo."
        )
    story.extend(_bullets(base, styles))
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Ecuaciones principales", styles["Heading3"]))
    story.extend(_mono_block(EQUATIONS[condition], styles))
    story.append(Spacer(1, 4 * mm))

    # ----------------- Datos -----------------
    story.append(Paragraph("Datos del caso", styles["Heading2"]))
    mat = beam.material
    dims = [
        ["L1 (tramo principal)", _f(beam.primary_span, 3)],
        ["L2 (tramo secundario)", _f(beam.secondary_span, 3) if condition is Condition.TWO_SPAN_UNEQUAL else "-"],
        ["Carga w", _f(load, 4)],
        ["Material", mat.name],
        ["EI", _f(mat.flexural_rigidity, 3)],
        ["scale", _f(mat.deflection_scale, 6)],
    ]
    t = Table(dims, colWidths=[55 * mm, 125 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    if condition is Condition.TWO_SPAN_UNEQUAL:
        r = solve_reactions(beam.primary_span, beam.secondary_span, load)
        story.append(Paragraph("Reacciones", styles["Heading3"]))
        rrows = [
            ["M1 (apoyo interior)", _f(r.M1, 4)],
            ["R1", _f(r.R1, 4)],
            ["R2", _f(r.R2, 4)],
            ["R3", _f(r.R3, 4)],
            ["Residual ΣFy", _f(r.total_vertical - load * beam.total_length, 6)],
        ]
        t = Table(rrows, colWidths=[55 * mm, 125 * mm])
        t.setStyle(_kv_table_style())
        story.append(t)
        story.append(Spacer(1, 3 * mm))

    # ----------------- Resultados -----------------
    story.append(Paragraph("Extremos de las curvas", styles["Heading2"]))
    for q in Quantity:
        res = results.get(q)
        if res is None:
            continue
        ext = curve_extrema(res.equation)
        story.append(Paragraph(TITLES[q], styles["Heading3"]))
        if not ext:
            story.append(Paragraph("(Sin extremos relevantes o valores no finitos)", styles["Small"]))
            continue
        rows = [["Tipo", "x", "valor"]]
        for kind, x, y in ext:
            rows.append([kind, _f(x, 3), _f(y, 2)])
        t = Table(rows, colWidths=[30 * mm, 55 * mm, 95 * mm])
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
        story.append(Spacer(1, 2 * mm))

    # ----------------- Figuras -----------------
    if imgs:
        story.append(PageBreak())
        story.append(Paragraph("Figuras", styles["Heading2"]))
        for q in Quantity:
            _append_figure(story, styles, q.value, TITLES[q], imgs, max_w=180 * mm, max_h=80 * mm)

    doc.build(story)


# ----------------- helpers -----------------

def _normalize_images_dict(imagenes: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not imagenes:
        return {}
    out: Dict[str, str] = {}
    for k, v in imagenes.items():
        kk = (k or "").strip().lower()
        vv = (v or "").strip()
        if not kk or not vv:
            continue
        out[kk] = vv
    return out


def _append_figure(story: List[object], styles, key: str, title: str, imgs: Dict[str, str], *, max_w: float, max_h: float):
    story.append(Paragraph(title, styles["Heading3"]))
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        story.append(_img(path, max_w=max_w, max_h=max_h))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph(f"(Sin imagen: '{key}' no disponible o no existe en disco)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))


def _f(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _bullets(items: List[str], styles):
    out: List[object] = []
    for it in items:
        out.append(Paragraph(f"• {it}", styles["BodyText"]))
        out.append(Spacer(1, 1.2 * mm))
    return out


def _mono_block(lines: List[str], styles):
    out: List[object] = []
    for ln in lines:
        out.append(Paragraph(ln.replace(" ", "&nbsp;").replace("<", "&lt;"), styles["MonoSmall"]))
    return out


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
