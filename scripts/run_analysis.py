# path: scripts/run_analysis.py
import argparse
import os
import sys
import traceback

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from span_beam.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

from matplotlib.figure import Figure

from span_beam.domain.beam import Beam
from span_beam.engine.analysis import BeamAnalysis
from span_beam.materials.material_db import MaterialDB, default_materials_path
from span_beam.services.memoria_pdf import MemoriaHeader, export_memoria_pdf
from span_beam.view.renderer_curves import render_all, render_curve, save_figure


def main(argv=None):
    p = argparse.ArgumentParser(description="Deflexión, momento y corte de una viga con carga uniforme.")
    p.add_argument("condition", choices=["simply-supported", "two-span-unequal"])
    p.add_argument("--l1", type=float, required=True, help="tramo principal")
    p.add_argument("--l2", type=float, default=0.0, help="tramo secundario (two-span-unequal)")
    p.add_argument("--load", type=float, required=True, help="carga uniforme w")
    p.add_argument("--material", default="Default")
    p.add_argument("--materials-file", default=str(default_materials_path()))
    p.add_argument("--out", default="out")
    p.add_argument("--pdf", action="store_true", help="exportar memoria de cálculo")
    args = p.parse_args(argv)

    db = MaterialDB.from_txt(args.materials_file)
    beam = Beam(primary_span=args.l1, secondary_span=args.l2, material=db.require(args.material))

    results = BeamAnalysis().analyze(beam, args.load, args.condition)
    os.makedirs(args.out, exist_ok=True)

    fig = render_all(results)
    fig_path = save_figure(fig, os.path.join(args.out, "curvas.png"))
    logger.info("Figura: %s", fig_path)

    if args.pdf:
        imgs = {}
        for q, res in results.items():
            f = Figure(figsize=(8.0, 3.0), layout="constrained")
            render_curve(f.subplots(), res)
            imgs[q.value] = save_figure(f, os.path.join(args.out, f"{q.value}.png"))
        pdf = os.path.join(args.out, "memoria.pdf")
        export_memoria_pdf(pdf, MemoriaHeader(titulo="Memoria de cálculo - viga"), results, imagenes=imgs)
        logger.info("Memoria: %s", pdf)


if __name__ == "__main__":
    main()
