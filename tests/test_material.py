import pytest

from span_beam.domain.beam import Beam
from span_beam.domain.conditions import Condition
from span_beam.domain.errors import MaterialError
from span_beam.domain.material import Material
from span_beam.materials.material_db import MaterialDB, default_materials_path


def test_named_accessors():
    m = Material(name="Acero", properties={"EI": 2.1e8, "scale": 0.5, "GA": 8e7})
    assert m.flexural_rigidity == 2.1e8
    assert m.deflection_scale == 0.5
    assert m.get("GA") == 8e7
    assert m.get("XX") is None


def test_of_defaults_scale():
    m = Material.of("Acero", 1000)
    assert m.deflection_scale == 1.0
    assert m.flexural_rigidity == 1000.0


def test_missing_property_raises():
    with pytest.raises(MaterialError):
        Material(name="X", properties={"EI": 1.0})
    with pytest.raises(MaterialError):
        Material(name="X", properties={"scale": 1.0})


def test_non_numeric_property_raises():
    with pytest.raises(MaterialError):
        Material(name="X", properties={"EI": "mucho", "scale": 1.0})


def test_zero_rigidity_is_accepted():
    assert Material.of("Blando", 0.0).flexural_rigidity == 0.0


def test_properties_are_read_only():
    m = Material.of("Acero", 1000)
    with pytest.raises(TypeError):
        m.properties["EI"] = 1.0


def test_beam_lengths():
    m = Material.of("Acero", 1000)
    b = Beam(primary_span=4.0, secondary_span=6.0, material=m)
    assert b.total_length == 10.0
    assert b.span_for(Condition.TWO_SPAN_UNEQUAL) == 10.0
    assert b.span_for("simply-supported") == 4.0
    assert Beam.single_span(3.0, m).total_length == 3.0


def test_material_db_from_txt(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text(
        "# comentario\n"
        "name;EI;scale;GA\n"
        "Zinc;1,5;2;\n"
        "// otro comentario\n"
        "Acero;210000000;;80000000\n"
        "SinEI;;1;5\n",
        encoding="utf-8",
    )
    db = MaterialDB.from_txt(p)
    assert db.names() == ["Acero", "Zinc"]
    acero = db.require("Acero")
    assert acero.deflection_scale == 1.0
    assert acero.get("GA") == 80000000.0
    assert db.get("Zinc").flexural_rigidity == 1.5
    assert db.get("SinEI") is None
    with pytest.raises(KeyError):
        db.require("SinEI")


def test_material_db_without_header(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text("Madera;12000;1\n", encoding="utf-8")
    db = MaterialDB.from_txt(p)
    assert db.require("Madera").flexural_rigidity == 12000.0


def test_material_db_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        MaterialDB.from_txt(tmp_path / "no_existe.txt")
    empty = tmp_path / "vacio.txt"
    empty.write_text("# nada\n\n", encoding="utf-8")
    with pytest.raises(ValueError):
        MaterialDB.from_txt(empty)


def test_default_materials_file_loads():
    db = MaterialDB.from_txt(default_materials_path())
    assert db.require("Default").flexural_rigidity == 210000000.0


def test_beam_spans_are_explicit():
    m = Material.of("Acero", 1000)
    with pytest.raises(TypeError):
        Beam(primary_span=8.0, material=m)
    b = Beam.single_span(8.0, m)
    assert b.secondary_span == 0.0
    assert b.span_for(Condition.SIMPLY_SUPPORTED) == 8.0
