import pytest
from puml_ld.config import DEFAULT_SHAPES_DIR
from puml_ld.shapes.repository import ShapeRepository


@pytest.fixture
def repository(tmp_path):
    (tmp_path / "class_shape.ttl").write_text("@prefix sh: <http://www.w3.org/ns/shacl#> .\n", encoding="utf-8")
    (tmp_path / "erd_shape.ttl").write_text("# erd\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    return ShapeRepository(tmp_path)


def test_lookup_is_case_insensitive(repository):
    assert repository.get_shape("CLASS").startswith("@prefix sh:")
    assert repository.get_shape("class") == repository.get_shape("Class")


def test_missing_shape(repository):
    assert repository.get_shape("Sequence") is None


def test_names_outside_word_characters_are_rejected(repository):
    assert repository.get_shape("../class") is None
    assert repository.get_shape("") is None


def test_list_shapes(repository):
    assert repository.list_shapes() == ["Class", "Erd"]


def test_bundled_shapes():
    bundled = ShapeRepository(DEFAULT_SHAPES_DIR).list_shapes()
    assert bundled == ["Class", "Erd", "Sequence", "Usecase"]
