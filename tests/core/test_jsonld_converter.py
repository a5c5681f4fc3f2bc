import json
import pytest
from puml_ld.core.jsonld_converter import JsonLdConverter
from puml_ld.exceptions.conversion import ConversionError
from puml_ld.models.diagram import (
    Attribute,
    DiagramModel,
    DiagramType,
    Element,
    Method,
    Relationship,
    Visibility,
)

BASE = "http://example.org/diagrams/test"
CONTEXT = {"@vocab": "http://example.org/uml#", "name": "rdfs:label"}


@pytest.fixture
def converter():
    return JsonLdConverter(CONTEXT, BASE)


@pytest.fixture
def class_diagram():
    person = Element(
        type="Class",
        name="Person",
        abstract=False,
        attributes=[Attribute(name="name", datatype="String", visibility=Visibility.PRIVATE)],
        methods=[Method(name="getName", return_type="String", visibility=Visibility.PUBLIC)],
    )
    company = Element(type="Class", name="Company", abstract=False)
    works_for = Relationship(
        type="Association",
        source="Person",
        target="Company",
        label="works for",
        source_cardinality="1..*",
        target_cardinality="1",
    )
    return DiagramModel(
        diagram_type=DiagramType.CLASS,
        elements=(person, company),
        relationships=(works_for,),
    )


def test_document_layout(converter, class_diagram):
    document = converter.build(class_diagram)

    assert document["@context"] == CONTEXT
    graph = document["@graph"]
    assert graph[0] == {
        "@id": BASE,
        "@type": "ClassDiagram",
        "elementCount": 2,
        "relationshipCount": 1,
    }
    assert [node["@id"] for node in graph[1:]] == [
        f"{BASE}#Person",
        f"{BASE}#Company",
        f"{BASE}#relationship_0",
    ]


def test_element_node(converter, class_diagram):
    person = converter.build(class_diagram)["@graph"][1]
    assert person == {
        "@id": f"{BASE}#Person",
        "@type": "Class",
        "name": "Person",
        "abstract": False,
        "attributes": [
            {"@type": "Attribute", "name": "name", "datatype": "String", "visibility": "private"},
        ],
        "methods": [
            {"@type": "Method", "name": "getName", "returnType": "String", "visibility": "public"},
        ],
    }


def test_sparse_emission(converter, class_diagram):
    company = converter.build(class_diagram)["@graph"][2]
    assert "stereotype" not in company
    assert "alias" not in company
    assert "attributes" not in company
    assert "methods" not in company


def test_relationship_node(converter, class_diagram):
    relationship = converter.build(class_diagram)["@graph"][3]
    assert relationship == {
        "@id": f"{BASE}#relationship_0",
        "@type": "Association",
        "source": f"{BASE}#Person",
        "target": f"{BASE}#Company",
        "label": "works for",
        "sourceCardinality": "1..*",
        "targetCardinality": "1",
    }


def test_conversion_is_deterministic(converter, class_diagram):
    assert converter.convert(class_diagram) == converter.convert(class_diagram)
    assert JsonLdConverter(CONTEXT, BASE).convert(class_diagram) == converter.convert(class_diagram)


def test_base_iri_with_trailing_fragment_separator(class_diagram):
    document = JsonLdConverter(CONTEXT, f"{BASE}#").build(class_diagram)
    assert document["@graph"][0]["@id"] == BASE
    assert document["@graph"][1]["@id"] == f"{BASE}#Person"


def test_identifier_minting(converter):
    diagram = DiagramModel(
        diagram_type=DiagramType.SEQUENCE,
        elements=(
            Element(type="Actor", name="Bob Smith", alias="Bob"),
            Element(type="Participant", name="Foo Bar!"),
            Element(type="Note", name=""),
        ),
        relationships=(
            Relationship(type="Message", source="Bob Smith", target="Foo Bar!", synchronous=False),
        ),
    )
    graph = converter.build(diagram)["@graph"]

    assert graph[1]["@id"] == f"{BASE}#Bob"
    assert graph[2]["@id"] == f"{BASE}#Foo_Bar_"
    assert graph[3]["@id"] == f"{BASE}#element_2"
    assert "name" not in graph[3]
    assert graph[4]["source"] == f"{BASE}#Bob_Smith"
    assert graph[4]["target"] == f"{BASE}#Foo_Bar_"
    assert graph[4]["synchronous"] is False


def test_type_specific_fields(converter):
    diagram = DiagramModel(
        diagram_type=DiagramType.GENERIC,
        elements=(
            Element(type="Enum", name="Color", values=["RED", "GREEN"]),
            Element(type="Enum", name="Empty", values=[]),
            Element(type="Database", name="DB"),
            Element(type="Actor", name="User"),
            Element(type="Entity", name="Order", attributes=[Attribute(name="id", datatype="int")]),
        ),
    )
    color, empty, db, user, order = converter.build(diagram)["@graph"][1:]

    assert color["values"] == ["RED", "GREEN"]
    assert "values" not in empty
    assert db["participantType"] == "Database"
    assert "participantType" not in user
    assert order["attributes"] == [{"@type": "Attribute", "name": "id", "datatype": "int"}]


def test_method_flags_are_emitted_only_when_set(converter):
    element = Element(
        type="Interface",
        name="Drawable",
        methods=[
            Method(name="draw", parameters="x: int", abstract=True),
            Method(name="create", static=False),
            Method(name="plain"),
        ],
    )
    diagram = DiagramModel(diagram_type=DiagramType.CLASS, elements=(element,))
    draw, create, plain = converter.build(diagram)["@graph"][1]["methods"]

    assert draw == {"@type": "Method", "name": "draw", "parameters": "x: int", "abstract": True}
    assert create == {"@type": "Method", "name": "create", "static": False}
    assert plain == {"@type": "Method", "name": "plain"}


def test_url_context_is_passed_through(class_diagram):
    output = JsonLdConverter("https://example.org/context.jsonld", BASE).convert(class_diagram)
    assert json.loads(output)["@context"] == "https://example.org/context.jsonld"


def test_malformed_model_raises_conversion_error(converter):
    broken = Relationship.model_construct(type="Association", source=None, target="B")
    diagram = DiagramModel.model_construct(
        diagram_type=DiagramType.CLASS, elements=(), relationships=(broken,)
    )
    with pytest.raises(ConversionError) as exc_info:
        converter.convert(diagram)

    assert "Failed to convert to JSON-LD" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, TypeError)
