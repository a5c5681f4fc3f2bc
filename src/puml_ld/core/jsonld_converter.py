import json
from logging import getLogger
from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel

from puml_ld.exceptions.conversion import ConversionError
from puml_ld.models.diagram import (
    Attribute,
    DiagramModel,
    Element,
    Method,
    Relationship,
    Visibility,
)
from puml_ld.utils.symbols import sanitize_local_name

logger = getLogger(__name__)

CLASS_LIKE_TYPES = ("Class", "Interface", "Entity")
PARTICIPANT_TYPES = ("Participant", "Boundary", "Control", "Database")

Context = Union[str, Mapping[str, Any]]


def _supplied(model: BaseModel, field: str) -> bool:
    """True if `field` was given to the model and holds a non-empty value.
    A supplied False is kept."""
    if field not in model.model_fields_set:
        return False
    return getattr(model, field) not in (None, "")


class JsonLdConverter:
    """Converts a DiagramModel into a JSON-LD document.

    The context is copied into `@context` as given, never fetched or checked.
    Node identifiers are minted by appending a sanitized local name to the
    base IRI, which always ends with `#`.
    """

    def __init__(self, context: Context, base_iri: str):
        self.context = context
        self.base_iri = base_iri if base_iri.endswith("#") else f"{base_iri}#"

    def convert(self, diagram: DiagramModel) -> str:
        """Convert the diagram to pretty-printed JSON-LD text.

        Raises:
            ConversionError: wrapping any failure while building the document
        """
        document = self.build(diagram)
        try:
            return json.dumps(document, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ConversionError(f"Failed to convert to JSON-LD: {e}") from e

    def build(self, diagram: DiagramModel) -> Dict[str, Any]:
        """Build the JSON-LD document as a dictionary.

        `@graph` holds the diagram node first, then one node per element and
        one node per relationship, both in source order.
        """
        try:
            graph: List[Dict[str, Any]] = [
                {
                    "@id": self.base_iri[:-1],
                    "@type": f"{diagram.diagram_type.value}Diagram",
                    "elementCount": len(diagram.elements),
                    "relationshipCount": len(diagram.relationships),
                }
            ]
            for index, element in enumerate(diagram.elements):
                graph.append(self._convert_element(element, index))
            for index, relationship in enumerate(diagram.relationships):
                graph.append(self._convert_relationship(relationship, index))
        except Exception as e:
            raise ConversionError(f"Failed to convert to JSON-LD: {e}") from e

        logger.debug(f"Built JSON-LD graph with {len(graph)} nodes")
        return {"@context": self.context, "@graph": graph}

    def _convert_element(self, element: Element, index: int) -> Dict[str, Any]:
        local_name = element.alias or element.name or f"element_{index}"
        node: Dict[str, Any] = {
            "@id": self.generate_iri(local_name),
            "@type": element.type,
        }

        for field in ("name", "alias", "abstract", "stereotype"):
            if _supplied(element, field):
                node[field] = getattr(element, field)

        if element.type in CLASS_LIKE_TYPES:
            if element.attributes:
                node["attributes"] = [self._convert_attribute(a) for a in element.attributes]
            if element.methods:
                node["methods"] = [self._convert_method(m) for m in element.methods]
        elif element.type == "Enum":
            if element.values:
                node["values"] = list(element.values)
        elif element.type in PARTICIPANT_TYPES:
            node["participantType"] = element.type

        return node

    def _convert_attribute(self, attribute: Attribute) -> Dict[str, Any]:
        node: Dict[str, Any] = {"@type": "Attribute", "name": attribute.name}
        if _supplied(attribute, "datatype"):
            node["datatype"] = attribute.datatype
        if _supplied(attribute, "visibility"):
            node["visibility"] = Visibility(attribute.visibility).value
        if _supplied(attribute, "default_value"):
            node["defaultValue"] = attribute.default_value
        return node

    def _convert_method(self, method: Method) -> Dict[str, Any]:
        node: Dict[str, Any] = {"@type": "Method", "name": method.name}
        if _supplied(method, "parameters"):
            node["parameters"] = method.parameters
        if _supplied(method, "return_type"):
            node["returnType"] = method.return_type
        if _supplied(method, "visibility"):
            node["visibility"] = Visibility(method.visibility).value
        if _supplied(method, "abstract"):
            node["abstract"] = method.abstract
        if _supplied(method, "static"):
            node["static"] = method.static
        return node

    def _convert_relationship(self, relationship: Relationship, index: int) -> Dict[str, Any]:
        node: Dict[str, Any] = {
            "@id": self.generate_iri(f"relationship_{index}"),
            "@type": relationship.type,
            "source": self.generate_iri(relationship.source),
            "target": self.generate_iri(relationship.target),
        }
        optional_fields = (
            ("label", "label"),
            ("message", "message"),
            ("source_cardinality", "sourceCardinality"),
            ("target_cardinality", "targetCardinality"),
            ("synchronous", "synchronous"),
        )
        for field, key in optional_fields:
            if _supplied(relationship, field):
                node[key] = getattr(relationship, field)
        return node

    def generate_iri(self, local_name: str) -> str:
        """Mint an IRI under the base IRI for a sanitized local name"""
        return f"{self.base_iri}{sanitize_local_name(local_name)}"
