"""
Intermediate representation of a PlantUML diagram, independent of the output format
"""

from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiagramType(str, Enum):
    """Enumeration of the diagram kinds the parser can report"""

    CLASS = "Class"
    SEQUENCE = "Sequence"
    USECASE = "UseCase"
    ERD = "ERD"
    OBJECT = "Object"
    ACTIVITY = "Activity"
    COMPONENT = "Component"
    STATE = "State"
    DEPLOYMENT = "Deployment"
    GENERIC = "Generic"


class Visibility(str, Enum):
    """Member visibility, as written with the +, -, # and ~ prefixes"""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"


class Attribute(BaseModel):
    """A field of a class, interface or entity"""

    model_config = ConfigDict(frozen=True)

    name: str
    datatype: Optional[str] = None
    visibility: Optional[Visibility] = None
    default_value: Optional[str] = None


class Method(BaseModel):
    """An operation of a class or interface.
    `parameters` keeps the raw text between the parentheses."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameters: Optional[str] = None
    return_type: Optional[str] = None
    visibility: Optional[Visibility] = None
    abstract: Optional[bool] = None
    static: Optional[bool] = None


class Element(BaseModel):
    """A named structural unit of a diagram (class, enum, actor, participant, entity...).

    Only the fields given to the constructor count as supplied; the JSON-LD
    converter relies on `model_fields_set` to decide what gets emitted, so
    extractors pass optional fields only when the source line carries them.
    """

    type: str
    name: str
    alias: Optional[str] = None
    abstract: Optional[bool] = None
    stereotype: Optional[str] = None
    attributes: List[Attribute] = Field(default_factory=list)
    methods: List[Method] = Field(default_factory=list)
    values: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def strip_quotes(cls, v):
        """Quoted names are stored without their quotes"""
        return v.replace('"', "")


class Relationship(BaseModel):
    """A link between two elements.

    `source` and `target` are free-text references to an element name or
    alias. They are never checked against the elements of the diagram.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    source: str
    target: str
    label: Optional[str] = None
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None
    message: Optional[str] = None
    synchronous: Optional[bool] = None


class DiagramModel(BaseModel):
    """Top-level container for a parsed diagram. Frozen once the parser returns it."""

    model_config = ConfigDict(frozen=True)

    diagram_type: DiagramType
    elements: Tuple[Element, ...] = ()
    relationships: Tuple[Relationship, ...] = ()

    def find_element(self, reference: str) -> Optional[Element]:
        """Look up the first element whose name or alias equals `reference`"""
        for element in self.elements:
            if reference in (element.name, element.alias):
                return element
        return None

    def dangling_references(self) -> List[str]:
        """Relationship endpoints that do not name any element, in source order"""
        dangling = []
        for relationship in self.relationships:
            for reference in (relationship.source, relationship.target):
                if self.find_element(reference) is None and reference not in dangling:
                    dangling.append(reference)
        return dangling
