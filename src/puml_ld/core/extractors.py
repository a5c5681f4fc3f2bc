"""
Kind-specific extractors turning PlantUML text into a DiagramModel.

Every extractor reads the source line by line. Blank lines, directives
(`@...`) and comments (`'...`) are skipped. Each other line is tried
against the extractor's ordered RULES; the first rule whose pattern
matches handles the line and the remaining rules are not tried. A line
matching no rule is dropped.
"""

import re
from logging import getLogger
from typing import Any, Callable, List, Optional, Tuple

from puml_ld.models.diagram import (
    Attribute,
    DiagramModel,
    DiagramType,
    Element,
    Method,
    Relationship,
)
from puml_ld.utils.symbols import (
    erd_cardinality,
    parse_visibility,
    quoted_cardinalities,
    relationship_type,
)
from puml_ld.utils.validation import ValidationCollector, ValidationSeverity

logger = getLogger(__name__)

_NAME = r'("[^"]+"|\w+)'
_ALIAS = r"(?:\s+as\s+(\w+))?"
_STEREOTYPE = r"(?:\s*<<(.+?)>>)?"
_TYPE_NAME = r"([\w.]+(?:<[^>]*>)?(?:\[\])?)"
_MODIFIERS = r"((?:\{\w+\}\s*)*)"

SKIPPED_PREFIXES = ("@", "'")


def _unquote(name: str) -> str:
    return name.replace('"', "")


class BaseExtractor:
    """Shared line loop for all extractors.

    Subclasses list their rules in RULES as (pattern, handler name) pairs.
    A handler receives the match, the stripped line and its 1-based number.
    """

    RULES: Tuple[Tuple[re.Pattern, str], ...] = ()

    def __init__(
        self,
        diagram_type: DiagramType,
        validator: Optional[ValidationCollector] = None,
    ):
        self.diagram_type = diagram_type
        self.validator = validator
        self.elements: List[Element] = []
        self.relationships: List[Relationship] = []
        # Index of the element that member lines attach to
        self.cursor: Optional[int] = None

    def extract(self, source: str) -> DiagramModel:
        """Run the rules over every line and freeze the result into a DiagramModel"""
        for line_number, raw_line in enumerate(source.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith(SKIPPED_PREFIXES):
                continue

            for pattern, handler_name in self.RULES:
                match = pattern.search(line)
                if match:
                    handler: Callable[..., Any] = getattr(self, handler_name)
                    handler(match, line, line_number)
                    break
            else:
                self._report(
                    ValidationSeverity.INFO,
                    "Line matches no rule and was ignored",
                    line,
                    line_number,
                )

        return DiagramModel(
            diagram_type=self.diagram_type,
            elements=tuple(self.elements),
            relationships=tuple(self.relationships),
        )

    def _declare(self, **fields) -> Element:
        """Append an element built from the supplied (non-None) fields and move the cursor to it"""
        element = Element(**{k: v for k, v in fields.items() if v is not None})
        self.elements.append(element)
        self.cursor = len(self.elements) - 1
        return element

    def _current_element(self) -> Optional[Element]:
        if self.cursor is None:
            return None
        return self.elements[self.cursor]

    def _relate(self, **fields) -> Relationship:
        relationship = Relationship(**{k: v for k, v in fields.items() if v is not None})
        self.relationships.append(relationship)
        return relationship

    def _report(
        self,
        severity: ValidationSeverity,
        message: str,
        line: str,
        line_number: int,
    ) -> None:
        if self.validator:
            self.validator.add_result(
                severity=severity,
                message=message,
                line_number=line_number,
                line=line,
                diagram_type=self.diagram_type.value,
            )


class ClassExtractor(BaseExtractor):
    """Classes, interfaces, enums, their members and the links between them."""

    RULES = (
        (re.compile(rf"^(abstract\s+)?class\s+{_NAME}{_ALIAS}{_STEREOTYPE}"), "_handle_class"),
        (re.compile(rf"^interface\s+{_NAME}{_ALIAS}{_STEREOTYPE}"), "_handle_interface"),
        (re.compile(rf"^enum\s+{_NAME}{_ALIAS}{_STEREOTYPE}"), "_handle_enum"),
        (
            re.compile(
                r'^"?(\w+)"?\s+(?:"[^"]*"\s+)?'
                r"((?:<\||[<*o#x+}])?[-.]+(?:\|>|[>*o#x+{])?)"
                r'\s+(?:"[^"]*"\s+)?"?(\w+)"?(?:\s*:\s*(.+))?'
            ),
            "_handle_relationship",
        ),
        (
            re.compile(
                rf"^{_MODIFIERS}([+\-#~])?(\w+)\s*:\s*{_TYPE_NAME}(?:\s*=\s*(.+))?"
            ),
            "_handle_attribute",
        ),
        (
            re.compile(
                rf"^{_MODIFIERS}([+\-#~])?(\w+)\s*\(([^)]*)\)(?:\s*:\s*{_TYPE_NAME})?"
            ),
            "_handle_method",
        ),
        (re.compile(r"^(\w+)\s*,?$"), "_handle_enum_value"),
    )

    def _handle_class(self, match, line, line_number):
        is_abstract, name, alias, stereotype = match.groups()
        self._declare(
            type="Class",
            name=_unquote(name),
            alias=alias,
            abstract=is_abstract is not None,
            stereotype=stereotype,
        )

    def _handle_interface(self, match, line, line_number):
        name, alias, stereotype = match.groups()
        self._declare(type="Interface", name=_unquote(name), alias=alias, stereotype=stereotype)

    def _handle_enum(self, match, line, line_number):
        name, alias, stereotype = match.groups()
        self._declare(
            type="Enum", name=_unquote(name), alias=alias, stereotype=stereotype, values=[]
        )

    def _handle_relationship(self, match, line, line_number):
        source, glyph, target, label = match.groups()
        source_cardinality, target_cardinality = quoted_cardinalities(line)
        self._relate(
            type=relationship_type(glyph),
            source=source,
            target=target,
            label=label.strip() if label else None,
            source_cardinality=source_cardinality,
            target_cardinality=target_cardinality,
        )

    def _handle_attribute(self, match, line, line_number):
        element = self._current_element()
        if element is None:
            self._report(ValidationSeverity.WARNING, "Attribute declared outside of any element", line, line_number)
            return
        modifiers, symbol, name, datatype, default_value = match.groups()
        element.attributes.append(
            Attribute(
                name=name,
                datatype=datatype,
                visibility=parse_visibility(symbol),
                default_value=default_value.strip() if default_value else None,
            )
        )

    def _handle_method(self, match, line, line_number):
        element = self._current_element()
        if element is None:
            self._report(ValidationSeverity.WARNING, "Method declared outside of any element", line, line_number)
            return
        modifiers, symbol, name, parameters, return_type = match.groups()
        flags = {}
        if "{abstract}" in modifiers:
            flags["abstract"] = True
        if "{static}" in modifiers or "{classifier}" in modifiers:
            flags["static"] = True
        element.methods.append(
            Method(
                name=name,
                parameters=parameters.strip() or None,
                return_type=return_type,
                visibility=parse_visibility(symbol),
                **flags,
            )
        )

    def _handle_enum_value(self, match, line, line_number):
        element = self._current_element()
        if element is None or element.type != "Enum":
            self._report(ValidationSeverity.INFO, "Bare identifier outside of an enum", line, line_number)
            return
        element.values.append(match.group(1))


class SequenceExtractor(BaseExtractor):
    """Participants and the messages exchanged between them."""

    RULES = (
        (
            re.compile(rf"^(participant|actor|boundary|control|entity|database)\s+{_NAME}{_ALIAS}"),
            "_handle_participant",
        ),
        (
            re.compile(r'^"?(\w+)"?\s*(<?-[->]+)\s*"?(\w+)"?(?:\s*:\s*(.+))?'),
            "_handle_message",
        ),
    )

    def _handle_participant(self, match, line, line_number):
        role, name, alias = match.groups()
        self._declare(type=role.capitalize(), name=_unquote(name), alias=alias)

    def _handle_message(self, match, line, line_number):
        source, arrow, target, message = match.groups()
        self._relate(
            type="Message",
            source=source,
            target=target,
            message=message.strip() if message else None,
            synchronous="--" not in arrow,
        )


class UseCaseExtractor(BaseExtractor):
    """Actors, use cases and the links between them."""

    RULES = (
        (re.compile(rf"^actor\s+{_NAME}{_ALIAS}"), "_handle_actor"),
        (re.compile(rf"^usecase\s+{_NAME}{_ALIAS}"), "_handle_usecase"),
        (
            re.compile(r"^(\w+)\s+(<?\.\.+>?|<?-+>?)\s+(\w+)(?:\s*:\s*(.+))?"),
            "_handle_link",
        ),
    )

    def _handle_actor(self, match, line, line_number):
        name, alias = match.groups()
        self._declare(type="Actor", name=_unquote(name), alias=alias)

    def _handle_usecase(self, match, line, line_number):
        name, alias = match.groups()
        self._declare(type="UseCase", name=_unquote(name), alias=alias)

    def _handle_link(self, match, line, line_number):
        source, glyph, target, label = match.groups()
        self._relate(
            type="Include" if "." in glyph else "Association",
            source=source,
            target=target,
            label=label.strip() if label else None,
        )


class ErdExtractor(BaseExtractor):
    """Entities, their columns and crow's foot relationships."""

    RULES = (
        (re.compile(rf"^entity\s+{_NAME}{_ALIAS}{_STEREOTYPE}"), "_handle_entity"),
        (
            re.compile(
                r'^"?(\w+)"?\s+([|o}]{0,2}(?:-+|\.+)[|o{]{0,2})\s+"?(\w+)"?(?:\s*:\s*(.+))?'
            ),
            "_handle_relationship",
        ),
        (re.compile(rf"^\*?\s*(\w+)\s*:\s*{_TYPE_NAME}"), "_handle_column"),
    )

    def _handle_entity(self, match, line, line_number):
        name, alias, stereotype = match.groups()
        self._declare(type="Entity", name=_unquote(name), alias=alias, stereotype=stereotype)

    def _handle_relationship(self, match, line, line_number):
        source, glyph, target, label = match.groups()
        self._relate(
            type="Relationship",
            source=source,
            target=target,
            label=label.strip() if label else None,
            source_cardinality=erd_cardinality(glyph, "left"),
            target_cardinality=erd_cardinality(glyph, "right"),
        )

    def _handle_column(self, match, line, line_number):
        element = self._current_element()
        if element is None:
            self._report(ValidationSeverity.WARNING, "Column declared outside of any entity", line, line_number)
            return
        name, datatype = match.groups()
        element.attributes.append(Attribute(name=name, datatype=datatype))


class GenericExtractor(BaseExtractor):
    """Fallback for unsupported kinds: `<type> <name>` lines become elements.
    Never produces relationships."""

    RULES = ((re.compile(rf"^(\w+)\s+{_NAME}"), "_handle_element"),)

    def _handle_element(self, match, line, line_number):
        element_type, name = match.groups()
        self._declare(type=element_type.capitalize(), name=_unquote(name))


EXTRACTORS = {
    DiagramType.CLASS: ClassExtractor,
    DiagramType.SEQUENCE: SequenceExtractor,
    DiagramType.USECASE: UseCaseExtractor,
    DiagramType.ERD: ErdExtractor,
    DiagramType.OBJECT: GenericExtractor,
    DiagramType.ACTIVITY: GenericExtractor,
    DiagramType.COMPONENT: GenericExtractor,
    DiagramType.STATE: GenericExtractor,
    DiagramType.DEPLOYMENT: GenericExtractor,
    DiagramType.GENERIC: GenericExtractor,
}
