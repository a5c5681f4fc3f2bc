"""Detection of the diagram kind of a PlantUML source."""

import re
from logging import getLogger
from typing import Tuple

from puml_ld.exceptions.parsing import ParseError
from puml_ld.models.diagram import DiagramType

logger = getLogger(__name__)

# Kind named by an explicit @start<kind> directive
DIAGRAM_TYPES = {
    "class": DiagramType.CLASS,
    "sequence": DiagramType.SEQUENCE,
    "usecase": DiagramType.USECASE,
    "entity": DiagramType.ERD,
    "object": DiagramType.OBJECT,
    "activity": DiagramType.ACTIVITY,
    "component": DiagramType.COMPONENT,
    "state": DiagramType.STATE,
    "deployment": DiagramType.DEPLOYMENT,
}

# Content sniffing for bare @startuml sources, first hit wins
CONTENT_HINTS: Tuple[Tuple[re.Pattern, DiagramType], ...] = (
    (re.compile(r"\bclass\s+\w+"), DiagramType.CLASS),
    (re.compile(r"\bactor\s+\w+|\busecase\s+\w+"), DiagramType.USECASE),
    (re.compile(r"\bentity\s+\w+"), DiagramType.ERD),
    (re.compile(r"-[->]+|<-[->]+"), DiagramType.SEQUENCE),
)

_START_DIRECTIVE = re.compile(r"@start(\w+)")
_BARE_START = re.compile(r"@startuml\b", re.IGNORECASE)


def detect_diagram_type(source: str) -> DiagramType:
    """Determine the diagram type of a PlantUML source.

    An explicit `@start<kind>` directive (any kind except `uml`) decides the
    type directly; kinds missing from DIAGRAM_TYPES are Generic. A bare
    `@startuml` falls back to CONTENT_HINTS.

    Raises:
        ParseError: if the source has no start directive at all
    """
    for match in _START_DIRECTIVE.finditer(source):
        kind = match.group(1).lower()
        if kind != "uml":
            diagram_type = DIAGRAM_TYPES.get(kind, DiagramType.GENERIC)
            logger.debug(f"Explicit @start{kind} directive: {diagram_type.value}")
            return diagram_type

    if not _BARE_START.search(source):
        raise ParseError(
            "Not a valid PlantUML document (missing @startuml or @start* directive)"
        )

    for pattern, diagram_type in CONTENT_HINTS:
        if pattern.search(source):
            return diagram_type
    return DiagramType.GENERIC
