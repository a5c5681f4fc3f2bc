from logging import getLogger
from pathlib import Path
from typing import Optional, Union

from puml_ld.core.detector import detect_diagram_type
from puml_ld.core.extractors import EXTRACTORS, GenericExtractor
from puml_ld.models.diagram import DiagramModel
from puml_ld.utils.validation import ValidationCollector

logger = getLogger(__name__)


class PumlParser:
    """Parser for converting PlantUML sources into our diagram model."""

    def __init__(self, validator: Optional[ValidationCollector] = None):
        """Initialize parser.

        Args:
            validator: Optional collector receiving the lines the extractor dropped
        """
        self.validator = validator

    def parse_file(self, filepath: Union[str, Path]) -> DiagramModel:
        """Parse a PlantUML file into our diagram model.

        Args:
            filepath: Path to the .puml file

        Returns:
            The parsed DiagramModel

        Raises:
            ParseError: if the file has no start directive
        """
        source = Path(filepath).read_text(encoding="utf-8")
        return self.parse(source)

    def parse(self, source: str) -> DiagramModel:
        """Detect the diagram type and run the matching extractor.

        A fresh extractor is created per call, so one parser can be reused.

        Raises:
            ParseError: if the source has no start directive
        """
        diagram_type = detect_diagram_type(source)
        logger.info(f"Detected diagram type: {diagram_type.value}")

        extractor_class = EXTRACTORS.get(diagram_type, GenericExtractor)
        extractor = extractor_class(diagram_type, validator=self.validator)
        diagram = extractor.extract(source)

        logger.debug(
            f"Extracted {len(diagram.elements)} elements and "
            f"{len(diagram.relationships)} relationships"
        )
        return diagram
