"""PlantUML text in, JSON-LD text out."""

from typing import Optional

from puml_ld.core.jsonld_converter import Context, JsonLdConverter
from puml_ld.core.parser import PumlParser
from puml_ld.utils.validation import ValidationCollector


def convert_puml(
    source: str,
    context: Context,
    base_iri: str,
    validator: Optional[ValidationCollector] = None,
) -> str:
    """Parse a PlantUML source and serialize it as JSON-LD.

    Raises:
        ParseError: if the source has no start directive
        ConversionError: if the JSON-LD document cannot be built
    """
    diagram = PumlParser(validator=validator).parse(source)
    return JsonLdConverter(context, base_iri).convert(diagram)
