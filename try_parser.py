import logging
from pathlib import Path
from puml_ld.utils.debugging import debug_parsing, debug_converting_to_jsonld


if __name__ == "__main__":
    # Replace with path to your PlantUML file
    puml_path = Path("tests/test_data/person_company.puml")
    context = {"@vocab": "http://example.org/uml#", "name": "rdfs:label"}
    diagram, validator = debug_parsing(puml_path, logging_level=logging.DEBUG)
    debug_converting_to_jsonld(diagram, context, "http://example.org/diagrams/test")

    print('reached end of code')
