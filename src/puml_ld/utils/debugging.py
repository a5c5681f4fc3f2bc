from pathlib import Path
from typing import Optional, Union
import logging

import networkx as nx

from puml_ld.models.diagram import DiagramModel
from puml_ld.core.parser import PumlParser
from puml_ld.core.jsonld_converter import JsonLdConverter
from puml_ld.utils.validation import ValidationCollector

logger = logging.getLogger(__name__)


def setup_debug_logging(level=logging.INFO):
    """Set up logging configuration for debugging purposes.
    level: DEBUG also prints every dropped line,
    level: INFO prints just the detected type and warnings"""
    # Reset root logger handlers
    root = logging.getLogger()
    if root.handlers:
        root.handlers.clear()

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def inspect_diagram(diagram: DiagramModel):
    """Print a summary of the parsed diagram"""
    print("\n=== Diagram Summary ===")
    print(f"Diagram type: {diagram.diagram_type.value}")
    print(f"Total elements: {len(diagram.elements)}")
    print(f"Total relationships: {len(diagram.relationships)}")

    print("\n=== Amount of Element Types ===")
    element_types: dict[str, int] = {}
    for element in diagram.elements:
        element_types[element.type] = element_types.get(element.type, 0) + 1
    for element_type, count in element_types.items():
        print(f"{element_type}: {count}")

    dangling = diagram.dangling_references()
    if dangling:
        print(f"\nReferences without a declared element: {dangling}")


def _node_key(diagram: DiagramModel, reference: str) -> str:
    element = diagram.find_element(reference)
    if element is None:
        return reference
    return element.alias or element.name


def diagram_to_networkx(diagram: DiagramModel) -> nx.DiGraph:
    """Build a networkx view of the diagram.

    Nodes are keyed by alias, else name. Endpoints that match no element
    become bare nodes flagged `dangling`. Parallel relationships between the
    same pair are kept on one edge, in the `relationships` list.
    """
    graph = nx.DiGraph(diagram_type=diagram.diagram_type.value)
    for element in diagram.elements:
        graph.add_node(
            element.alias or element.name,
            type=element.type,
            name=element.name,
            dangling=False,
        )

    for relationship in diagram.relationships:
        source = _node_key(diagram, relationship.source)
        target = _node_key(diagram, relationship.target)
        for key in (source, target):
            if key not in graph:
                graph.add_node(key, type=None, name=key, dangling=True)

        if not graph.has_edge(source, target):
            graph.add_edge(source, target, relationships=[])
        graph.edges[source, target]["relationships"].append(relationship.type)
    return graph


def visualize_diagram(diagram: DiagramModel, output_path: Union[str, Path]) -> Path:
    """Render the networkx view of the diagram to an image file with matplotlib"""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    graph = diagram_to_networkx(diagram)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 8))
    positions = nx.spring_layout(graph, seed=42)
    colors = ["lightgrey" if data["dangling"] else "lightblue" for _, data in graph.nodes(data=True)]
    nx.draw_networkx(graph, positions, ax=ax, node_color=colors, node_size=1500, font_size=8)
    edge_labels = {
        (u, v): ", ".join(data["relationships"]) for u, v, data in graph.edges(data=True)
    }
    nx.draw_networkx_edge_labels(graph, positions, edge_labels=edge_labels, ax=ax, font_size=7)
    ax.set_title(f"{diagram.diagram_type.value} diagram")
    ax.axis("off")
    fig.savefig(output_path)
    plt.close(fig)

    logger.info(f"Diagram visualization saved to {output_path}")
    return output_path


def debug_parsing(puml_path: Path, logging_level=logging.INFO, report_path: Optional[Path] = None):
    """Run a complete debugging session for parsing a PlantUML file

    Args:
        puml_path: Path to the PlantUML file to parse
        logging_level: DEBUG to see every dropped line
        report_path: Where to save the extraction report, if anywhere
    """
    setup_debug_logging(logging_level)

    validator = ValidationCollector()
    parser = PumlParser(validator=validator)
    diagram = parser.parse_file(puml_path)
    inspect_diagram(diagram)

    if report_path is not None:
        validator.save_report(report_path)

    return diagram, validator


def debug_converting_to_jsonld(diagram: DiagramModel, context, base_iri: str) -> str:
    """Debug the conversion of a diagram to JSON-LD"""
    print("\n=== Conversion to JSON-LD ===")
    converter = JsonLdConverter(context, base_iri)
    output = converter.convert(diagram)
    print(output)

    return output
