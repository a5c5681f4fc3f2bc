"""
Lookup tables shared by the extractors and the JSON-LD converter.

The tables hold the mapping data only; the traversal logic lives in the
extractors. Every lookup here is a pure function of its input.
"""

import re
from typing import List, Optional, Tuple

from puml_ld.models.diagram import Visibility

VISIBILITY_SYMBOLS = {
    "+": Visibility.PUBLIC,
    "-": Visibility.PRIVATE,
    "#": Visibility.PROTECTED,
    "~": Visibility.PACKAGE,
}

# Checked in order, first substring hit wins
RELATIONSHIP_GLYPHS: Tuple[Tuple[str, str], ...] = (
    ("<|--", "Extension"),
    ("--|>", "Extension"),
    ("<|..", "Implementation"),
    ("..|>", "Implementation"),
    ("*--", "Composition"),
    ("--*", "Composition"),
    ("o--", "Aggregation"),
    ("--o", "Aggregation"),
    ("-->", "Dependency"),
    ("<--", "Dependency"),
    ("..>", "Dependency"),
    ("<..", "Dependency"),
)
DEFAULT_RELATIONSHIP_TYPE = "Association"

ERD_CARDINALITIES = {
    "||": "1",
    "|o": "0..1",
    "o|": "0..1",
    "}o": "0..*",
    "o{": "0..*",
    "}|": "1..*",
    "|{": "1..*",
}
DEFAULT_ERD_CARDINALITY = "*"

_QUOTED = re.compile(r'"([^"]+)"')
_NON_IRI_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def parse_visibility(symbol: Optional[str]) -> Visibility:
    """Map a visibility prefix to its name. No prefix means public."""
    return VISIBILITY_SYMBOLS.get(symbol, Visibility.PUBLIC)


def relationship_type(glyph: str) -> str:
    """Map a class diagram connector glyph (e.g. `<|--`) to a relationship type"""
    for pattern, rel_type in RELATIONSHIP_GLYPHS:
        if pattern in glyph:
            return rel_type
    return DEFAULT_RELATIONSHIP_TYPE


def quoted_cardinalities(line: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (source, target) cardinalities from the quoted substrings of a line.

    The first quoted substring is the source cardinality and the second is the
    target cardinality, by position only. A quoted label on the same line is
    taken as a cardinality too.
    """
    matches: List[str] = _QUOTED.findall(line)
    source = matches[0] if len(matches) > 0 else None
    target = matches[1] if len(matches) > 1 else None
    return source, target


def erd_cardinality(glyph: str, side: str) -> str:
    """Read the crow's foot cardinality at one end of an ERD connector.

    Args:
        glyph: The connector, e.g. `|o--o{`
        side: "left" for the source end, "right" for the target end

    Returns:
        One of 1, 0..1, 0..*, 1..*, or * when the two-character window
        matches no entry. Connectors shorter than two characters yield a
        window shorter than two characters, which always falls back to *.
    """
    chars = glyph[:2] if side == "left" else glyph[-2:]
    return ERD_CARDINALITIES.get(chars, DEFAULT_ERD_CARDINALITY)


def sanitize_local_name(name: str) -> str:
    """Replace every character outside letters, digits and underscore with `_`"""
    return _NON_IRI_CHARS.sub("_", name)
