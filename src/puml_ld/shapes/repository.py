import re
from logging import getLogger
from pathlib import Path
from typing import List, Optional, Union

logger = getLogger(__name__)

SHAPE_SUFFIX = "_shape.ttl"
_SHAPE_NAME = re.compile(r"^\w+$")


class ShapeRepository:
    """Looks up pre-authored SHACL shapes (Turtle files) by diagram type name.

    A shape for `Class` lives in `class_shape.ttl`. Lookup is case-insensitive
    and plain filename based; shapes are returned as text, never parsed.
    """

    def __init__(self, shapes_dir: Union[str, Path]):
        self.shapes_dir = Path(shapes_dir)

    def get_shape(self, diagram_type: str) -> Optional[str]:
        """Return the Turtle text of the shape for `diagram_type`, or None if there is none"""
        if not _SHAPE_NAME.match(diagram_type):
            logger.warning(f"Rejected shape name: {diagram_type!r}")
            return None

        shape_file = self.shapes_dir / f"{diagram_type.lower()}{SHAPE_SUFFIX}"
        if not shape_file.is_file():
            return None
        return shape_file.read_text(encoding="utf-8")

    def list_shapes(self) -> List[str]:
        """Names of the available shapes, sorted"""
        return sorted(
            path.name[: -len(SHAPE_SUFFIX)].capitalize()
            for path in self.shapes_dir.glob(f"*{SHAPE_SUFFIX}")
        )
