"""
Output Normalization — RenderTree → plain JSON-compatible dict.
"""
from typing import Iterable, List

from src.models.render_nodes import RenderTree


def lines_to_lists(lines: Iterable) -> List[list]:
    """Convert memoized tuples of nodes into the list-of-lists the tree carries."""
    return [list(line) for line in lines]


def build_render_tree_dict(tree: RenderTree) -> dict:
    """
    Serialize a RenderTree conforming to RENDER_TREE_SCHEMA.

    Absent sections are serialized as null so hosts can rely on every key
    being present.
    """
    return tree.model_dump(mode="json")
