"""Initial viewport transform for a laid-out tree."""

from typing import Sequence

from src.graph.models import LayoutNode, ViewportTransform

DEFAULT_VERTICAL_OFFSET = 20.0


def center_on(
    nodes: Sequence[LayoutNode],
    root_id: str,
    viewport_width: float,
    vertical_offset: float = DEFAULT_VERTICAL_OFFSET
) -> ViewportTransform:
    """
    Translate so the root node sits at the horizontal middle of the viewport.

    Falls back to the identity transform when root_id is not among nodes.
    """
    root = next((node for node in nodes if node.id == root_id), None)
    if root is None:
        return ViewportTransform()

    return ViewportTransform(
        translate_x=viewport_width / 2 - root.x,
        translate_y=vertical_offset,
        scale=1.0
    )
