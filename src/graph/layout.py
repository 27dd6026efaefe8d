"""Hierarchical tree layout.

Leaves are placed left to right at a running cursor; every internal node is
centered between its first and last child. Sibling subtrees therefore never
overlap and each parent sits over the middle of its children.
"""

from typing import Optional

from src.graph.models import LayoutNode, Link, Orientation, TreeLayout, TreeNode

# (sibling spacing, depth spacing) sized for 240x64 node cards
DEFAULT_SPACING = {
    Orientation.VERTICAL: (260.0, 120.0),
    Orientation.HORIZONTAL: (90.0, 300.0),
}


def layout(
    root: Optional[TreeNode],
    orientation: Orientation = Orientation.VERTICAL,
    sibling_spacing: Optional[float] = None,
    depth_spacing: Optional[float] = None
) -> TreeLayout:
    """
    Assign coordinates to every node of a tree.

    Args:
        root: Tree to lay out; None gives an empty layout
        orientation: vertical maps the sibling axis to x, horizontal to y
        sibling_spacing: Distance between adjacent leaves
        depth_spacing: Distance between generations

    Returns:
        TreeLayout with one LayoutNode per tree node (pre-order) and one
        Link per parent-child edge. The root is at sibling coordinate 0.
    """
    orientation = Orientation(orientation)
    if root is None:
        return TreeLayout(orientation=orientation)

    default_sibling, default_depth = DEFAULT_SPACING[orientation]
    sibling_spacing = default_sibling if sibling_spacing is None else sibling_spacing
    depth_spacing = default_depth if depth_spacing is None else depth_spacing

    breadth = _assign_breadth(root, sibling_spacing)
    offset = breadth[id(root)]

    nodes: list[LayoutNode] = []
    links: list[Link] = []

    def place(node: TreeNode, parent: Optional[LayoutNode]) -> None:
        b = breadth[id(node)] - offset
        r = node.depth * depth_spacing
        x, y = (b, r) if orientation == Orientation.VERTICAL else (r, b)
        placed = LayoutNode(
            id=node.id,
            name=node.name,
            depth=node.depth,
            breadth=b,
            rank=r,
            x=x,
            y=y,
            parent_id=parent.id if parent else None,
            birth_year=node.birth_year,
            death_year=node.death_year,
            image_url=node.image_url
        )
        nodes.append(placed)
        if parent is not None:
            links.append(Link(source=parent, target=placed))
        for child in node.children:
            place(child, placed)

    place(root, None)
    return TreeLayout(nodes=nodes, links=links, orientation=orientation)


def _assign_breadth(root: TreeNode, spacing: float) -> dict[int, float]:
    """Post-order pass: sibling-axis coordinate per node, keyed by id(node)."""
    breadth: dict[int, float] = {}
    cursor = 0.0

    def visit(node: TreeNode) -> float:
        nonlocal cursor
        if not node.children:
            value = cursor
            cursor += spacing
        else:
            child_values = [visit(child) for child in node.children]
            value = (child_values[0] + child_values[-1]) / 2
        breadth[id(node)] = value
        return value

    visit(root)
    return breadth
