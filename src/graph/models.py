"""Shared data models for tree construction and layout."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class Direction(str, Enum):
    """Which relatives a tree expands toward."""
    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    BOTH = "both"  # ancestors, plus direct children at the root


class Orientation(str, Enum):
    """Screen-axis mapping of a layout."""
    VERTICAL = "vertical"      # grows downward
    HORIZONTAL = "horizontal"  # grows rightward


@dataclass
class TreeOptions:
    """Traversal options for a single tree build."""
    direction: Direction = Direction.ANCESTORS
    max_depth: int = 5
    include_both_parents: bool = True

    def __post_init__(self):
        self.direction = Direction(self.direction)
        self.max_depth = int(self.max_depth)
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")

    @classmethod
    def from_settings(cls, tree_settings=None) -> "TreeOptions":
        """Build options from TreeSettings (defaults to the global settings)."""
        if tree_settings is None:
            from src.config import settings
            tree_settings = settings.tree
        return cls(
            direction=tree_settings.direction,
            max_depth=tree_settings.max_depth,
            include_both_parents=tree_settings.include_both_parents,
        )


@dataclass
class TreeNode:
    """A person's position in one rendered tree."""
    id: str
    name: str
    depth: int = 0
    birth_year: Optional[str] = None
    death_year: Optional[str] = None
    image_url: Optional[str] = None
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and every node below it in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def height(self) -> int:
        """Number of generations below this node."""
        if not self.children:
            return 0
        return 1 + max(child.height() for child in self.children)

    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "depth": self.depth,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "image_url": self.image_url,
            "children": [child.to_dict() for child in self.children]
        }


@dataclass
class LayoutNode:
    """Tree node with assigned coordinates.

    ``breadth`` is the sibling-axis coordinate and ``rank`` the depth-axis
    coordinate; ``x``/``y`` are the same values mapped to screen axes.
    """
    id: str
    name: str
    depth: int
    breadth: float
    rank: float
    x: float
    y: float
    parent_id: Optional[str] = None
    birth_year: Optional[str] = None
    death_year: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "depth": self.depth,
            "parent_id": self.parent_id,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "image_url": self.image_url,
            "x": self.x,
            "y": self.y
        }


@dataclass
class Link:
    """Parent-child edge between two laid-out nodes."""
    source: LayoutNode
    target: LayoutNode

    def to_dict(self) -> dict:
        return {
            "source": {"id": self.source.id, "x": self.source.x, "y": self.source.y},
            "target": {"id": self.target.id, "x": self.target.x, "y": self.target.y}
        }


@dataclass
class TreeLayout:
    """Flat nodes and links produced by the layout engine."""
    nodes: list[LayoutNode] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    orientation: Orientation = Orientation.VERTICAL

    def node(self, person_id: str) -> Optional[LayoutNode]:
        """Find a laid-out node by person id."""
        for node in self.nodes:
            if node.id == person_id:
                return node
        return None

    @property
    def max_depth(self) -> int:
        return max((n.depth for n in self.nodes), default=0)

    def extent(self) -> tuple[float, float]:
        """Width and height of the bounding box of all node positions."""
        if not self.nodes:
            return 0.0, 0.0
        xs = [n.x for n in self.nodes]
        ys = [n.y for n in self.nodes]
        return max(xs) - min(xs), max(ys) - min(ys)

    def to_dict(self) -> dict:
        return {
            "orientation": self.orientation.value,
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links]
        }


@dataclass
class ViewportTransform:
    """Initial pan/zoom transform for the rendered tree."""
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    def to_dict(self) -> dict:
        return {
            "translate_x": self.translate_x,
            "translate_y": self.translate_y,
            "scale": self.scale
        }


@dataclass
class TreeRender:
    """Everything the presentation layer needs to draw one tree."""
    root_id: str
    tree: TreeNode
    layout: TreeLayout
    transform: ViewportTransform

    def to_dict(self) -> dict:
        data = {"root_id": self.root_id, "tree": self.tree.to_dict()}
        data.update(self.layout.to_dict())
        data["transform"] = self.transform.to_dict()
        return data
