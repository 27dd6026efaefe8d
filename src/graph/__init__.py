"""Graph package - family tree construction and layout."""

from src.graph.models import (
    Direction,
    Orientation,
    TreeOptions,
    TreeNode,
    LayoutNode,
    Link,
    TreeLayout,
    ViewportTransform,
    TreeRender
)
from src.graph.repository import PersonRepository
from src.graph.builder import TreeBuilder, build_tree
from src.graph.enrichment import ImageResolver, TreeEnricher, enrich
from src.graph.layout import layout
from src.graph.viewport import center_on
from src.graph.service import DataSource, FamilyTreeService

__all__ = [
    "Direction",
    "Orientation",
    "TreeOptions",
    "TreeNode",
    "LayoutNode",
    "Link",
    "TreeLayout",
    "ViewportTransform",
    "TreeRender",
    "PersonRepository",
    "TreeBuilder",
    "build_tree",
    "ImageResolver",
    "TreeEnricher",
    "enrich",
    "layout",
    "center_on",
    "DataSource",
    "FamilyTreeService"
]
