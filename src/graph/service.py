"""Main FamilyTreeService facade combining the tree pipeline steps."""

import itertools
import logging
from typing import Hashable, Iterable, Optional, Protocol

from src.config import TreeSettings, settings
from src.errors import RenderCancelled
from src.models import Person
from src.graph.builder import TreeBuilder
from src.graph.enrichment import ImageResolver, TreeEnricher
from src.graph.layout import layout
from src.graph.models import (
    LayoutNode, Orientation, TreeLayout, TreeNode, TreeOptions, TreeRender, ViewportTransform
)
from src.graph.repository import PersonRepository
from src.graph.viewport import center_on

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    """Supplies the full person collection."""

    async def fetch_people(self) -> list[Person]:
        ...


class FamilyTreeService:
    """
    Main interface for the presentation layer.

    Owns the current person repository and runs the render pipeline:
    build tree -> resolve images -> layout -> center viewport.

    Usage:
        service = FamilyTreeService(resolver=AssetImageResolver())
        await service.refresh(WikibaseClient())
        render = await service.render("Q1")
    """

    def __init__(
        self,
        repository: Optional[PersonRepository] = None,
        resolver: Optional[ImageResolver] = None,
        tree_settings: Optional[TreeSettings] = None
    ):
        self.repository = repository or PersonRepository()
        self.resolver = resolver
        self.tree_settings = tree_settings or settings.tree
        # Latest generation per in-flight render session
        self._generations: dict[Hashable, int] = {}
        self._counter = itertools.count(1)

    # ─────────────────────────────────────────
    # Data
    # ─────────────────────────────────────────

    def load(self, people: Iterable[Person]) -> int:
        """Replace the repository with a new index over people.

        Also drops the resolver's cached image lookups, so images added
        since the last load are found.
        """
        self.repository = PersonRepository.index(people)
        clear_cache = getattr(self.resolver, "clear_cache", None)
        if clear_cache is not None:
            clear_cache()
        logger.info("Loaded %d people", len(self.repository))
        return len(self.repository)

    async def refresh(self, source: DataSource) -> int:
        """Fetch people from source and swap in a new repository.

        DataSourceError propagates; the current repository is kept.
        """
        people = await source.fetch_people()
        return self.load(people)

    @property
    def people(self) -> list[Person]:
        return self.repository.all()

    def get_person(self, person_id: str) -> Optional[Person]:
        return self.repository.by_id(person_id)

    # ─────────────────────────────────────────
    # Pipeline steps (delegated)
    # ─────────────────────────────────────────

    def default_options(self) -> TreeOptions:
        return TreeOptions.from_settings(self.tree_settings)

    def build_tree(self, root_id: str, options: Optional[TreeOptions] = None) -> Optional[TreeNode]:
        return TreeBuilder(self.repository).build(root_id, options or self.default_options())

    async def enrich(self, tree: TreeNode) -> TreeNode:
        if self.resolver is None:
            return tree
        enricher = TreeEnricher(self.resolver, self.tree_settings.enrichment_concurrency)
        return await enricher.enrich(tree)

    def layout(self, tree: Optional[TreeNode], orientation: Optional[Orientation] = None) -> TreeLayout:
        return layout(tree, orientation or Orientation(self.tree_settings.orientation))

    def center_on(
        self,
        nodes: list[LayoutNode],
        root_id: str,
        viewport_width: Optional[float] = None
    ) -> ViewportTransform:
        width = self.tree_settings.viewport_width if viewport_width is None else viewport_width
        return center_on(nodes, root_id, width, self.tree_settings.vertical_offset)

    # ─────────────────────────────────────────
    # Full render
    # ─────────────────────────────────────────

    def cancel(self, session: Optional[Hashable] = None) -> None:
        """Supersede the render in progress for session, or every render when session is None."""
        if session is None:
            self._generations.clear()
        else:
            self._generations.pop(session, None)

    async def render(
        self,
        root_id: str,
        options: Optional[TreeOptions] = None,
        orientation: Optional[Orientation] = None,
        viewport_width: Optional[float] = None,
        include_images: bool = True,
        session: Optional[Hashable] = None
    ) -> Optional[TreeRender]:
        """
        Run the full pipeline for root_id.

        Renders sharing a session supersede each other: only the latest one
        for a session completes. Without a session a render is only ever
        superseded by cancel().

        Returns:
            TreeRender, or None when root_id is not a known person

        Raises:
            RenderCancelled: a newer render in the same session or cancel()
                superseded this one
        """
        key = object() if session is None else session
        generation = next(self._counter)
        self._generations[key] = generation

        def is_current() -> bool:
            return self._generations.get(key) == generation

        try:
            # Pin the repository so a concurrent refresh cannot change it mid-render
            repository = self.repository
            tree = TreeBuilder(repository).build(root_id, options or self.default_options())
            if tree is None:
                return None

            if include_images and self.resolver is not None:
                enricher = TreeEnricher(self.resolver, self.tree_settings.enrichment_concurrency)
                await enricher.enrich(tree, is_current=is_current)

            if not is_current():
                logger.info("Render of %s superseded, discarding", root_id)
                raise RenderCancelled(root_id, generation)
        finally:
            if is_current():
                del self._generations[key]

        tree_layout = self.layout(tree, orientation)
        transform = self.center_on(tree_layout.nodes, root_id, viewport_width)
        logger.info("Rendered %s: %d nodes, %d links", root_id, len(tree_layout.nodes), len(tree_layout.links))
        return TreeRender(root_id=root_id, tree=tree, layout=tree_layout, transform=transform)
