"""Build bounded ancestor and descendant trees from the person repository."""

import logging
from typing import Optional

from src.models import Person
from src.graph.models import Direction, TreeNode, TreeOptions
from src.graph.repository import PersonRepository

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Depth-first tree construction rooted at one person.

    Every call to build() uses its own visited set, so a person appears at
    most once per tree and parent cycles in the data cannot loop.
    """

    def __init__(self, repository: PersonRepository):
        self.repository = repository

    def build(self, root_id: str, options: Optional[TreeOptions] = None) -> Optional[TreeNode]:
        """
        Build the tree for root_id.

        Args:
            root_id: Person id at depth 0
            options: Direction, depth bound and parent selection

        Returns:
            Root TreeNode, or None when root_id is not a known person
        """
        options = options or TreeOptions()

        if options.direction == Direction.BOTH:
            root = self._build_combined(root_id, options)
        else:
            root = self._expand(root_id, 0, options.direction, options, set())

        if root is None:
            logger.info("No person %s in repository, nothing to build", root_id)
        else:
            logger.debug(
                "Built %s tree for %s: %d nodes",
                options.direction.value, root_id, sum(1 for _ in root.walk())
            )
        return root

    def _build_combined(self, root_id: str, options: TreeOptions) -> Optional[TreeNode]:
        """Ancestors of the root plus its direct children, from two separate builds."""
        ancestors = self._expand(root_id, 0, Direction.ANCESTORS, options, set())
        if ancestors is None:
            return None

        descendants = self._expand(
            root_id, 0, Direction.DESCENDANTS,
            TreeOptions(Direction.DESCENDANTS, min(options.max_depth, 1)), set()
        )
        if descendants:
            seen = {node.id for node in ancestors.walk()}
            ancestors.children.extend(c for c in descendants.children if c.id not in seen)
        return ancestors

    def _expand(
        self,
        person_id: Optional[str],
        depth: int,
        direction: Direction,
        options: TreeOptions,
        visited: set[str]
    ) -> Optional[TreeNode]:
        if not person_id or person_id in visited:
            return None

        person = self.repository.by_id(person_id)
        if person is None:
            return None

        visited.add(person_id)
        node = self._make_node(person, depth)

        # Nodes at max_depth are kept, their relatives are not explored
        if depth >= options.max_depth:
            return node

        for next_id in self._next_ids(person, direction, options):
            child = self._expand(next_id, depth + 1, direction, options, visited)
            if child is not None:
                node.children.append(child)

        return node

    def _next_ids(self, person: Person, direction: Direction, options: TreeOptions) -> list[str]:
        if direction == Direction.ANCESTORS:
            ids = [person.father_id]
            if options.include_both_parents:
                ids.append(person.mother_id)
            return [pid for pid in ids if pid]
        return [child.id for child in self.repository.children_of(person.id)]

    @staticmethod
    def _make_node(person: Person, depth: int) -> TreeNode:
        return TreeNode(
            id=person.id,
            name=person.display_name,
            depth=depth,
            birth_year=person.birth_year,
            death_year=person.death_year
        )


def build_tree(
    root_id: str,
    repository: PersonRepository,
    options: Optional[TreeOptions] = None
) -> Optional[TreeNode]:
    """Build a tree for root_id; see TreeBuilder.build."""
    return TreeBuilder(repository).build(root_id, options)
