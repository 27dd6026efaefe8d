"""Attach person images to a fully built tree."""

import asyncio
import logging
from typing import Callable, Optional, Protocol

from src.graph.models import TreeNode

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


class ImageResolver(Protocol):
    """Maps a person id to a displayable image URL."""

    async def resolve(self, person_id: str) -> Optional[str]:
        ...


class TreeEnricher:
    """
    Resolve an image for every node of a tree with bounded concurrency.

    The tree shape must be complete before enrich() is called; enrich()
    returns only after every lookup has succeeded or failed. A lookup
    failure leaves the node without an image.
    """

    def __init__(self, resolver: ImageResolver, concurrency: int = DEFAULT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.resolver = resolver
        self.concurrency = concurrency

    async def enrich(
        self,
        root: TreeNode,
        is_current: Optional[Callable[[], bool]] = None
    ) -> TreeNode:
        """
        Resolve images for all nodes under root.

        Args:
            root: Fully built tree
            is_current: Generation check; results arriving once it returns
                False are dropped instead of applied

        Returns:
            The same root, for chaining
        """
        semaphore = asyncio.Semaphore(self.concurrency)
        nodes = list(root.walk())

        async def enrich_one(node: TreeNode) -> None:
            async with semaphore:
                if is_current is not None and not is_current():
                    return
                image_url = await self._lookup(node.id)
            if is_current is not None and not is_current():
                logger.debug("Dropping stale image result for %s", node.id)
                return
            if image_url:
                node.image_url = image_url

        await asyncio.gather(*(enrich_one(node) for node in nodes))
        logger.debug(
            "Enriched %d nodes, %d with images",
            len(nodes), sum(1 for n in nodes if n.image_url)
        )
        return root

    async def _lookup(self, person_id: str) -> Optional[str]:
        try:
            return await self.resolver.resolve(person_id)
        except Exception as e:
            logger.debug("Image lookup failed for %s: %s", person_id, e)
            return None


async def enrich(
    node: TreeNode,
    resolver: ImageResolver,
    concurrency: int = DEFAULT_CONCURRENCY
) -> TreeNode:
    """Resolve images for every node of a tree; see TreeEnricher.enrich."""
    return await TreeEnricher(resolver, concurrency).enrich(node)
