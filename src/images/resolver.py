"""Image resolvers: find a person's pictures by file naming convention.

A person ``Q1`` has a main image ``Q1.<ext>`` and optional additional images
``Q1_1.<ext>``, ``Q1_2.<ext>``... numbered without gaps.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import httpx

from src.config import ImageSettings, settings
from src.images.cache import ImageCache

logger = logging.getLogger(__name__)


class _ConventionResolver:
    """Shared naming scheme and caching; subclasses implement _probe()."""

    def __init__(
        self,
        extensions: Optional[list[str]] = None,
        max_additional: int = 10,
        cache: Optional[ImageCache] = None
    ):
        self.extensions = extensions or list(settings.images.extensions)
        self.max_additional = max_additional
        self.cache = cache if cache is not None else ImageCache()

    async def _probe(self, stem: str) -> Optional[str]:
        """Return the URL of the first existing <stem><ext>, or None."""
        raise NotImplementedError

    async def _cached_probe(self, stem: str) -> Optional[str]:
        if self.cache.has_probe(stem):
            return self.cache.get_probe(stem)
        url = await self._probe(stem)
        self.cache.set_probe(stem, url)
        return url

    def clear_cache(self) -> None:
        """Forget every lookup, found or missing."""
        self.cache.clear()
        logger.debug("Image cache cleared")

    async def all_images(self, person_id: str) -> list[str]:
        """Main image first, then additional images until the first gap."""
        cached = self.cache.get_images(person_id)
        if cached is not None:
            return cached

        images = []
        main = await self._cached_probe(person_id)
        if main:
            images.append(main)

        for i in range(1, self.max_additional + 1):
            extra = await self._cached_probe(f"{person_id}_{i}")
            if not extra:
                break
            images.append(extra)

        self.cache.set_images(person_id, images)
        logger.debug("Found %d images for %s", len(images), person_id)
        return images

    async def resolve(self, person_id: str) -> Optional[str]:
        """Best image for a person: the first one found."""
        images = await self.all_images(person_id)
        return images[0] if images else None


class AssetImageResolver(_ConventionResolver):
    """Look up images in a local assets directory."""

    def __init__(
        self,
        assets_dir: Optional[str] = None,
        url_prefix: Optional[str] = None,
        extensions: Optional[list[str]] = None,
        max_additional: Optional[int] = None,
        cache: Optional[ImageCache] = None
    ):
        cfg = settings.images
        super().__init__(
            extensions=extensions,
            max_additional=cfg.max_additional if max_additional is None else max_additional,
            cache=cache
        )
        self.assets_dir = Path(assets_dir or cfg.assets_dir)
        self.url_prefix = (cfg.url_prefix if url_prefix is None else url_prefix).rstrip("/")

    def _find_file(self, stem: str) -> Optional[str]:
        for ext in self.extensions:
            if (self.assets_dir / f"{stem}{ext}").is_file():
                return f"{self.url_prefix}/{stem}{ext}" if self.url_prefix else f"{stem}{ext}"
        return None

    async def _probe(self, stem: str) -> Optional[str]:
        return await asyncio.to_thread(self._find_file, stem)


class HttpImageResolver(_ConventionResolver):
    """Look up images on a web server with HEAD requests."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        extensions: Optional[list[str]] = None,
        max_additional: Optional[int] = None,
        cache: Optional[ImageCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        cfg = settings.images
        super().__init__(
            extensions=extensions,
            max_additional=cfg.max_additional if max_additional is None else max_additional,
            cache=cache
        )
        self.base_url = (base_url or cfg.http_base_url).rstrip("/")
        self.timeout = cfg.http_timeout_seconds if timeout is None else timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _probe(self, stem: str) -> Optional[str]:
        client = self._get_client()
        for ext in self.extensions:
            url = f"{self.base_url}/{stem}{ext}"
            try:
                response = await client.head(url)
            except httpx.HTTPError as e:
                logger.debug("Image lookup failed for %s: %s", url, e)
                continue
            if response.is_success:
                return url
        return None


def build_resolver(cfg: Optional[ImageSettings] = None):
    """Create the resolver selected by ImageSettings.source."""
    cfg = cfg or settings.images
    if cfg.source == "http":
        return HttpImageResolver(
            base_url=cfg.http_base_url,
            timeout=cfg.http_timeout_seconds,
            extensions=cfg.extensions,
            max_additional=cfg.max_additional
        )
    if cfg.source != "assets":
        raise ValueError(f"Unknown image source: {cfg.source}")
    return AssetImageResolver(
        assets_dir=cfg.assets_dir,
        url_prefix=cfg.url_prefix,
        extensions=cfg.extensions,
        max_additional=cfg.max_additional
    )
