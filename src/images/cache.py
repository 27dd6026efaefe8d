"""Per-resolver cache of image lookups."""

from typing import Optional


class ImageCache:
    """Person id -> list of image URLs, plus per-file probe results."""

    def __init__(self):
        self._images: dict[str, list[str]] = {}
        self._probes: dict[str, Optional[str]] = {}

    def get_images(self, person_id: str) -> Optional[list[str]]:
        images = self._images.get(person_id)
        return list(images) if images is not None else None

    def set_images(self, person_id: str, images: list[str]) -> None:
        self._images[person_id] = list(images)

    def has_probe(self, stem: str) -> bool:
        return stem in self._probes

    def get_probe(self, stem: str) -> Optional[str]:
        return self._probes.get(stem)

    def set_probe(self, stem: str, url: Optional[str]) -> None:
        self._probes[stem] = url

    def clear(self) -> None:
        self._images.clear()
        self._probes.clear()

    def __len__(self) -> int:
        return len(self._images)
