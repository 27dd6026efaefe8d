"""In-memory index over the loaded person records."""

import logging
from collections import defaultdict
from typing import Iterable, Iterator, Optional

from src.models import Person

logger = logging.getLogger(__name__)


class PersonRepository:
    """
    Indexed, read-only view of a person collection.

    Lookups by id and reverse lookups (children of a person) are O(1).
    The index is never patched: a data refresh builds a new repository.

    Usage:
        repo = PersonRepository.index(people)
        repo.by_id("Q1")
        repo.children_of("Q1")
    """

    def __init__(self, people: Iterable[Person] = ()):
        self._by_id: dict[str, Person] = {}
        self._children: dict[str, list[Person]] = defaultdict(list)

        for person in people:
            if person.id in self._by_id:
                logger.warning("Duplicate person id %s ignored", person.id)
                continue
            self._by_id[person.id] = person

        for person in self._by_id.values():
            # dict.fromkeys keeps order and collapses father == mother
            for parent_id in dict.fromkeys((person.father_id, person.mother_id)):
                if parent_id:
                    self._children[parent_id].append(person)

    @classmethod
    def index(cls, people: Iterable[Person]) -> "PersonRepository":
        """Build a repository from a person collection."""
        return cls(people)

    def by_id(self, person_id: Optional[str]) -> Optional[Person]:
        """Get person by id, or None when unknown."""
        if not person_id:
            return None
        return self._by_id.get(person_id)

    def children_of(self, person_id: str) -> list[Person]:
        """Persons whose father or mother is person_id, in source order."""
        return list(self._children.get(person_id, ()))

    def parents_of(self, person_id: str) -> list[Person]:
        """Resolved father then mother; dangling references are skipped."""
        person = self.by_id(person_id)
        if not person:
            return []
        parents = []
        for parent_id in (person.father_id, person.mother_id):
            parent = self.by_id(parent_id)
            if parent and parent not in parents:
                parents.append(parent)
        return parents

    def all(self) -> list[Person]:
        return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._by_id

    def __iter__(self) -> Iterator[Person]:
        return iter(self._by_id.values())
