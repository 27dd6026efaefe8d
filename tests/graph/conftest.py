"""Pytest fixtures for graph tests."""

import pytest
from src.models import Person
from src.graph.repository import PersonRepository


def _make_people(*rows) -> list[Person]:
    """Build persons from (id, father_id, mother_id) tuples."""
    people = []
    for row in rows:
        person_id, father, mother = (tuple(row) + (None, None))[:3]
        people.append(Person(id=person_id, name=f"Name {person_id}", father_id=father, mother_id=mother))
    return people


@pytest.fixture
def family():
    """
    Three generations:

        Q10 + Q11     Q12 + Q13
            |             |
           Q3     +      Q4
                  |
            Q1 (root), Q5
                  |
                  Q6
    """
    return _make_people(
        ("Q1", "Q3", "Q4"),
        ("Q3", "Q10", "Q11"),
        ("Q4", "Q12", "Q13"),
        ("Q5", "Q3", "Q4"),
        ("Q6", "Q1"),
        ("Q10",), ("Q11",), ("Q12",), ("Q13",),
    )


@pytest.fixture
def repository(family):
    """Repository over the three-generation family."""
    return PersonRepository.index(family)


class StubResolver:
    """ImageResolver returning fixed URLs and recording calls."""

    def __init__(self, images: dict = None, fail: set = None):
        self.images = images or {}
        self.fail = fail or set()
        self.calls: list[str] = []

    async def resolve(self, person_id: str):
        self.calls.append(person_id)
        if person_id in self.fail:
            raise RuntimeError(f"lookup failed for {person_id}")
        return self.images.get(person_id)


@pytest.fixture
def resolver():
    """Resolver with images for the root and its father."""
    return StubResolver(images={"Q1": "assets/Q1.jpg", "Q3": "assets/Q3.png"})


@pytest.fixture
def make_people():
    """Factory: make_people(("Q1", "Q2"), ("Q2",)) -> list[Person]."""
    return _make_people


@pytest.fixture
def make_resolver():
    """Factory for StubResolver instances."""
    return StubResolver
