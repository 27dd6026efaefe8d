"""Offline demo records used when the Wikibase is not reachable."""

from src.config import settings
from src.models import Person


def sample_people(item_base_url: str = "") -> list[Person]:
    """Two-person demo family."""
    base = item_base_url or settings.wikibase.item_base_url
    return [
        Person(
            id="Q1",
            name="John Smith",
            birth_date="+1950-05-15T00:00:00Z",
            death_date="+2020-03-10T00:00:00Z",
            occupation="Engineer",
            residence="London, England",
            description="Family patriarch",
            wikibase_url=f"{base}Q1",
            aliases=["Johnny Smith"],
            birth_order="1"
        ),
        Person(
            id="Q2",
            name="Jane Smith",
            birth_date="+1955-08-20T00:00:00Z",
            occupation="Teacher",
            residence="London, England",
            description="Family matriarch",
            wikibase_url=f"{base}Q2",
            birth_order="2"
        )
    ]


class SampleDataSource:
    """DataSource serving a fixed person list."""

    def __init__(self, people: list[Person] = None):
        self._people = list(people) if people is not None else sample_people()

    async def fetch_people(self) -> list[Person]:
        return list(self._people)
