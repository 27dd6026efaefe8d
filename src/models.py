"""Data models for the family registry."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from src.utils.dates import extract_year, calculate_age


class Person(BaseModel):
    """Person record as loaded from the registry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    father_id: Optional[str] = None
    mother_id: Optional[str] = None
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    birth_order: Optional[str] = None
    occupation: Optional[str] = None
    residence: Optional[str] = None
    description: Optional[str] = None
    wikibase_url: Optional[str] = None
    aliases: list[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Name shown in the tree, falling back to the identifier."""
        return self.name or self.id

    @property
    def birth_year(self) -> Optional[str]:
        return extract_year(self.birth_date)

    @property
    def death_year(self) -> Optional[str]:
        return extract_year(self.death_date)

    @property
    def age(self) -> Optional[int]:
        """Age at death, or current age for living persons."""
        return calculate_age(self.birth_date, self.death_date)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        data = self.model_dump()
        data["birth_year"] = self.birth_year
        data["death_year"] = self.death_year
        data["age"] = self.age
        return data
