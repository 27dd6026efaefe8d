"""Exceptions raised by the family tree engine and its collaborators."""


class FamilyTreeError(Exception):
    """Base class for all family tree errors."""


class DataSourceError(FamilyTreeError):
    """Person records could not be fetched from the data source."""


class DataSourceTimeout(DataSourceError):
    """The data source did not answer within the configured timeout."""


class RenderCancelled(FamilyTreeError):
    """A render was superseded by a newer render or an explicit cancel."""

    def __init__(self, root_id: str, generation: int):
        super().__init__(f"Render of {root_id} (generation {generation}) was superseded")
        self.root_id = root_id
        self.generation = generation
