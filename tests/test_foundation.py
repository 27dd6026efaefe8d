"""Foundation tests: configuration and person model."""

import pytest
from pydantic import ValidationError


class TestConfiguration:
    """Test configuration loading."""

    def test_settings_import(self):
        """Settings module should import without error."""
        from src.config import settings
        assert settings is not None

    def test_tree_defaults(self):
        """Tree settings default to a five-generation ancestor view."""
        from src.config import TreeSettings
        tree = TreeSettings()
        assert tree.direction == "ancestors"
        assert tree.max_depth == 5
        assert tree.include_both_parents is True
        assert tree.orientation == "vertical"
        assert tree.enrichment_concurrency == 4

    def test_tree_env_override(self, monkeypatch):
        """TREE_ variables override defaults."""
        from src.config import TreeSettings
        monkeypatch.setenv("TREE_MAX_DEPTH", "2")
        monkeypatch.setenv("TREE_ORIENTATION", "horizontal")
        tree = TreeSettings()
        assert tree.max_depth == 2
        assert tree.orientation == "horizontal"

    def test_wikibase_defaults(self):
        """Wikibase settings point at a SPARQL endpoint with property ids."""
        from src.config import WikibaseSettings
        wb = WikibaseSettings()
        assert wb.sparql_endpoint.endswith("/sparql")
        assert wb.father_prop == "P4"
        assert wb.mother_prop == "P5"
        assert wb.timeout_seconds == 10.0

    def test_image_defaults(self):
        """Image lookup checks the usual web formats."""
        from src.config import ImageSettings
        images = ImageSettings()
        assert images.source == "assets"
        assert ".jpg" in images.extensions

    def test_api_defaults(self, monkeypatch):
        """Server binding comes from API_ variables."""
        from src.config import ApiSettings
        assert ApiSettings().port == 8000
        monkeypatch.setenv("API_PORT", "9000")
        monkeypatch.setenv("API_HOST", "127.0.0.1")
        api = ApiSettings()
        assert api.port == 9000
        assert api.host == "127.0.0.1"

    def test_tree_options_from_settings(self):
        """TreeOptions picks up TreeSettings values."""
        from src.config import TreeSettings
        from src.graph.models import Direction, TreeOptions
        options = TreeOptions.from_settings(TreeSettings(direction="descendants", max_depth=3))
        assert options.direction == Direction.DESCENDANTS
        assert options.max_depth == 3


class TestPersonModel:
    """Test the Person record."""

    def test_person_creation(self):
        """Person accepts registry fields."""
        from src.models import Person
        p = Person(id="Q1", name="John Smith", father_id="Q2", aliases=["Johnny"])
        assert p.id == "Q1"
        assert p.mother_id is None
        assert p.aliases == ["Johnny"]

    def test_person_requires_id(self):
        """Identifier is mandatory."""
        from src.models import Person
        with pytest.raises(ValidationError):
            Person(name="No Id")

    def test_person_is_immutable(self):
        """Identifiers cannot be reassigned."""
        from src.models import Person
        p = Person(id="Q1")
        with pytest.raises(ValidationError):
            p.id = "Q2"

    def test_derived_fields(self):
        """Years and age derive from Wikibase time values."""
        from src.models import Person
        p = Person(id="Q1", birth_date="+1950-05-15T00:00:00Z", death_date="+2020-03-10T00:00:00Z")
        assert p.display_name == "Q1"
        assert p.birth_year == "1950"
        assert p.death_year == "2020"
        assert p.age == 70

    def test_to_dict(self):
        """API dictionary includes derived fields."""
        from src.models import Person
        data = Person(id="Q1", name="John", birth_date="+1950-05-15T00:00:00Z").to_dict()
        assert data["name"] == "John"
        assert data["birth_year"] == "1950"
        assert data["death_year"] is None
