"""Test the FastAPI backend."""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.main import NO_DATA_MESSAGE, create_app
from src.config import TreeSettings
from src.errors import DataSourceError
from src.graph.service import FamilyTreeService
from src.models import Person
from src.wikibase.sample import SampleDataSource

PEOPLE = [
    Person(id="Q1", name="Child", father_id="Q2", mother_id="Q3", birth_date="+1980-01-01T00:00:00Z"),
    Person(id="Q2", name="Father"),
    Person(id="Q3", name="Mother"),
    Person(id="Q4", name="Grandchild", father_id="Q1"),
]


class FlakySource:
    """Succeeds once, then fails."""

    def __init__(self):
        self.calls = 0

    async def fetch_people(self):
        self.calls += 1
        if self.calls > 1:
            raise DataSourceError("Request timed out.")
        return PEOPLE


class ImageStub:
    async def resolve(self, person_id):
        return f"assets/{person_id}.jpg" if person_id == "Q1" else None


@pytest.fixture
def client():
    """API client with four people loaded at startup."""
    service = FamilyTreeService(resolver=ImageStub(), tree_settings=TreeSettings())
    app = create_app(service=service, source=FlakySource())
    with TestClient(app) as test_client:
        yield test_client


class TestPeople:
    """Tests for person endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "people": 4}

    def test_list_people(self, client):
        data = client.get("/api/people").json()
        assert [p["id"] for p in data] == ["Q1", "Q2", "Q3", "Q4"]
        assert data[0]["birth_year"] == "1980"

    def test_get_person(self, client):
        response = client.get("/api/people/Q2")
        assert response.status_code == 200
        assert response.json()["name"] == "Father"

    def test_get_person_missing(self, client):
        assert client.get("/api/people/Q999").status_code == 404


class TestTree:
    """Tests for the tree endpoint."""

    def test_ancestor_tree(self, client):
        """Default request renders ancestors with images and transform."""
        data = client.get("/api/tree/Q1", params={"viewport_width": 1000}).json()
        assert data["root_id"] == "Q1"
        assert [n["id"] for n in data["nodes"]] == ["Q1", "Q2", "Q3"]
        assert len(data["links"]) == 2
        assert data["nodes"][0]["image_url"] == "assets/Q1.jpg"
        assert data["transform"]["translate_x"] == 500 - data["nodes"][0]["x"]

    def test_query_options(self, client):
        """Direction, depth and orientation come from the query string."""
        data = client.get("/api/tree/Q2", params={
            "direction": "descendants",
            "max_depth": 1,
            "orientation": "horizontal",
            "include_images": False,
        }).json()
        assert [n["id"] for n in data["nodes"]] == ["Q2", "Q1"]
        assert data["orientation"] == "horizontal"
        assert data["nodes"][0]["image_url"] is None

    def test_fathers_only(self, client):
        data = client.get("/api/tree/Q1", params={"include_both_parents": False}).json()
        assert [n["id"] for n in data["nodes"]] == ["Q1", "Q2"]

    def test_missing_root(self, client):
        """Unknown root is an empty, displayable result."""
        response = client.get("/api/tree/Q999")
        assert response.status_code == 200
        data = response.json()
        assert data["tree"] is None
        assert data["nodes"] == []
        assert data["links"] == []
        assert data["message"] == NO_DATA_MESSAGE

    def test_invalid_options(self, client):
        assert client.get("/api/tree/Q1", params={"direction": "sideways"}).status_code == 422
        assert client.get("/api/tree/Q1", params={"max_depth": -1}).status_code == 422


class TestRefresh:
    """Tests for reloading data."""

    def test_refresh_failure(self, client):
        """A failing data source maps to 503 and keeps the data."""
        response = client.post("/api/refresh")
        assert response.status_code == 503
        assert "timed out" in response.json()["detail"]
        assert client.get("/api/health").json()["people"] == 4

    def test_refresh(self):
        service = FamilyTreeService(tree_settings=TreeSettings())
        with TestClient(create_app(service=service, source=SampleDataSource())) as client:
            response = client.post("/api/refresh")
            assert response.json() == {"success": True, "people": 2}

    def test_startup_failure_starts_empty(self):
        """The app still starts when the first load fails."""
        source = FlakySource()
        source.calls = 1
        service = FamilyTreeService(tree_settings=TreeSettings())
        with TestClient(create_app(service=service, source=source)) as client:
            assert client.get("/api/health").json()["people"] == 0
            assert client.get("/api/tree/Q1").json()["nodes"] == []


class GatedImages:
    """Resolver that holds every lookup until released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls: list[str] = []
        self.closed = False

    async def resolve(self, person_id):
        self.calls.append(person_id)
        await self.release.wait()
        return None

    async def aclose(self):
        self.closed = True


async def wait_for_calls(resolver, count):
    for _ in range(200):
        if len(resolver.calls) >= count:
            return
        await asyncio.sleep(0.01)
    raise AssertionError(f"expected {count} lookups, saw {resolver.calls}")


def overlapping_trees(first_session, second_session):
    """Request Q1 then Q2 so both renders are in flight together."""
    resolver = GatedImages()
    service = FamilyTreeService(resolver=resolver, tree_settings=TreeSettings())
    service.load(PEOPLE)
    app = create_app(service=service, source=FlakySource())

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            first = asyncio.create_task(client.get("/api/tree/Q1", params=first_session))
            await wait_for_calls(resolver, 3)
            second = asyncio.create_task(client.get("/api/tree/Q2", params=second_session))
            await wait_for_calls(resolver, 4)
            resolver.release.set()
            return await asyncio.gather(first, second)

    return asyncio.run(run())


class TestSessions:
    """Tests for concurrent tree requests."""

    def test_different_sessions_both_render(self):
        first, second = overlapping_trees({"session": "a"}, {"session": "b"})
        assert [first.status_code, second.status_code] == [200, 200]
        assert first.json()["root_id"] == "Q1"
        assert second.json()["root_id"] == "Q2"

    def test_no_session_both_render(self):
        first, second = overlapping_trees({}, {})
        assert [first.status_code, second.status_code] == [200, 200]

    def test_same_session_superseded(self):
        """The older request of a session gets 409."""
        first, second = overlapping_trees({"session": "a"}, {"session": "a"})
        assert first.status_code == 409
        assert "Q1" in first.json()["detail"]
        assert second.status_code == 200
        assert second.json()["root_id"] == "Q2"


class TestShutdown:
    """Tests for releasing resources."""

    def test_resolver_closed(self):
        """The resolver's HTTP client is closed when the app stops."""
        resolver = GatedImages()
        service = FamilyTreeService(resolver=resolver, tree_settings=TreeSettings())
        with TestClient(create_app(service=service, source=SampleDataSource())) as client:
            assert client.get("/api/health").status_code == 200
            assert resolver.closed is False
        assert resolver.closed is True

    def test_resolver_without_close(self, client):
        """Resolvers without aclose() shut down quietly."""
        assert client.get("/api/health").status_code == 200

    def test_malformed_source_starts_empty(self):
        """A Wikibase body that is not SPARQL JSON leaves the app serving no data."""
        from src.config import WikibaseSettings
        from src.wikibase.client import WikibaseClient

        source = WikibaseClient(
            WikibaseSettings(),
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[1]))
        )
        service = FamilyTreeService(tree_settings=TreeSettings())
        with TestClient(create_app(service=service, source=source)) as client:
            assert client.get("/api/health").json()["people"] == 0
            assert client.post("/api/refresh").status_code == 503
