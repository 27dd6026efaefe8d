"""Async HTTP client for the Wikibase SPARQL endpoint."""

import logging
from typing import Optional

import httpx

from src.config import WikibaseSettings, settings
from src.errors import DataSourceError, DataSourceTimeout
from src.models import Person
from src.wikibase.parser import parse_bindings
from src.wikibase.query import build_connection_query, build_people_query

logger = logging.getLogger(__name__)

SPARQL_JSON = "application/sparql-results+json"


class WikibaseClient:
    """Fetch person records from Wikibase over SPARQL."""

    def __init__(
        self,
        config: Optional[WikibaseSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            config: Endpoint and property settings (default: settings.wikibase)
            transport: Optional httpx transport, used by tests
        """
        self.config = config or settings.wikibase
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            headers={"Accept": SPARQL_JSON},
            transport=self._transport
        )

    async def _select(self, query: str) -> dict:
        """Run a SELECT query and return the decoded JSON body."""
        async with self._client() as client:
            response = await client.get(
                self.config.sparql_endpoint,
                params={"query": query, "format": "json"}
            )
            response.raise_for_status()
            return response.json()

    async def fetch_people(self) -> list[Person]:
        """
        Load all persons.

        Raises:
            DataSourceTimeout: endpoint did not answer in time
            DataSourceError: HTTP error status, transport error or malformed body
        """
        try:
            data = await self._select(build_people_query(self.config))
            return parse_bindings(data, self.config.item_base_url)
        except httpx.TimeoutException as e:
            raise DataSourceTimeout(
                f"Wikibase request timed out after {self.config.timeout_seconds}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise DataSourceError(
                f"Failed to fetch data: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise DataSourceError(f"Failed to load data from Wikibase: {e}") from e

    async def test_connection(self) -> bool:
        """Return True when the endpoint answers a trivial query."""
        try:
            await self._select(build_connection_query(self.config))
            return True
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Connection test failed: %s", e)
            return False
