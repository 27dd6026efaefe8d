"""Wikibase data source - loads person records over SPARQL."""
from src.wikibase.query import build_people_query, build_connection_query
from src.wikibase.parser import parse_bindings
from src.wikibase.client import WikibaseClient
from src.wikibase.sample import SampleDataSource, sample_people

__all__ = [
    "build_people_query",
    "build_connection_query",
    "parse_bindings",
    "WikibaseClient",
    "SampleDataSource",
    "sample_people"
]
