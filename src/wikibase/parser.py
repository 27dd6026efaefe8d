"""Convert SPARQL JSON results into Person records."""

import logging
from typing import Optional

from src.errors import DataSourceError
from src.models import Person

logger = logging.getLogger(__name__)


def _value(row: dict, key: str) -> Optional[str]:
    cell = row.get(key)
    if not isinstance(cell, dict):
        return None
    return cell.get("value") or None


def _entity_id(uri: Optional[str]) -> Optional[str]:
    """Last path segment of an entity URI (…/entity/Q12 -> Q12)."""
    if not uri:
        return None
    return uri.rstrip("/").rsplit("/", 1)[-1] or None


def parse_bindings(data: dict, item_base_url: str = "") -> list[Person]:
    """
    Merge SPARQL result rows into one Person per item.

    The query yields one row per alias, so rows for the same person are
    merged and aliases collected in first-seen order.

    Args:
        data: Parsed application/sparql-results+json body
        item_base_url: Prefix for the person's wiki page URL

    Returns:
        Persons in first-seen row order

    Raises:
        DataSourceError: body is not shaped like SPARQL JSON results
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DataSourceError(f"Unexpected SPARQL response: {type(data).__name__}")

    results = data.get("results")
    if results is None:
        results = {}
    if not isinstance(results, dict):
        raise DataSourceError("Unexpected SPARQL response: results is not an object")
    bindings = results.get("bindings")
    if bindings is not None and not isinstance(bindings, list):
        raise DataSourceError("Unexpected SPARQL response: bindings is not a list")
    if not bindings:
        logger.warning("No data returned from SPARQL query")
        return []

    records: dict[str, dict] = {}
    for row in bindings:
        if not isinstance(row, dict):
            raise DataSourceError("Unexpected SPARQL response: binding row is not an object")
        person_id = _entity_id(_value(row, "person"))
        if not person_id:
            continue

        record = records.get(person_id)
        if record is None:
            record = records[person_id] = {
                "id": person_id,
                "name": _value(row, "personLabel") or f"Person {person_id}",
                "father_id": _entity_id(_value(row, "father")),
                "mother_id": _entity_id(_value(row, "mother")),
                "birth_date": _value(row, "birthDate"),
                "death_date": _value(row, "deathDate"),
                "birth_order": _value(row, "birthOrder"),
                "residence": _value(row, "residenceLabel"),
                "occupation": _value(row, "occupationLabel"),
                "description": _value(row, "personDescription"),
                "wikibase_url": f"{item_base_url}{person_id}",
                "aliases": []
            }

        alias = _value(row, "alias")
        if alias and alias not in record["aliases"]:
            record["aliases"].append(alias)

    people = [Person(**record) for record in records.values()]
    logger.info("Parsed %d people from %d rows", len(people), len(bindings))
    return people
