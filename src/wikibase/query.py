"""SPARQL queries against the registry Wikibase."""

from typing import Optional

from src.config import WikibaseSettings


def _prefixes(cfg: WikibaseSettings) -> str:
    direct = cfg.entity_base_url.replace("/entity/", "/prop/direct/")
    return f"""
        PREFIX mwd: <{cfg.entity_base_url}>
        PREFIX mwdt: <{direct}>
        PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
        PREFIX schema: <http://schema.org/>
        PREFIX skos: <http://www.w3.org/2004/02/skos/core#>
        PREFIX wikibase: <http://wikiba.se/ontology#>
        PREFIX bd: <http://www.bigdata.com/rdf#>
    """


def build_people_query(cfg: Optional[WikibaseSettings] = None) -> str:
    """Query every person item with parents, dates, labels and aliases."""
    cfg = cfg or WikibaseSettings()
    lang = cfg.language
    return _prefixes(cfg) + f"""
        SELECT DISTINCT ?person ?personLabel ?personDescription
               ?father ?mother ?birthDate ?deathDate ?birthOrder
               ?residenceLabel ?occupationLabel ?alias
        WHERE {{
            ?person mwdt:{cfg.instance_of_prop} mwd:{cfg.person_class} .

            OPTIONAL {{ ?person mwdt:{cfg.father_prop} ?father }}
            OPTIONAL {{ ?person mwdt:{cfg.mother_prop} ?mother }}
            OPTIONAL {{ ?person mwdt:{cfg.birth_date_prop} ?birthDate }}
            OPTIONAL {{ ?person mwdt:{cfg.death_date_prop} ?deathDate }}
            OPTIONAL {{ ?person mwdt:{cfg.birth_order_prop} ?birthOrder }}
            OPTIONAL {{
                ?person mwdt:{cfg.residence_prop} ?residence .
                ?residence rdfs:label ?residenceLabel .
                FILTER(LANG(?residenceLabel) = "{lang}")
            }}
            OPTIONAL {{
                ?person mwdt:{cfg.occupation_prop} ?occupation .
                ?occupation rdfs:label ?occupationLabel .
                FILTER(LANG(?occupationLabel) = "{lang}")
            }}
            OPTIONAL {{
                ?person schema:description ?personDescription .
                FILTER(LANG(?personDescription) = "{lang}")
            }}
            OPTIONAL {{
                ?person skos:altLabel ?alias .
                FILTER(LANG(?alias) = "{lang}")
            }}

            SERVICE wikibase:label {{ bd:serviceParam wikibase:language "{lang}". }}
        }}
        ORDER BY ?personLabel
        LIMIT {cfg.result_limit}
    """


def build_connection_query(cfg: Optional[WikibaseSettings] = None) -> str:
    """Cheap query used to check that the endpoint answers."""
    cfg = cfg or WikibaseSettings()
    return _prefixes(cfg) + f"""
        SELECT ?person ?personLabel WHERE {{
            ?person mwdt:{cfg.instance_of_prop} mwd:{cfg.person_class} .
            SERVICE wikibase:label {{ bd:serviceParam wikibase:language "{cfg.language}". }}
        }} LIMIT 1
    """
