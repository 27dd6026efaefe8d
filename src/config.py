"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class WikibaseSettings(BaseSettings):
    """SPARQL endpoint and property mapping of the registry Wikibase."""

    model_config = SettingsConfigDict(env_prefix="WIKIBASE_")

    sparql_endpoint: str = "https://masssly.wikibase.cloud/query/sparql"
    entity_base_url: str = "https://masssly.wikibase.cloud/entity/"
    item_base_url: str = "https://masssly.wikibase.cloud/wiki/Item:"
    language: str = "en"
    result_limit: int = 200
    timeout_seconds: float = 10.0
    offline: bool = False

    # Property and class ids
    person_class: str = "Q4"
    instance_of_prop: str = "P3"
    father_prop: str = "P4"
    mother_prop: str = "P5"
    birth_order_prop: str = "P18"
    residence_prop: str = "P19"
    occupation_prop: str = "P20"
    birth_date_prop: str = "P21"
    death_date_prop: str = "P23"


class ImageSettings(BaseSettings):
    """Person image lookup settings."""

    model_config = SettingsConfigDict(env_prefix="IMAGES_")

    source: str = "assets"  # assets or http
    assets_dir: str = "assets"
    url_prefix: str = "assets"
    http_base_url: str = "http://localhost:8000/assets"
    http_timeout_seconds: float = 0.5
    extensions: list[str] = [".jpg", ".jpeg", ".png", ".webp"]
    max_additional: int = 10


class TreeSettings(BaseSettings):
    """Defaults for tree construction and layout."""

    model_config = SettingsConfigDict(env_prefix="TREE_")

    direction: str = "ancestors"
    max_depth: int = 5
    include_both_parents: bool = True
    orientation: str = "vertical"
    enrichment_concurrency: int = 4
    vertical_offset: float = 20.0
    viewport_width: float = 900.0


class ApiSettings(BaseSettings):
    """HTTP server binding."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    wikibase: WikibaseSettings = WikibaseSettings()
    images: ImageSettings = ImageSettings()
    tree: TreeSettings = TreeSettings()
    api: ApiSettings = ApiSettings()


settings = Settings()
