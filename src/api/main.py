"""FastAPI backend serving people and tree layouts."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings
from src.errors import DataSourceError, RenderCancelled
from src.graph.models import Direction, Orientation, TreeOptions, ViewportTransform
from src.graph.service import DataSource, FamilyTreeService
from src.images.resolver import build_resolver
from src.logging_config import setup_logging
from src.wikibase.client import WikibaseClient
from src.wikibase.sample import SampleDataSource

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No family data available."


def default_source() -> DataSource:
    """Wikibase, or the demo records when running offline."""
    if settings.wikibase.offline:
        return SampleDataSource()
    return WikibaseClient(settings.wikibase)


def create_app(
    service: Optional[FamilyTreeService] = None,
    source: Optional[DataSource] = None
) -> FastAPI:
    """Build the API around a tree service and a data source."""
    service = service or FamilyTreeService(resolver=build_resolver(settings.images))
    source = source or default_source()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        try:
            await service.refresh(source)
        except DataSourceError as e:
            logger.error("Initial data load failed, starting with no data: %s", e)
        yield
        service.cancel()
        aclose = getattr(service.resolver, "aclose", None)
        if aclose is not None:
            await aclose()

    app = FastAPI(title="Family Registry API", lifespan=lifespan)
    app.state.service = service
    app.state.source = source

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "people": len(service.repository)}

    @app.get("/api/people")
    async def list_people():
        return [person.to_dict() for person in service.people]

    @app.get("/api/people/{person_id}")
    async def get_person(person_id: str):
        person = service.get_person(person_id)
        if not person:
            raise HTTPException(status_code=404, detail=f"Person {person_id} not found")
        return person.to_dict()

    @app.get("/api/tree/{root_id}")
    async def get_tree(
        root_id: str,
        direction: Optional[Direction] = None,
        max_depth: Optional[int] = None,
        include_both_parents: Optional[bool] = None,
        orientation: Optional[Orientation] = None,
        viewport_width: Optional[float] = None,
        include_images: bool = True,
        session: Optional[str] = None
    ):
        """Render the tree for root_id.

        Requests carrying the same session supersede each other; an older
        one still in flight gets 409.
        """
        defaults = service.default_options()
        if max_depth is not None and max_depth < 0:
            raise HTTPException(status_code=422, detail="max_depth must be non-negative")
        options = TreeOptions(
            direction=direction or defaults.direction,
            max_depth=defaults.max_depth if max_depth is None else max_depth,
            include_both_parents=(
                defaults.include_both_parents if include_both_parents is None else include_both_parents
            )
        )

        try:
            render = await service.render(
                root_id,
                options=options,
                orientation=orientation,
                viewport_width=viewport_width,
                include_images=include_images,
                session=session
            )
        except RenderCancelled as e:
            raise HTTPException(status_code=409, detail=str(e))

        if render is None:
            return {
                "root_id": root_id,
                "tree": None,
                "nodes": [],
                "links": [],
                "transform": ViewportTransform().to_dict(),
                "message": NO_DATA_MESSAGE
            }
        return render.to_dict()

    @app.post("/api/refresh")
    async def refresh():
        try:
            count = await service.refresh(source)
        except DataSourceError as e:
            logger.error("Refresh failed: %s", e)
            raise HTTPException(status_code=503, detail=str(e))
        return {"success": True, "people": count}

    return app


app = create_app()
