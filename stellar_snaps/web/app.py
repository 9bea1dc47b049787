"""FastAPI application serving snaps, the registry and share pages."""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import get_database_path, get_registry_path
from ..constants import DISCOVERY_FILE_PATH
from ..db import get_connection, get_snap, init_db
from ..discovery import create_discovery_file
from ..meta_tags import generate_json_ld, generate_meta_tags, meta_tags_to_html
from ..renderer import truncate_address
from .routes import service, snaps

TEMPLATES_DIR = Path(__file__).parent / "templates"

# How this service's own share links map to its metadata endpoint.
SERVICE_DISCOVERY = create_discovery_file(
    name="Stellar Snaps",
    description="Shareable Stellar payment links",
    rules=[{"pathPattern": "/s/*", "apiPath": "/api/snap/$1"}],
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Stellar Snaps",
        description="Shareable Stellar payment requests",
        version=__version__,
    )

    # Snap metadata is fetched by renderers running on other origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    app.state.templates = templates
    app.state.db_path = get_database_path()
    app.state.registry_path = get_registry_path()

    init_db(app.state.db_path)

    app.include_router(snaps.router, prefix="/api")
    app.include_router(service.router, prefix="/api")

    @app.get(DISCOVERY_FILE_PATH)
    async def discovery_file():
        """Rules telling renderers how to turn share links into metadata URLs."""
        return SERVICE_DISCOVERY.to_json_dict()

    @app.get("/s/{snap_id}", response_class=HTMLResponse)
    async def share_page(request: Request, snap_id: str):
        """Human-facing page behind a share link, with link-preview tags."""
        with get_connection(app.state.db_path) as conn:
            snap = get_snap(conn, snap_id)

        if snap is None:
            return templates.TemplateResponse(
                request,
                "not_found.html",
                {"snap_id": snap_id},
                status_code=404,
            )

        url = str(request.url)
        tags = generate_meta_tags(
            title=snap.title,
            url=url,
            description=snap.description,
            image_url=snap.image_url,
            amount=snap.amount,
            asset_code=snap.asset_code,
        )
        json_ld = generate_json_ld(
            title=snap.title,
            url=url,
            description=snap.description,
            amount=snap.amount,
            asset_code=snap.asset_code,
            image_url=snap.image_url,
        )
        return templates.TemplateResponse(
            request,
            "snap.html",
            {
                "snap": snap,
                "meta_tags": meta_tags_to_html(tags),
                "json_ld": json_ld,
                "destination": truncate_address(snap.destination),
            },
        )

    return app
