"""HTTP endpoints for adding pages to channels and serving their feeds."""

import logging
import os

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from linkrss.channel import Channel
from linkrss.errors import LinkRssError

logger = logging.getLogger(__name__)

DEFAULT_ASSETS_DIR = os.path.join(os.path.dirname(__file__), "assets")

RSS_CONTENT_TYPE = "application/rss+xml"


def _not_found(name: str) -> PlainTextResponse:
    return PlainTextResponse(f"Channel {name} not found", status_code=400)


def create_app(
    channels: dict[str, Channel],
    prefix: str = "",
    assets_dir: str | None = None,
) -> FastAPI:
    """Build the web application around a fixed set of channels.

    Args:
        channels: Channels keyed by name. Never modified after startup.
        prefix: URL path prefix for every route, e.g. '/rss'.
        assets_dir: Directory holding ``templates/`` and optionally ``static/``.
            Defaults to the templates bundled with the package.
    """
    assets_dir = assets_dir or DEFAULT_ASSETS_DIR
    prefix = prefix.rstrip("/")
    templates = Jinja2Templates(directory=os.path.join(assets_dir, "templates"))

    app = FastAPI()

    static_dir = os.path.join(assets_dir, "static")
    if os.path.isdir(static_dir):
        app.mount(f"{prefix}/static", StaticFiles(directory=static_dir), name="static")

    # Plain (non-async) handlers run in the threadpool, one worker per request.
    @app.get(f"{prefix}/add/{{name}}", response_class=HTMLResponse)
    def add_form(request: Request, name: str):
        if name not in channels:
            return _not_found(name)
        return templates.TemplateResponse(
            request, "add_get.html", {"prefix": prefix, "name": name}
        )

    @app.post(f"{prefix}/add/{{name}}", response_class=HTMLResponse)
    def add_submit(request: Request, name: str, url: str = Form("")):
        channel = channels.get(name)
        if channel is None:
            return _not_found(name)

        context = {"prefix": prefix, "name": name, "url": url}
        try:
            item = channel.add_item_by_url(url)
        except LinkRssError as e:
            logger.warning("Channel '%s': could not add %s: %s", name, url, e)
            return templates.TemplateResponse(
                request, "add_post_err.html", {**context, "err": str(e)}
            )
        return templates.TemplateResponse(
            request, "add_post_ok.html", {**context, "title": item.title}
        )

    @app.get(f"{prefix}/feed/{{name}}")
    def feed(name: str):
        channel = channels.get(name)
        if channel is None:
            return _not_found(name)
        return Response(content=channel.serialized_document(), media_type=RSS_CONTENT_TYPE)

    return app
