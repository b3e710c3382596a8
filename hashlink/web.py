"""HTTP front end: the upload form, uploads and short link resolution."""

import html
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from .__meta__ import __title__, __version__
from .config import Settings, get_settings
from .exceptions import BadRequest, HashLinkError
from .hashlink import HashLink

logger = logging.getLogger(__name__)

COOKIE_NAME = "hashlink"
COOKIE_OPTIONS = {"httponly": True, "secure": True, "samesite": "strict"}

INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>hashlink</title>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <meta name="description" content="Image and picture host" />
</head>
<body>
  <h1>hashlink</h1>
  <h2>Upload an image</h2>
  <form enctype="multipart/form-data" method="POST" action="/">
    <input type="file" name="f" accept="image/*" autofocus />
    <input type="submit" value="Upload" />
    <p><small>Data has no warranty and can be removed at any time.</small></p>
  </form>
  <h2>API</h2>
  <p>POST <code>{hostname}</code> with multipart/form-data with f.</p>
  <h2>Statistics</h2>
  <p>{count} images online</p>
</body>
</html>
"""

router = APIRouter()


def get_links(request: Request) -> HashLink:
    return request.app.state.links


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/", response_class=HTMLResponse)
def index(links: HashLink = Depends(get_links),
          settings: Settings = Depends(get_app_settings)) -> HTMLResponse:
    # Both record kinds are keys in the store, so two per image.
    count = links.count() // 2
    body = INDEX_TEMPLATE.format(hostname=html.escape(settings.hostname), count=count)
    return HTMLResponse(body, headers={"Cache-Control": "public, max-age=86400"})


@router.post("/")
async def upload(request: Request,
                 links: HashLink = Depends(get_links),
                 settings: Settings = Depends(get_app_settings)) -> RedirectResponse:
    form = await request.form()
    fileobj = form.get("f")
    if not isinstance(fileobj, UploadFile):
        raise BadRequest("Missing file field 'f'")

    try:
        # One byte past the ceiling is enough to reject an oversized upload.
        data = await fileobj.read(links.max_size + 1)
    finally:
        await fileobj.close()

    address = await run_in_threadpool(links.put, data, fileobj.filename)

    response = RedirectResponse("{0}/{1}".format(settings.hostname, address.id),
                                status_code=302)
    response.set_cookie(COOKIE_NAME, "1", **COOKIE_OPTIONS)
    return response


@router.get("/{identifier}")
def resolve(identifier: str,
            request: Request,
            links: HashLink = Depends(get_links)) -> Response:
    resolved = links.resolve(identifier)

    # The uploader's first view answers 201 and ends the upload session.
    first_view = COOKIE_NAME in request.cookies
    response = Response(resolved.content,
                        media_type=resolved.mime,
                        status_code=201 if first_view else 200)
    if first_view:
        response.delete_cookie(COOKIE_NAME, **COOKIE_OPTIONS)

    return response


async def handle_error(request: Request, exc: HashLinkError) -> PlainTextResponse:
    logger.info("HTTP %d - %s", exc.status, exc)
    return PlainTextResponse(str(exc), status_code=exc.status)


def create_app(settings: Optional[Settings] = None,
               links: Optional[HashLink] = None) -> FastAPI:
    """Build the application. `links` defaults to a :class:`HashLink` opened
    from `settings`.
    """
    if settings is None:
        settings = get_settings()

    settings.log()

    if links is None:
        links = HashLink(settings.db,
                         settings.directory,
                         alphabet=settings.id_alphabet,
                         length=settings.id_length,
                         max_size=settings.max_size)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        links.close()

    app = FastAPI(title=__title__, version=__version__, lifespan=lifespan,
                  docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.links = links
    app.add_exception_handler(HashLinkError, handle_error)
    app.include_router(router)

    return app
