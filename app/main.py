"""OGP preview service main application."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path

import sentry_sdk
from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Scope

from app.config import config
from app.services.identifiers import IdGenerator, get_id_generator
from app.services.materializer import ensure_assets
from app.services.preview import build_preview, render_preview_html

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize Sentry/GlitchTip
if config.SENTRY_DSN:
    sentry_sdk.init(
        dsn=config.SENTRY_DSN,
        environment=config.SENTRY_ENVIRONMENT,
        traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
    )
    logger.info("Sentry/GlitchTip initialized")


async def run_startup_generation() -> int | None:
    """
    Fill in missing image slots without blocking the event loop.

    Returns:
        Number of created images, or None if generation failed
    """
    try:
        return await asyncio.to_thread(
            ensure_assets,
            config.ogp_image_dir,
            config.OGP_TOTAL_IMAGES,
            config.OGP_IMAGE_FORMAT,
        )
    except Exception as e:
        logger.exception(f"OGP image generation failed: {str(e)}")
        sentry_sdk.capture_exception(e)
        return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    logger.info(f"Starting OGP preview service on {config.site_origin}")

    if config.OGP_GENERATE_ON_STARTUP:
        # Generate in background so requests are served right away
        app.state.generation_task = asyncio.create_task(run_startup_generation())

    yield

    task = getattr(app.state, "generation_task", None)
    if task is not None and not task.done():
        logger.info("Cancelling pending OGP image generation")
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    logger.info("Shutting down OGP preview service")


# Initialize FastAPI app
app = FastAPI(
    title="OGP Preview",
    description="Serves OGP preview pages backed by a pool of numbered placeholder images",
    version="0.1.0",
    lifespan=lifespan,
)


def _resolve_id_generator(scope: Scope) -> IdGenerator:
    """Look up the id generator, honoring dependency overrides on the app."""
    current_app = scope.get("app")
    overrides = getattr(current_app, "dependency_overrides", {})
    provider = overrides.get(get_id_generator, get_id_generator)
    return provider()


class PublicFiles(StaticFiles):
    """Static files that redirect to a fresh preview page instead of returning 404."""

    async def get_response(self, path: str, scope: Scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
        generate_id = _resolve_id_generator(scope)
        return RedirectResponse(url=f"/ogp/{generate_id()}", status_code=302)


def _preview_response(id1: str, id2: str) -> HTMLResponse:
    """Render the preview page for an identifier pair."""
    page = build_preview(id1, id2, config)
    html = render_preview_html(page)
    return HTMLResponse(content=html, headers={"Cache-Control": "no-store"})


@app.get("/ogp")
@app.get("/ogp/")
async def ogp_redirect(generate_id: IdGenerator = Depends(get_id_generator)):
    """Redirect to a shareable preview URL with two fresh identifiers."""
    return RedirectResponse(url=f"/ogp/{generate_id()}/{generate_id()}", status_code=302)


@app.get("/ogp/{id1}", response_class=HTMLResponse)
@app.get("/ogp/{id1}/", response_class=HTMLResponse)
async def ogp_page(id1: str, generate_id: IdGenerator = Depends(get_id_generator)):
    """
    Preview page with a freshly picked image.

    A new second identifier is generated per request, so the image
    changes on every load.
    """
    return _preview_response(id1, generate_id())


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "total_images": config.OGP_TOTAL_IMAGES}


# Static files (including the image slots) at /, unmatched paths redirect.
# Mounted last so the routes above take precedence.
Path(config.PUBLIC_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/", PublicFiles(directory=config.PUBLIC_DIR), name="public")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=config.APP_HOST,
        port=config.PORT,
        reload=config.DEBUG,
    )
