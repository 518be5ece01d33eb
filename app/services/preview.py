"""OGP preview page rendering."""

import logging
from pathlib import Path
from typing import Callable, Optional

from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from app.config import Config, get_config
from app.models import PreviewPage
from app.services.identifiers import generate_random_japanese
from app.services.selection import pad_width, select_slot

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

TITLE_PREFIX = "固定タイトル："
# Includes every character that escape_html rewrites
BASE_DESCRIPTION = (
    "特殊文字テスト: & < > \" ' ! # $ % ( ) * + , - . / : ; = ? @ [ ] ^ _ { | } ~"
)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(value: str) -> str:
    """Escape &, <, >, double and single quotes for text and attribute contexts."""
    for char, entity in _HTML_ESCAPES:
        value = value.replace(char, entity)
    return value


def _ogp_escape(value: object) -> Markup:
    return Markup(escape_html(str(value)))


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["ogp_escape"] = _ogp_escape


def build_preview(
    id1: str,
    id2: str,
    settings: Optional[Config] = None,
    random_text: Optional[Callable[[int], str]] = None,
) -> PreviewPage:
    """
    Assemble the preview page for a pair of identifiers.

    The image slot depends only on ``id2``; title and description carry a
    freshly generated random suffix on every call.

    Args:
        id1: Display identifier, only used in the page URL
        id2: Identifier that selects the image slot
        settings: Configuration (defaults to the application config)
        random_text: Generator for the decorative suffix

    Returns:
        PreviewPage ready for rendering
    """
    settings = settings or get_config()
    random_text = random_text or generate_random_japanese

    total = settings.OGP_TOTAL_IMAGES
    slot = select_slot(id2, total)
    padded = str(slot).zfill(pad_width(total))

    origin = settings.site_origin
    image_path = f"{settings.ogp_image_url_path}/{padded}.{settings.OGP_IMAGE_FORMAT}"

    suffix = random_text(settings.RANDOM_TEXT_LENGTH)

    logger.debug("Preview for id2=%r uses slot %d", id2, slot)

    return PreviewPage(
        id1=id1,
        id2=id2,
        slot=slot,
        padded=padded,
        page_url=f"{origin}/ogp/{id1}/{id2}",
        image_url=f"{origin}{image_path}",
        image_path=image_path,
        title=TITLE_PREFIX + suffix,
        description=BASE_DESCRIPTION + suffix,
        image_width=settings.IMAGE_WIDTH,
        image_height=settings.IMAGE_HEIGHT,
    )


def render_preview_html(page: PreviewPage) -> str:
    """
    Render the OGP HTML document for a preview page.

    Args:
        page: Page data from build_preview

    Returns:
        Complete HTML document
    """
    template = templates.get_template("ogp.html")
    return template.render(page=page)
