"""Data models for the OGP preview service."""

from pydantic import BaseModel


class PreviewPage(BaseModel):
    """Everything the OGP preview template needs for one request."""

    id1: str  # display-only identifier
    id2: str  # identifier fed to slot selection
    slot: int  # e.g., 42
    padded: str  # e.g., "0042"
    page_url: str  # canonical URL, e.g. "http://localhost:3000/ogp/<id1>/<id2>"
    image_url: str  # absolute image URL
    image_path: str  # site-relative image path, e.g. "/images/ogp/0042.png"
    title: str
    description: str
    image_width: int = 1200
    image_height: int = 630
