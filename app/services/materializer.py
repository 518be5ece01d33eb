"""Placeholder image generation for the numbered OGP image slots."""

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from app.config import IMAGE_FORMATS
from app.services.selection import slot_path

logger = logging.getLogger(__name__)

# Colors
BACKGROUND = "#f5f5f5"
INK = "#222222"
WHITE = "#ffffff"

BAND_HEIGHT = 80
NUMBER_FONT_SIZE = 260
LABEL_FONT_SIZE = 32
LABEL_PADDING_X = 40


def _load_font(size: int) -> FreeTypeFont | ImageFont.ImageFont:
    """Load a bold sans-serif font, falling back to Pillow's built-in font."""
    try:
        return ImageFont.truetype("DejaVuSans-Bold.ttf", size)
    except OSError:
        logger.debug("DejaVuSans-Bold.ttf not available, using default font")
    return ImageFont.load_default(size=size)


class SlotImageRenderer:
    """Draws one numbered placeholder image per slot."""

    def __init__(self, width: int = 1200, height: int = 630):
        self.width = width
        self.height = height
        self.fonts = {
            "number": _load_font(NUMBER_FONT_SIZE),
            "label": _load_font(LABEL_FONT_SIZE),
        }

    def render(self, index: int) -> Image.Image:
        """Draw the image for slot ``index``."""
        image = Image.new("RGB", (self.width, self.height), BACKGROUND)
        draw = ImageDraw.Draw(image)

        # Bottom band
        band_top = self.height - BAND_HEIGHT
        draw.rectangle([(0, band_top), (self.width, self.height)], fill=INK)

        # Big centered number, nudged up to leave room for the band
        text = str(index)
        bbox = draw.textbbox((0, 0), text, font=self.fonts["number"])
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        x = (self.width - text_width) // 2 - bbox[0]
        y = (self.height // 2 - 20) - text_height // 2 - bbox[1]
        draw.text((x, y), text, font=self.fonts["number"], fill=INK)

        # Label inside the band
        label = f"OGP IMAGE #{index}"
        label_bbox = draw.textbbox((0, 0), label, font=self.fonts["label"])
        label_height = label_bbox[3] - label_bbox[1]
        label_y = band_top + (BAND_HEIGHT - label_height) // 2 - label_bbox[1]
        draw.text((LABEL_PADDING_X, label_y), label, font=self.fonts["label"], fill=WHITE)

        return image

    def save(self, index: int, path: Path, image_format: str = "png") -> None:
        """Render slot ``index`` and write it to ``path``."""
        image = self.render(index)
        image.save(path, IMAGE_FORMATS[image_format], optimize=True)


def ensure_assets(output_dir: Path | str, total: int, image_format: str = "png") -> int:
    """
    Make sure every image slot in [1, total] exists on disk.

    Files that already exist are left untouched, so the call is idempotent.
    Filesystem errors propagate to the caller.

    Args:
        output_dir: Directory for the slot images (created if missing)
        total: Number of slots
        image_format: File extension / format (png, jpg, jpeg, webp)

    Returns:
        Number of newly created files
    """
    if total <= 0:
        raise ValueError(f"total must be a positive integer, got {total!r}")
    image_format = image_format.lower().lstrip(".")
    if image_format not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {image_format!r}")

    output_dir = Path(output_dir)
    logger.info("Checking OGP images in %s (%d slots)", output_dir, total)
    output_dir.mkdir(parents=True, exist_ok=True)

    renderer: SlotImageRenderer | None = None
    created = 0
    for index in range(1, total + 1):
        path = slot_path(output_dir, index, total, image_format)
        if path.exists():
            continue
        if renderer is None:
            renderer = SlotImageRenderer()
        renderer.save(index, path, image_format)
        created += 1

    logger.info("OGP image check finished: created %d / total %d", created, total)
    return created
