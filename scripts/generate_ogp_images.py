#!/usr/bin/env python3
"""
Generate the numbered OGP placeholder images.

Creates <padded-number>.<ext> images (1200x630) for every slot that does not
exist yet. Existing files are never touched, so the script is safe to re-run.

Usage:
    python scripts/generate_ogp_images.py [--output-dir DIR] [--total 1000] [--format png]

This script is meant to be run:
- At build/deploy time, before the server takes traffic
- Manually after changing OGP_TOTAL_IMAGES
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import IMAGE_FORMATS, get_config  # noqa: E402
from app.services.materializer import ensure_assets  # noqa: E402

logger = logging.getLogger("generate_ogp_images")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments, defaulting to the configured values."""
    config = get_config()
    parser = argparse.ArgumentParser(description="Generate numbered OGP placeholder images")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.ogp_image_dir,
        help=f"Output directory (default: {config.ogp_image_dir})",
    )
    parser.add_argument(
        "--total",
        type=int,
        default=config.OGP_TOTAL_IMAGES,
        help=f"Number of image slots (default: {config.OGP_TOTAL_IMAGES})",
    )
    parser.add_argument(
        "--format",
        dest="image_format",
        choices=sorted(IMAGE_FORMATS),
        default=config.OGP_IMAGE_FORMAT,
        help=f"Image format (default: {config.OGP_IMAGE_FORMAT})",
    )
    args = parser.parse_args(argv)
    if args.total <= 0:
        parser.error("--total must be a positive integer")
    return args


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)

    try:
        created = ensure_assets(args.output_dir, args.total, args.image_format)
    except OSError:
        logger.exception("Image generation failed")
        return 1

    print(f"Created {created} new image(s), {args.total} total in {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
