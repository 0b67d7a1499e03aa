"""Main CLI entry point."""

import argparse
import logging
import sys
from typing import Optional

from gahull.ingest.loader import load_raster
from gahull.orchestration.pipeline import GAPipeline, write_outputs
from gahull.shared.config import get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gahull",
        description="Convert ship General Arrangement drawings into classified DXF polylines",
    )
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a YAML config file")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: from config)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-o", "--output", type=str, default="output",
                        help="Output directory (default: output)")
    common.add_argument("--scale", type=float, default=None,
                        help="Drawing units per pixel (default: from config)")
    common.add_argument("--tolerance", type=float, default=None,
                        help="Simplification tolerance in pixels (default: from config)")
    common.add_argument("--workers", type=int, default=None,
                        help="Worker threads per view (default: from config)")
    common.add_argument("--layered", action="store_true",
                        help="Also write a DXF with one layer per contour role")

    views = subparsers.add_parser("views", parents=[common],
                                  help="Process one image per view")
    views.add_argument("--top", type=str, help="Top (plan) view image or PDF")
    views.add_argument("--side", type=str, help="Side view image or PDF")
    views.add_argument("--profile", type=str, help="Profile (body plan) view image or PDF")

    page = subparsers.add_parser("page", parents=[common],
                                 help="Split a full GA page into views and process them")
    page.add_argument("input", type=str, help="Full page image or PDF")
    page.add_argument("--ocr", action="store_true",
                      help="Locate views by their title labels (needs Tesseract)")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    settings = get_settings(args.config)
    logging.basicConfig(
        level=(args.log_level or settings.logging.level).upper(),
        format=settings.logging.format,
    )

    pipeline = GAPipeline(settings, max_workers=args.workers)
    dpi = settings.ingest.pdf_dpi

    try:
        if args.command == "views":
            inputs = {"top": args.top, "side": args.side, "profile": args.profile}
            images = {view: load_raster(path, dpi) for view, path in inputs.items() if path}
            if not images:
                logger.error("No view images given; use --top, --side or --profile")
                return 1
            result = pipeline.run_views(images, tolerance=args.tolerance, scale=args.scale)
        else:
            page = load_raster(args.input, dpi)
            result = pipeline.run_page(
                page,
                use_ocr=args.ocr,
                tolerance=args.tolerance,
                scale=args.scale,
            )

        written = write_outputs(result, args.output, layered=args.layered, settings=settings)
    except (ValueError, OSError) as e:
        logger.error(f"Processing failed: {e}")
        return 1

    for path in written:
        print(f"  Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
