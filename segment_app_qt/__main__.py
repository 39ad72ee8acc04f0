"""
Segment Overlay Application - Entry Point.

Usage:
    python -m segment_app_qt --image image.jpg --masks masks.json --mode click
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import cv2
from PyQt6.QtWidgets import QApplication

from segment_app_qt.config import SegmentAppConfig
from segment_app_qt.constants import INTERACTION_MODES
from segment_app_qt.main_window import SegmentAnnotationWindow
from segment_app_qt.utils.exceptions import SegmentAppError
from segment_app_qt.utils.logger import get_logger, set_log_level
from segment_app_qt.utils.mask_io import load_masks

logger = get_logger("segment_app_qt")


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description="Interactive segment overlay (PyQt6)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Click annotation over precomputed masks
  python -m segment_app_qt --image photo.jpg --masks photo_masks.json

  # Box annotation, hide masks above 30% of the image area
  python -m segment_app_qt --image photo.jpg --masks photo_masks.json \\
      --mode box --threshold 0.3

Controls:
  Left click:  Add foreground point (click mode)
  Right click: Add background point (click mode)
  Drag:        Draw box (box mode)
  Hold Ctrl:   Hide mask overlay
  Escape:      Clear points
  Q:           Quit
        """,
    )

    parser.add_argument(
        "--image", "-i",
        required=True,
        help="Image to annotate",
    )
    parser.add_argument(
        "--masks", "-m",
        default=None,
        help="Masks JSON file (bbox, segmentation, area) or directory of PNG masks",
    )
    parser.add_argument(
        "--mode",
        default=None,
        choices=INTERACTION_MODES,
        help="Interaction mode (default: click)",
    )
    parser.add_argument(
        "--threshold", "-t",
        type=float,
        default=None,
        help="Mask area threshold as a fraction of the image area (default: 0.5)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML config file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def load_config(args: argparse.Namespace) -> SegmentAppConfig:
    """Load the config file (if any) and apply command line overrides."""
    config = (
        SegmentAppConfig.from_yaml(args.config) if args.config else SegmentAppConfig()
    )
    return config.with_overrides(
        mode=args.mode,
        mask_area_threshold=args.threshold,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
        set_log_level(config.log_level)

        image_path = Path(args.image)
        image = cv2.imread(str(image_path))
        if image is None:
            logger.error(f"Failed to load image: {image_path}")
            return 1
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

        masks = load_masks(args.masks) if args.masks else []
    except SegmentAppError as e:
        logger.error(str(e))
        return 1

    app = QApplication(sys.argv[:1])

    window = SegmentAnnotationWindow(
        image=image,
        masks=masks,
        config=config,
        title=f"Segment Overlay - {image_path.name}",
    )
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
