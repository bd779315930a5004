"""
Module: cli

Purpose:
    Command-line entry points. One subcommand per layout mode:

        sprite-toolkit horizontal a.png b.png
        sprite-toolkit vertical atlas.png@0,0,16,16 atlas.png@16,0,16,16
        sprite-toolkit overlay body.png hat.png -o Assets/CombinedSprites

Key Functions:
    - main(): Parse arguments, combine, report one summary line

Dependencies:
    - argparse (std)
    - combiner: open_request(), save_combined()
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sprite_toolkit import __version__
from sprite_toolkit.core.errors import CombineError
from sprite_toolkit.core.models import LayoutMode

from .combiner.config import CombineConfig, DEFAULT_FILE_PREFIX, DEFAULT_OUTPUT_DIR
from .combiner.extraction import SidecarReadability
from .combiner.loading import open_request
from .combiner.pipeline import save_combined

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

_HELP = {
    LayoutMode.HORIZONTAL: "Place sprites side by side, top-aligned",
    LayoutMode.VERTICAL: "Stack sprites top to bottom, left-aligned",
    LayoutMode.OVERLAY: "Center sprites on one canvas, later sprites drawn on top",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sprite-toolkit",
        description="Combine sprites into a single PNG",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="mode", required=True, metavar="MODE")
    for mode in LayoutMode:
        sub = subparsers.add_parser(mode.value, help=_HELP[mode], description=_HELP[mode])
        sub.add_argument(
            "sources",
            nargs="+",
            metavar="SOURCE",
            help="Image path, optionally with a crop: path@x,y,width,height",
        )
        sub.add_argument(
            "-o", "--output-dir",
            type=Path,
            default=DEFAULT_OUTPUT_DIR,
            help=f"Directory for the combined sprite (default: {DEFAULT_OUTPUT_DIR})",
        )
        sub.add_argument(
            "--prefix",
            default=DEFAULT_FILE_PREFIX,
            help=f"File name prefix (default: {DEFAULT_FILE_PREFIX})",
        )
        sub.add_argument(
            "--bottom-left",
            action="store_true",
            help="Crop y is measured from the image bottom (engine sprite rects)",
        )
        sub.add_argument(
            "--no-import-settings",
            action="store_true",
            help="Do not write the .import.json sidecar",
        )
        sub.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    mode = LayoutMode.parse(args.mode)
    try:
        config = CombineConfig(
            output_dir=args.output_dir,
            file_prefix=args.prefix,
            write_import_settings=not args.no_import_settings,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        with open_request(args.sources, mode, bottom_left=args.bottom_left) as request:
            saved = save_combined(request, config, readability=SidecarReadability())
    except CombineError as exc:
        logger.error(f"Combine failed [{exc.kind.value}]: {exc}")
        return EXIT_FAILED
    except ValueError as exc:
        logger.error(f"Invalid source: {exc}")
        return EXIT_USAGE
    except OSError as exc:
        logger.error(f"Could not read source: {exc}")
        return EXIT_FAILED

    result = saved.result
    print(
        f"Combined {result.included_count} sprites -> {saved.path}"
        + (f" ({result.skipped_count} skipped)" if result.skipped_count else "")
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
