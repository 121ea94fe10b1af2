"""Command-line entry point: spin the donut in the current terminal."""
from __future__ import annotations

import argparse
import logging
import sys

from .core.controller import AnimationController
from .core.exceptions import DonutError, ParamsError, SurfaceError
from .core.geometry import render_frame
from .core.params import PRESETS, preset

log = logging.getLogger(__name__)


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="asciidonut",
        description="Render a rotating ASCII torus. Space pauses/resumes, "
        "arrow keys nudge the rotation, q quits.",
    )
    parser.add_argument(
        "-p",
        "--preset",
        choices=sorted(PRESETS),
        default="interactive",
        help="Parameter preset (default: interactive).",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Spin continuously without reading the keyboard (implied by the spin preset).",
    )
    parser.add_argument("--viewport", type=int, help="Grid side in cells (default: 80).")
    parser.add_argument("--frames", type=int, help="Stop after this many frames.")
    parser.add_argument(
        "--stretch",
        action="store_true",
        help="Draw every cell twice horizontally to offset tall glyphs.",
    )
    parser.add_argument(
        "--snapshot",
        metavar="PATH",
        help="Render the first frame to an image file instead of animating.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level).",
    )
    args = parser.parse_args(argv)
    if args.frames is not None and args.frames < 1:
        parser.error("--frames must be at least 1")
    return args


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    # stderr, so log lines do not land inside the frame
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s: %(name)s: %(message)s")


def main(argv=None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.debug)

    overrides = {}
    if args.viewport is not None:
        overrides["viewport"] = args.viewport
    try:
        params = preset(args.preset, **overrides)
    except ParamsError as err:
        print(f"asciidonut: {err}", file=sys.stderr)
        return 2

    if args.snapshot:
        from .utils.image_ops import save_snapshot

        path = save_snapshot(render_frame(0.0, 0.0, params), args.snapshot, params.ramp)
        log.info("wrote %s", path)
        return 0

    from .utils.terminal import TerminalSurface

    surface = TerminalSurface(stretch=args.stretch)
    try:
        surface.prepare()
    except SurfaceError as err:
        log.error("%s", err)
        print(f"asciidonut: {err}", file=sys.stderr)
        return 1

    status = 1
    try:
        keys = surface.poll_key if params.interactive and not args.no_input else None
        controller = AnimationController(params, surface, keys=keys)
        status = controller.run(max_frames=args.frames)
    except KeyboardInterrupt:
        status = 0
    except DonutError as err:
        log.error("%s", err)
        print(f"asciidonut: {err}", file=sys.stderr)
    finally:
        try:
            surface.reset()
        except SurfaceError as err:
            log.error("%s", err)
            print(f"asciidonut: {err}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
