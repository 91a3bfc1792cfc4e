"""Command-line entry point: open the window and spin the cube."""

from __future__ import annotations

import argparse
import sys

from cubeview.renderer import GLState
from cubeview.window import Window

DEFAULT_FRAMERATE = 60


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="cubeview", description="Show a textured, spinning cube."
    )
    parser.add_argument(
        "--fps",
        type=_positive_int,
        default=DEFAULT_FRAMERATE,
        help=f"frame rate limit (default {DEFAULT_FRAMERATE})",
    )
    return parser.parse_args(argv)


def _clear_buffers() -> None:
    from pyglet import gl

    gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)


def _run(window, state, clear) -> int:
    """Render frames until the window closes; return how many were drawn."""
    frames = 0
    while window.is_open:
        window.dispatch_events()
        if not window.is_open:
            break
        clear()
        state.draw(window)
        window.display()
        frames += 1
    return frames


def main(argv=None) -> int:
    args = _parse_args(argv)
    try:
        window = Window()
        state = GLState()
    except RuntimeError as exc:
        print(exc, file=sys.stderr, end="")
        return 0
    window.set_framerate_limit(args.fps)
    _run(window, state, _clear_buffers)
    return 0


if __name__ == "__main__":
    sys.exit(main())