"""The application window and its OpenGL context settings."""

from __future__ import annotations

import time
from dataclasses import dataclass

import pyglet

WINDOW_WIDTH = 1133
WINDOW_HEIGHT = 755
WINDOW_TITLE = "Cube"


class WindowInitError(RuntimeError):
    """The window or its OpenGL context could not be created."""


@dataclass(frozen=True)
class ContextSettings:
    """Requested properties of the OpenGL context."""

    depth_bits: int = 0
    stencil_bits: int = 0
    antialiasing_level: int = 0
    major_version: int = 1
    minor_version: int = 1

    def as_config_kwargs(self) -> dict[str, int | bool]:
        """Keyword arguments describing these settings for a GL config."""
        options: dict[str, int | bool] = {
            "double_buffer": True,
            "depth_size": self.depth_bits,
            "stencil_size": self.stencil_bits,
            "major_version": self.major_version,
            "minor_version": self.minor_version,
        }
        if self.antialiasing_level > 0:
            options["sample_buffers"] = 1
            options["samples"] = self.antialiasing_level
        return options


def context_settings() -> ContextSettings:
    """Settings for the cube: depth and stencil buffers, 4x AA, OpenGL 4.3."""
    return ContextSettings(
        depth_bits=24,
        stencil_bits=8,
        antialiasing_level=4,
        major_version=4,
        minor_version=3,
    )


class Window:
    """A fixed-size window with a current OpenGL context.

    Closing the window or pressing Escape marks it as no longer open.
    """

    def __init__(self) -> None:
        settings = context_settings()
        try:
            config = pyglet.gl.Config(**settings.as_config_kwargs())
            self._native = pyglet.window.Window(
                width=WINDOW_WIDTH,
                height=WINDOW_HEIGHT,
                caption=WINDOW_TITLE,
                config=config,
                resizable=False,
                vsync=False,
            )
        except Exception as exc:
            raise WindowInitError("failed to initialize window context") from exc
        self._open = True
        self._started = time.perf_counter()
        self._frame_interval = 0.0
        self._last_frame = self._started
        self._native.push_handlers(
            on_close=self._on_close, on_key_press=self._on_key_press
        )

    @property
    def native(self):
        """The underlying windowing-toolkit window."""
        return self._native

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def elapsed(self) -> float:
        """Seconds since the window was created."""
        return time.perf_counter() - self._started

    def set_framerate_limit(self, limit: int) -> None:
        """Cap presented frames per second; zero removes the cap."""
        if limit < 0:
            raise ValueError("framerate limit must not be negative")
        self._frame_interval = 1.0 / limit if limit else 0.0

    def dispatch_events(self) -> None:
        """Process pending window events."""
        if self._open:
            self._native.dispatch_events()

    def display(self) -> None:
        """Present the rendered frame, waiting to honour the framerate limit."""
        if not self._open:
            return
        self._native.flip()
        if self._frame_interval:
            remaining = self._last_frame + self._frame_interval - time.perf_counter()
            if remaining > 0:
                time.sleep(remaining)
        self._last_frame = time.perf_counter()

    def close(self) -> None:
        if self._open:
            self._open = False
            self._native.close()

    def _on_close(self) -> bool:
        self.close()
        return True

    def _on_key_press(self, symbol: int, modifiers: int) -> bool:
        if symbol == pyglet.window.key.ESCAPE:
            self.close()
            return True
        return False