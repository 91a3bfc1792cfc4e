"""Render a spinning textured cube with OpenGL in a pyglet window."""

__version__ = "0.1.0"