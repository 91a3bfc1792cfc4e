"""Vertex layout, cube geometry and rendering defaults."""

from __future__ import annotations

from collections.abc import Sized
from dataclasses import dataclass
from enum import IntEnum

# Number of float components in one vertex: x, y, z, u, v.
STRIDE = 5
POSITION_OFFSET = 0
TEXTURE_OFFSET = 3
POSITION_SIZE = 3
TEXTURE_SIZE = 2
FLOAT_SIZE = 4

VERTEX_SHADER_PATH = "../../../shaders/shader.vs"
FRAGMENT_SHADER_PATH = "../../../shaders/shader.fs"
SHELF_TEXTURE_PATH = "../../../resources/metal.jpg"
DUCKY_TEXTURE_PATH = "../../../resources/rubber-ducky.png"

CLEAR_COLOR = (0.3, 0.3, 0.3, 0.5)
DEFAULT_TEXTURE_UNIT = 0
INDICES_COUNT = 6


class VSLocation(IntEnum):
    """Attribute locations in the vertex shader."""

    POSITION = 0
    TEXTURE = 1


@dataclass(frozen=True)
class AttributeLayout:
    """Where one vertex attribute sits inside an interleaved vertex."""

    location: VSLocation
    size: int
    offset: int
    stride: int = STRIDE

    @property
    def offset_bytes(self) -> int:
        return self.offset * FLOAT_SIZE

    @property
    def stride_bytes(self) -> int:
        return self.stride * FLOAT_SIZE


_LAYOUTS = {
    VSLocation.POSITION: (POSITION_SIZE, POSITION_OFFSET),
    VSLocation.TEXTURE: (TEXTURE_SIZE, TEXTURE_OFFSET),
}


def attribute_layout(location: VSLocation | int) -> AttributeLayout:
    """Return the size and offset of the attribute bound at ``location``."""
    loc = VSLocation(location)
    size, offset = _LAYOUTS[loc]
    return AttributeLayout(location=loc, size=size, offset=offset)


def vertex_count(vertices: Sized) -> int:
    """Number of whole vertices in a flat sequence of interleaved floats."""
    total = len(vertices)
    if total % STRIDE:
        raise ValueError(
            f"vertex data length {total} is not a multiple of the stride {STRIDE}"
        )
    return total // STRIDE


# A unit cube centred on the origin: six faces of two triangles each,
# every vertex carrying a position and a texture coordinate.
CUBE_VERTICES: tuple[float, ...] = (
    -0.5, -0.5, -0.5, 0.0, 0.0,
    0.5, -0.5, -0.5, 1.0, 0.0,
    0.5, 0.5, -0.5, 1.0, 1.0,
    0.5, 0.5, -0.5, 1.0, 1.0,
    -0.5, 0.5, -0.5, 0.0, 1.0,
    -0.5, -0.5, -0.5, 0.0, 0.0,

    -0.5, -0.5, 0.5, 0.0, 0.0,
    0.5, -0.5, 0.5, 1.0, 0.0,
    0.5, 0.5, 0.5, 1.0, 1.0,
    0.5, 0.5, 0.5, 1.0, 1.0,
    -0.5, 0.5, 0.5, 0.0, 1.0,
    -0.5, -0.5, 0.5, 0.0, 0.0,

    -0.5, 0.5, 0.5, 1.0, 0.0,
    -0.5, 0.5, -0.5, 1.0, 1.0,
    -0.5, -0.5, -0.5, 0.0, 1.0,
    -0.5, -0.5, -0.5, 0.0, 1.0,
    -0.5, -0.5, 0.5, 0.0, 0.0,
    -0.5, 0.5, 0.5, 1.0, 0.0,

    0.5, 0.5, 0.5, 1.0, 0.0,
    0.5, 0.5, -0.5, 1.0, 1.0,
    0.5, -0.5, -0.5, 0.0, 1.0,
    0.5, -0.5, -0.5, 0.0, 1.0,
    0.5, -0.5, 0.5, 0.0, 0.0,
    0.5, 0.5, 0.5, 1.0, 0.0,

    -0.5, -0.5, -0.5, 0.0, 1.0,
    0.5, -0.5, -0.5, 1.0, 1.0,
    0.5, -0.5, 0.5, 1.0, 0.0,
    0.5, -0.5, 0.5, 1.0, 0.0,
    -0.5, -0.5, 0.5, 0.0, 0.0,
    -0.5, -0.5, -0.5, 0.0, 1.0,

    -0.5, 0.5, -0.5, 0.0, 1.0,
    0.5, 0.5, -0.5, 1.0, 1.0,
    0.5, 0.5, 0.5, 1.0, 0.0,
    0.5, 0.5, 0.5, 1.0, 0.0,
    -0.5, 0.5, 0.5, 0.0, 0.0,
    -0.5, 0.5, -0.5, 0.0, 1.0,
)

# Index data for indexed drawing; the cube is drawn without it.
CUBE_INDICES: tuple[int, ...] = ()