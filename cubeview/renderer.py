"""OpenGL resources for drawing the textured, spinning cube.

GL bindings are loaded on first use, so images and shader sources can be
read without a live context.
"""

from __future__ import annotations

import functools
import sys
import time
from pathlib import Path

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from cubeview.layout import (
    CLEAR_COLOR,
    CUBE_INDICES,
    CUBE_VERTICES,
    DEFAULT_TEXTURE_UNIT,
    DUCKY_TEXTURE_PATH,
    FRAGMENT_SHADER_PATH,
    SHELF_TEXTURE_PATH,
    VERTEX_SHADER_PATH,
    VSLocation,
    attribute_layout,
    vertex_count,
)
from cubeview.transforms import model_matrix, projection_matrix, view_matrix
from cubeview.window import WINDOW_HEIGHT, WINDOW_WIDTH

GL_DEBUG_TYPE_ERROR = 0x824C
GL_DEBUG_SEVERITY_HIGH = 0x9146

_NATIVE_MODES = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}
_GREY_MODES = {"1", "I", "I;16", "I;16B", "I;16L", "I;16N", "F"}

# Compiled shader objects waiting to be linked, keyed by their GL id.
_compiled_shaders: dict = {}


class ImageLoadError(ValueError):
    """An image file could not be read or decoded."""


class ShaderSourceError(ValueError):
    """A shader source file could not be opened."""


class ShaderCompileError(RuntimeError):
    """A shader failed to compile."""


class ShaderLinkError(RuntimeError):
    """A shader program failed to link."""


@functools.lru_cache(maxsize=None)
def _gl():
    from pyglet import gl

    return gl


@functools.lru_cache(maxsize=None)
def _shader_api():
    from pyglet.graphics import shader

    return shader


@functools.lru_cache(maxsize=None)
def _image_api():
    from pyglet import image

    return image


@functools.lru_cache(maxsize=None)
def _buffer_api():
    from pyglet.graphics import vertexarray, vertexbuffer

    return vertexarray, vertexbuffer


def format_debug_message(message_type: int, severity: int, message: str) -> str:
    """Render one OpenGL debug message as a single log line."""
    marker = "** GL ERROR **" if message_type == GL_DEBUG_TYPE_ERROR else ""
    return (
        f"GL CALLBACK: {marker} type = 0x{message_type:x}, "
        f"severity = 0x{severity:x}, message = {message}"
    )


def _report_gl_errors() -> None:
    gl = _gl()
    while (error := gl.glGetError()) != gl.GL_NO_ERROR:
        print(
            format_debug_message(
                GL_DEBUG_TYPE_ERROR, GL_DEBUG_SEVERITY_HIGH, f"error 0x{error:x}"
            ),
            file=sys.stderr,
        )


class Image:
    """Pixel data decoded from an image file, rows top to bottom."""

    def __init__(self, image_path) -> None:
        self.path = str(image_path)
        try:
            with PILImage.open(image_path) as img:
                img.load()
                img = self._normalise(img)
                self.width, self.height = img.size
                self.channels = _NATIVE_MODES[img.mode]
                self.data = img.tobytes()
        except (OSError, UnidentifiedImageError, ValueError) as exc:
            raise ImageLoadError(f"cannot load image {self.path}") from exc

    @staticmethod
    def _normalise(img):
        mode = img.mode
        if mode in _NATIVE_MODES:
            return img
        if mode in _GREY_MODES:
            return img.convert("L")
        if mode in ("P", "PA"):
            has_alpha = mode == "PA" or "transparency" in img.info
            return img.convert("RGBA" if has_alpha else "RGB")
        return img.convert("RGBA" if "A" in img.getbands() else "RGB")


class Texture(Image):
    """An image uploaded as a mipmapped 2D texture."""

    def __init__(self, image_path) -> None:
        super().__init__(image_path)
        gl = _gl()
        image_api = _image_api()

        pixel_format = {3: "RGB", 4: "RGBA"}.get(self.channels)
        if pixel_format is not None:
            # Rows are handed over in file order, as the image was decoded.
            pixels = image_api.ImageData(
                self.width, self.height, pixel_format, self.data
            )
            self._texture = pixels.get_texture()
        else:
            self._texture = image_api.Texture.create(self.width, self.height)
        self.tex_id = self._texture.id

        gl.glBindTexture(gl.GL_TEXTURE_2D, self.tex_id)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
        gl.glTexParameteri(
            gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST_MIPMAP_NEAREST
        )
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)
        gl.glGenerateMipmap(gl.GL_TEXTURE_2D)


class Shader:
    """GLSL source read from a file; ``shader_id`` is 0 until compiled."""

    def __init__(self, source_path) -> None:
        self.shader_id = 0
        try:
            self.source = Path(source_path).read_text()
        except (OSError, UnicodeDecodeError) as exc:
            raise ShaderSourceError(
                f"ERROR::CANNOT OPEN::{source_path} {exc}"
            ) from exc

    def _build(self, shader_type: str, kind: str) -> None:
        api = _shader_api()
        try:
            compiled = api.Shader(self.source, shader_type)
        except api.ShaderException as exc:
            raise ShaderCompileError(
                f"ERROR::SHADER::{kind}::COMPILATION_FAILED\n {exc}"
            ) from exc
        self.shader_id = compiled.id
        _compiled_shaders[self.shader_id] = compiled


class VertexShader(Shader):
    """A compiled vertex shader."""

    def __init__(self, source_path=VERTEX_SHADER_PATH) -> None:
        super().__init__(source_path)
        self._build("vertex", "VERTEX")


class FragmentShader(Shader):
    """A compiled fragment shader."""

    def __init__(self, source_path=FRAGMENT_SHADER_PATH) -> None:
        super().__init__(source_path)
        self._build("fragment", "FRAGMENT")


class ShaderProgram:
    """A linked program made of a vertex and a fragment shader."""

    def __init__(self, vertex_shader_id: int, fragment_shader_id: int) -> None:
        api = _shader_api()
        ids = list(dict.fromkeys((vertex_shader_id, fragment_shader_id)))
        try:
            shaders = [_compiled_shaders[shader_id] for shader_id in ids]
        except KeyError as exc:
            raise ShaderLinkError(
                "ERROR::SHADER::PROGRAM::LINKING_FAILED\n"
                f"unknown shader id {exc.args[0]}"
            ) from exc
        try:
            self._program = api.ShaderProgram(*shaders)
        except api.ShaderException as exc:
            raise ShaderLinkError(
                "ERROR::SHADER::PROGRAM::LINKING_FAILED\n" + str(exc)
            ) from exc
        self.program_id = self._program.id

        for shader_id in ids:
            _compiled_shaders.pop(shader_id).delete()

    def set_uniform(self, name: str, value) -> None:
        """Assign a bool, int, float or 4x4 matrix to a uniform of the bound program."""
        if isinstance(value, (bool, np.bool_)):
            payload = int(value)
        elif isinstance(value, (int, np.integer)):
            payload = int(value)
        elif isinstance(value, (float, np.floating)):
            payload = float(value)
        elif isinstance(value, np.ndarray) and value.shape == (4, 4):
            payload = tuple(
                float(x) for x in value.astype(np.float32).flatten(order="F")
            )
        else:
            raise TypeError(f"unsupported uniform type: {type(value).__name__}")

        api = _shader_api()
        try:
            self._program[name] = payload
        except (api.ShaderException, KeyError):
            # A uniform the shader does not use is silently ignored.
            pass


class BufferSetup:
    """Vertex array and buffers holding the cube's interleaved vertex data."""

    def __init__(self) -> None:
        gl = _gl()
        vertexarray, vertexbuffer = _buffer_api()
        self.vertices = CUBE_VERTICES
        self.indices = CUBE_INDICES

        self._vao = vertexarray.VertexArray()
        self.vao = self._vao.id
        gl.glBindVertexArray(self.vao)

        vertex_bytes = np.asarray(self.vertices, dtype=np.float32).tobytes()
        self._vbo = vertexbuffer.BufferObject(len(vertex_bytes))
        self.vbo = self._vbo.id
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, len(vertex_bytes), vertex_bytes, gl.GL_STATIC_DRAW
        )

        self.ebo = 0
        self._ebo = None
        if self.indices:
            index_bytes = np.asarray(self.indices, dtype=np.uint32).tobytes()
            self._ebo = vertexbuffer.BufferObject(len(index_bytes))
            self.ebo = self._ebo.id
            gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self.ebo)
            gl.glBufferData(
                gl.GL_ELEMENT_ARRAY_BUFFER, len(index_bytes), index_bytes,
                gl.GL_STATIC_DRAW,
            )

        self.enable_vertex_attribute(VSLocation.POSITION)
        self.enable_vertex_attribute(VSLocation.TEXTURE)

    def enable_vertex_attribute(self, location) -> None:
        """Describe and enable one attribute of the bound vertex buffer."""
        gl = _gl()
        layout = attribute_layout(location)
        index = int(layout.location)
        gl.glVertexAttribPointer(
            index, layout.size, gl.GL_FLOAT, gl.GL_FALSE,
            layout.stride_bytes, layout.offset_bytes,
        )
        gl.glEnableVertexAttribArray(index)


class GLState:
    """The full rendering state: shaders, buffers, textures and a clock."""

    def __init__(self) -> None:
        gl = _gl()
        gl.glViewport(0, 0, WINDOW_WIDTH, WINDOW_HEIGHT)
        gl.glEnable(gl.GL_DEBUG_OUTPUT)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glClearColor(*CLEAR_COLOR)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)

        vertex_shader = VertexShader()
        fragment_shader = FragmentShader()
        self.shader_program = ShaderProgram(
            vertex_shader.shader_id, fragment_shader.shader_id
        )
        self.buffer = BufferSetup()
        self.shelf_texture = Texture(SHELF_TEXTURE_PATH)
        self.ducky_texture = Texture(DUCKY_TEXTURE_PATH)
        self._started = time.perf_counter()
        _report_gl_errors()

    def draw(self, window) -> None:
        """Draw one frame of the cube into the current context."""
        gl = _gl()
        program = self.shader_program
        gl.glUseProgram(program.program_id)

        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.shelf_texture.tex_id)
        gl.glActiveTexture(gl.GL_TEXTURE0 + 1)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.ducky_texture.tex_id)

        program.set_uniform("texture1", DEFAULT_TEXTURE_UNIT)
        program.set_uniform("texture2", DEFAULT_TEXTURE_UNIT + 1)

        elapsed = time.perf_counter() - self._started
        program.set_uniform("model", model_matrix(elapsed))
        program.set_uniform("projection", projection_matrix(WINDOW_WIDTH, WINDOW_HEIGHT))
        program.set_uniform("view", view_matrix())

        gl.glBindVertexArray(self.buffer.vao)
        gl.glDrawArrays(gl.GL_TRIANGLES, 0, vertex_count(self.buffer.vertices))
        _report_gl_errors()