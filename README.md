# cubeview

`cubeview` opens a 1133×755 window titled "Cube" and draws a textured cube
that spins at 50° per second about the axis (0.5, 1, 0), seen through a 45°
perspective camera placed 3 units back from it. The window asks for an
OpenGL 4.3 context with a 24-bit depth buffer, an 8-bit stencil buffer and
4× antialiasing.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
cubeview
cubeview --fps 120
```

`--fps` caps the frame rate (a positive integer; the default is 60).

The program reads these files, with paths relative to the working directory:

- `../../../shaders/shader.vs`: the vertex shader
- `../../../shaders/shader.fs`: the fragment shader
- `../../../resources/metal.jpg`: the first texture, bound to unit 0 as the uniform `texture1`
- `../../../resources/rubber-ducky.png`: the second texture, bound to unit 1 as the uniform `texture2`

The vertex shader gets the position (3 floats) at attribute location 0 and
the texture coordinate (2 floats) at location 1, and the `model`, `view` and
`projection` matrices as uniforms. Textures use repeat wrapping, nearest
filtering and mipmaps.

Close the window or press Escape to quit. If the window cannot be created,
or a shader fails to compile or link, the program writes the error to
standard error and exits. A shader or texture file that is missing or cannot
be read raises `ShaderSourceError` or `ImageLoadError` from
`cubeview.renderer`.

## What it does not include

The package ships no shader or texture files; they must be supplied at the
paths above. The window has a fixed size and the cube is the only scene.

## Using the pieces

The geometry and matrix helpers need no OpenGL context:

```python
from cubeview.layout import CUBE_VERTICES, VSLocation, attribute_layout, vertex_count
from cubeview.transforms import model_matrix, view_matrix, projection_matrix

attribute_layout(VSLocation.TEXTURE)        # size 2, offset 3 floats, stride 5
vertex_count(CUBE_VERTICES)                 # 36
model = model_matrix(1.5)                   # cube rotation after 1.5 seconds
view = view_matrix()                        # scene moved 3 units back along -z
projection = projection_matrix(1133, 755)   # 45° perspective, near 0.1, far 1000
```

`cubeview.transforms` also provides `identity`, `rotate`, `translate` and
`perspective`, which return 4×4 `numpy` arrays in row-major order acting on
column vectors.

`cubeview.window.context_settings()` returns the requested context settings
as a `ContextSettings` value. `cubeview.renderer.Image` decodes an image file
into its width, height, channel count and raw bytes without needing a
context; `format_debug_message` formats an OpenGL debug message as one line.