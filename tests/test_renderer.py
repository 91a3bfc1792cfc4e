import pytest
from PIL import Image as PILImage

from cubeview.renderer import (
    FragmentShader,
    Image,
    ImageLoadError,
    Shader,
    ShaderSourceError,
    Texture,
    VertexShader,
    format_debug_message,
)


def _save(tmp_path, name, img):
    path = tmp_path / name
    img.save(path)
    return path


def test_debug_message_marks_errors():
    text = format_debug_message(0x824C, 0x9146, "boom")
    assert text == "GL CALLBACK: ** GL ERROR ** type = 0x824c, severity = 0x9146, message = boom"


def test_debug_message_other_types_unmarked():
    text = format_debug_message(0x8250, 0x826B, "note")
    assert text == "GL CALLBACK:  type = 0x8250, severity = 0x826b, message = note"
    assert "** GL ERROR **" not in text


def test_image_rgb_round_trip(tmp_path):
    src = PILImage.new("RGB", (3, 2))
    src.putdata([(i, 2 * i, 3 * i) for i in range(6)])
    image = Image(_save(tmp_path, "a.png", src))
    assert (image.width, image.height, image.channels) == (3, 2, 3)
    assert image.data == src.tobytes()
    assert len(image.data) == image.width * image.height * image.channels


def test_image_rgba_keeps_alpha(tmp_path):
    src = PILImage.new("RGBA", (2, 2), (10, 20, 30, 40))
    image = Image(_save(tmp_path, "a.png", src))
    assert image.channels == 4
    assert image.data == src.tobytes()


def test_image_greyscale_has_one_channel(tmp_path):
    src = PILImage.new("L", (4, 1), 77)
    image = Image(_save(tmp_path, "g.png", src))
    assert image.channels == 1
    assert image.data == bytes([77] * 4)


def test_palette_image_expands_to_rgb(tmp_path):
    src = PILImage.new("RGB", (2, 2), (200, 100, 50)).convert("P")
    image = Image(_save(tmp_path, "p.png", src))
    assert image.channels == 3
    assert image.data == bytes([200, 100, 50] * 4)


def test_missing_image_raises(tmp_path):
    path = tmp_path / "missing.png"
    with pytest.raises(ImageLoadError) as excinfo:
        Image(path)
    assert str(path) in str(excinfo.value)


def test_undecodable_image_raises(tmp_path):
    path = tmp_path / "bad.png"
    path.write_text("not an image")
    with pytest.raises(ImageLoadError):
        Image(path)


def test_texture_fails_on_missing_image_before_gl(tmp_path):
    with pytest.raises(ImageLoadError):
        Texture(tmp_path / "nope.jpg")


def test_shader_reads_source(tmp_path):
    path = tmp_path / "shader.vs"
    code = "#version 430 core\nvoid main() {}\n"
    path.write_text(code)
    shader = Shader(path)
    assert shader.source == code
    assert shader.shader_id == 0


def test_shader_missing_file_raises(tmp_path):
    path = tmp_path / "missing.vs"
    with pytest.raises(ShaderSourceError) as excinfo:
        Shader(path)
    assert str(excinfo.value).startswith("ERROR::CANNOT OPEN::")
    assert str(path) in str(excinfo.value)


@pytest.mark.parametrize("shader_class", [VertexShader, FragmentShader])
def test_specialised_shaders_fail_on_missing_source(tmp_path, shader_class):
    with pytest.raises(ShaderSourceError):
        shader_class(tmp_path / "absent.glsl")