import math

import numpy as np
import pytest

from cubeview.transforms import (
    FAR_PLANE,
    NEAR_PLANE,
    identity,
    model_matrix,
    perspective,
    projection_matrix,
    rotate,
    translate,
    view_matrix,
)


def _project(matrix, point):
    clip = matrix @ np.array([*point, 1.0])
    return clip[:3] / clip[3]


def test_identity_is_eye():
    assert np.array_equal(identity(), np.eye(4))


def test_rotate_by_zero_is_identity():
    assert np.allclose(rotate(identity(), 0.0, (1.0, 2.0, 3.0)), np.eye(4))


def test_rotate_is_orthonormal():
    r = rotate(identity(), 1.234, (0.5, 1.0, 0.0))[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3), atol=1e-6)
    assert np.isclose(np.linalg.det(r), 1.0, atol=1e-6)


def test_rotate_keeps_axis_fixed():
    axis = np.array([0.5, 1.0, 0.0])
    r = rotate(identity(), 0.7, axis)
    moved = r @ np.array([*axis, 0.0])
    assert np.allclose(moved[:3], axis, atol=1e-6)


def test_rotate_quarter_turn_about_z():
    r = rotate(identity(), math.pi / 2, (0.0, 0.0, 1.0))
    assert np.allclose(r @ np.array([1.0, 0.0, 0.0, 1.0]), [0.0, 1.0, 0.0, 1.0], atol=1e-6)


def test_rotate_axis_length_does_not_matter():
    a = rotate(identity(), 0.9, (0.0, 2.0, 0.0))
    b = rotate(identity(), 0.9, (0.0, 5.0, 0.0))
    assert np.allclose(a, b)


def test_rotate_zero_axis_rejected():
    with pytest.raises(ValueError):
        rotate(identity(), 1.0, (0.0, 0.0, 0.0))


def test_bad_matrix_shape_rejected():
    with pytest.raises(ValueError):
        translate(np.eye(3), (1.0, 2.0, 3.0))


def test_translate_moves_origin():
    t = translate(identity(), (1.0, 2.0, 3.0))
    assert np.allclose(t @ np.array([0.0, 0.0, 0.0, 1.0]), [1.0, 2.0, 3.0, 1.0])


def test_translate_composes_additively():
    a = translate(translate(identity(), (1.0, -2.0, 0.5)), (0.25, 4.0, -1.0))
    b = translate(identity(), (1.25, 2.0, -0.5))
    assert np.allclose(a, b)


def test_translate_leaves_directions_alone():
    t = translate(identity(), (7.0, 8.0, 9.0))
    assert np.allclose(t @ np.array([1.0, 0.0, 0.0, 0.0]), [1.0, 0.0, 0.0, 0.0])


def test_perspective_maps_planes_to_depth_range():
    p = perspective(math.radians(60.0), 1.5, 0.5, 20.0)
    assert np.isclose(_project(p, (0.0, 0.0, -0.5))[2], -1.0, atol=1e-5)
    assert np.isclose(_project(p, (0.0, 0.0, -20.0))[2], 1.0, atol=1e-5)


def test_perspective_aspect_relation():
    aspect = 1.5
    p = perspective(math.radians(60.0), aspect, 0.5, 20.0)
    assert np.isclose(p[0, 0] * aspect, p[1, 1])


def test_perspective_zero_aspect_rejected():
    with pytest.raises(ValueError):
        perspective(math.radians(45.0), 0.0, 0.1, 100.0)


def test_perspective_equal_planes_rejected():
    with pytest.raises(ValueError):
        perspective(math.radians(45.0), 1.0, 1.0, 1.0)


def test_model_matrix_at_start_is_identity():
    assert np.allclose(model_matrix(0.0), np.eye(4))


def test_model_matrix_is_pure_rotation():
    m = model_matrix(3.3)
    assert np.allclose(m[:3, 3], 0.0)
    assert np.allclose(m[:3, :3] @ m[:3, :3].T, np.eye(3), atol=1e-6)


def test_model_matrix_angle_grows_with_time():
    def angle(m):
        diagonal_sum = float(m[0, 0] + m[1, 1] + m[2, 2])
        return math.acos((diagonal_sum - 1.0) / 2.0)

    assert angle(model_matrix(1.0)) == pytest.approx(2 * angle(model_matrix(0.5)), rel=1e-4)


def test_view_matrix_pushes_scene_back():
    assert np.allclose(view_matrix() @ np.array([0.0, 0.0, 0.0, 1.0]), [0.0, 0.0, -3.0, 1.0])


def test_projection_matrix_uses_window_aspect():
    p = projection_matrix(1133, 755)
    assert np.isclose(p[0, 0] * 1133 / 755, p[1, 1])


def test_projection_matrix_depth_planes():
    p = projection_matrix(1133, 755)
    assert np.isclose(_project(p, (0.0, 0.0, -NEAR_PLANE))[2], -1.0, atol=1e-4)
    assert np.isclose(_project(p, (0.0, 0.0, -FAR_PLANE))[2], 1.0, atol=1e-4)


def test_projection_matrix_zero_height_rejected():
    with pytest.raises(ValueError):
        projection_matrix(100, 0)