import numpy as np
import pytest

from visionlab.edge_detection import (
    EdgeDetector,
    calculate_gradient,
    hysteresis_thresholding,
    non_maximum_suppression,
)


def step_image(rows=8, cols=8, value=100):
    image = np.zeros((rows, cols), dtype=np.uint8)
    image[:, cols // 2:] = value
    return image


def test_gradient_of_constant_image_is_zero():
    magnitude, direction = calculate_gradient(np.full((6, 6), 42, dtype=np.uint8))
    assert np.all(magnitude == 0)
    assert np.all(direction == 0)


def test_gradient_of_vertical_step_is_horizontal():
    magnitude, direction = calculate_gradient(step_image())
    assert magnitude[3, 4] > 0
    assert magnitude[3, 3] > 0
    assert magnitude[3, 1] == 0
    assert direction[3, 4] == 0
    # border pixels are never written
    assert np.all(magnitude[0] == 0) and np.all(magnitude[:, -1] == 0)


def test_gradient_direction_range():
    rng = np.random.default_rng(0)
    _, direction = calculate_gradient(rng.integers(0, 256, (10, 10), dtype=np.uint8))
    assert np.all((direction >= 0) & (direction <= 180))


def test_gradient_rejects_colour():
    with pytest.raises(ValueError):
        calculate_gradient(np.zeros((4, 4, 3), dtype=np.uint8))


def test_non_maximum_suppression_keeps_ridge():
    magnitude = np.zeros((5, 5))
    magnitude[:, 1] = 1.0
    magnitude[:, 2] = 5.0
    magnitude[:, 3] = 1.0
    direction = np.zeros((5, 5))
    out = non_maximum_suppression(magnitude, direction)
    expected = np.zeros((5, 5))
    expected[1:4, 2] = 5.0
    assert out.shape == (5, 5)
    assert np.array_equal(out, expected)


def test_non_maximum_suppression_shape_mismatch():
    with pytest.raises(ValueError):
        non_maximum_suppression(np.zeros((3, 3)), np.zeros((4, 4)))


def test_hysteresis_connects_weak_to_strong():
    values = np.zeros((5, 5))
    values[2, 1] = 200
    values[2, 2] = 80
    values[2, 3] = 80
    values[0, 0] = 80
    out = hysteresis_thresholding(values, 50, 150)
    assert out[2, 1] == 255
    assert out[2, 2] == 255
    assert out[2, 3] == 255
    assert out[0, 0] == 0
    assert set(np.unique(out).tolist()) <= {0, 255}


def test_hysteresis_strong_on_top_row_does_not_seed():
    values = np.zeros((5, 5))
    values[0, 2] = 200
    values[0, 3] = 80
    out = hysteresis_thresholding(values, 50, 150)
    assert out[0, 2] == 255
    assert out[0, 3] == 0


def test_apply_sobel_constant_image():
    magnitude, direction = EdgeDetector(np.full((5, 5), 9, dtype=np.uint8)).apply_sobel()
    assert magnitude.dtype == np.uint8
    assert np.all(magnitude == 0)
    assert np.all(direction == 0)


def test_apply_sobel_clips_to_255():
    magnitude, _ = EdgeDetector(step_image(value=250)).apply_sobel()
    assert magnitude.max() == 255


def test_apply_sobel_without_dx_ignores_vertical_edges():
    magnitude, _ = EdgeDetector(step_image()).apply_sobel(dx=False, dy=True)
    assert np.all(magnitude == 0)
    full, _ = EdgeDetector(step_image()).apply_sobel()
    assert full.max() > 0


def test_apply_sobel_rejects_empty_and_colour():
    with pytest.raises(ValueError):
        EdgeDetector(np.zeros((0, 0), dtype=np.uint8)).apply_sobel()
    with pytest.raises(ValueError):
        EdgeDetector(np.zeros((4, 4, 3), dtype=np.uint8)).apply_sobel()


def test_canny_blank_image_has_no_edges():
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    edges = EdgeDetector(image).canny(50, 100)
    assert edges.shape == (10, 10)
    assert int(edges.max()) == 0
    assert np.array_equal(edges, np.zeros((10, 10), dtype=np.uint8))


def test_canny_finds_step_edge():
    gray = step_image(12, 12, 200)
    colour = np.repeat(gray[:, :, None], 3, axis=2)
    edges = EdgeDetector(colour).canny(50, 100)
    assert edges.shape == gray.shape
    assert set(np.unique(edges).tolist()) == {0, 255}
    assert np.all(edges[:, :3] == 0)
    assert np.any(edges[:, 5:7] == 255)


def test_canny_rejects_empty():
    with pytest.raises(ValueError):
        EdgeDetector(np.zeros((0, 0, 3), dtype=np.uint8)).canny(10, 20)