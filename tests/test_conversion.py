import numpy as np
import pytest

from visionlab.conversion import image_to_tensor, tensor_to_image
from visionlab.tensor import Tensor, float32


def _gray():
    return np.arange(12, dtype=np.uint8).reshape(3, 4) * 20


def _color():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)


def test_gray_image_gives_2d_tensor():
    tensor = image_to_tensor(_gray())
    assert tensor.shape == (3, 4)
    assert tensor.dtype == np.dtype(np.float32)
    assert tensor.at(1, 2) == float(_gray()[1, 2])


def test_color_image_keeps_channel_order():
    image = _color()
    tensor = image_to_tensor(image)
    assert tensor.shape == (4, 5, 3)
    for c in range(3):
        assert tensor.at(2, 3, c) == float(image[2, 3, c])


def test_single_channel_3d_image_is_gray():
    image = _gray()[:, :, None]
    assert image_to_tensor(image).shape == (3, 4)


@pytest.mark.parametrize("make", [_gray, _color])
def test_round_trip(make):
    image = make()
    result = tensor_to_image(image_to_tensor(image))
    assert result.dtype == np.uint8
    assert np.array_equal(result, image)


def test_empty_image_raises():
    with pytest.raises(ValueError):
        image_to_tensor(np.zeros((0, 0), dtype=np.uint8))


def test_four_channels_raises():
    with pytest.raises(ValueError):
        image_to_tensor(np.zeros((2, 2, 4), dtype=np.uint8))


def test_empty_tensor_raises():
    with pytest.raises(ValueError):
        tensor_to_image(Tensor(dtype=float32))


def test_one_dimensional_tensor_raises():
    with pytest.raises(ValueError):
        tensor_to_image(Tensor.from_list([1.0, 2.0], float32))


def test_fractional_values_truncate():
    tensor = Tensor.from_list([[1.9, 2.2], [254.7, 0.5]], float32)
    assert np.array_equal(tensor_to_image(tensor), np.array([[1, 2], [254, 0]], dtype=np.uint8))


def test_out_of_range_values_clip():
    tensor = Tensor.from_list([[300.0, -5.0]], float32)
    assert np.array_equal(tensor_to_image(tensor), np.array([[255, 0]], dtype=np.uint8))