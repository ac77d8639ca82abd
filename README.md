# visionlab

Small building blocks for computer vision and image processing, built on NumPy.

## Modules

- `visionlab.tensor`: `Tensor`, an n-dimensional array of a fixed dtype stored
  flat in row-major order. It has shape-checked `+`, `-`, `*` and `/` (division
  by zero raises `ZeroDivisionError`), `Tensor.dot` for 1-D and 2-D operands,
  `cast`, `clone`, element access through `at`, `set` and indexing, the
  constructors `full`, `from_list`, `zeros`, `ones` and `random`, and a printed
  form for 1-D and 2-D tensors. Also `Rect`, a rectangle with non-negative
  position and size.
- `visionlab.multivariate_normal`: `MultivariateNormal` draws samples from
  N(mean, covariance) through a Cholesky factor (`random`) and returns random
  permutations (`shuffle_indices`). A `seed` makes it reproducible.
- `visionlab.datasets`: `TwoDimensionDataset` generates one Gaussian cluster
  of labelled points in the plane per class. `Dataset.load(percent_train,
  shuffle, one_hot)` splits the data into `(x_train, y_train, x_test, y_test)`,
  with labels as indices or one-hot rows. Loading before `setup` raises
  `DatasetNotSetupError`.
- `visionlab.conversion`: `image_to_tensor` turns an 8-bit grayscale or
  three-channel image array into a float32 `Tensor`. `tensor_to_image` turns a
  tensor back into a uint8 array, truncating and clipping values to 0..255.
- `visionlab.activations`: `sigmoid`, `sigmoid_derivative`, `relu`,
  `relu_derivative`, `softmax`, `softmax_rowwise`, `mse_loss`,
  `cross_entropy_loss`, and `grouped_samples`, which draws clustered points
  and returns them shuffled, one sample per column.
- `visionlab.edge_detection`: `calculate_gradient`, `non_maximum_suppression`
  and `hysteresis_thresholding`, plus `EdgeDetector` with `apply_sobel`
  (grayscale only) and `canny` (grayscale or BGR).
- `visionlab.sift`: `SIFTDetector` with `create_gaussian_kernel`,
  `build_scale_space`, `build_dog`, `is_extremum`, `is_valid_keypoint` and
  `detect`, which returns `Keypoint` objects at the valid extrema of the
  difference-of-Gaussian pyramid.
- `visionlab.blur`: `apply_kernel` correlates any odd-sized kernel over a
  grayscale or multi-channel 8-bit image, saturating at 255.
- `visionlab.idx`: `read_idx_images`, `read_idx_labels` and
  `images_to_arrays` for MNIST-style IDX files.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Examples

```python
from visionlab.tensor import Tensor

a = Tensor.from_list([[1, 2], [3, 4]], dtype="float32")
b = Tensor.ones([2, 2], dtype="float32")
print(a + b)
print(Tensor.dot(a, b))
print(a.cast("int32"))
```

```python
import numpy as np
from visionlab.datasets import TwoDimensionDataset

means = np.array([[1, 1], [1, 6], [6, 1], [6, 6]], dtype=float)
dataset = TwoDimensionDataset(1000, 4)
dataset.setup(means, np.eye(2))
x_train, y_train, x_test, y_test = dataset.load(80, shuffle=True, one_hot=True)
```

```python
import numpy as np
from visionlab.edge_detection import EdgeDetector

image = np.zeros((32, 32, 3), dtype=np.uint8)
image[8:24, 8:24] = 255
edges = EdgeDetector(image).canny(50.0, 150.0)
```

```python
from visionlab.idx import read_idx_images, read_idx_labels, images_to_arrays

images = read_idx_images("train-images.idx3-ubyte")
labels = read_idx_labels("train-labels.idx1-ubyte")
arrays = images_to_arrays(images, 28, 28)
```

`read_idx_images` returns each image as raw bytes; pass the row and column
counts of your file to `images_to_arrays` (28 by 28 is the default).

## Errors

An operation that cannot be carried out raises an exception: mismatched
tensor shapes, out-of-range indices, division by zero, a covariance that is
not positive definite, loading a dataset before `setup`, and truncated IDX
files are all reported this way.

## What it does not do

The package works on arrays already in memory. It does not read or write
image or video files, open windows to display images, capture from cameras,
or train neural networks. It provides no command-line program.