[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "visionlab"
version = "1.0.0"
description = "Tensors, synthetic datasets and classic image-processing algorithms (edges, blur, SIFT scale space) on NumPy"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "computer-vision",
    "image-processing",
    "tensor",
    "canny",
    "sobel",
    "sift",
    "gaussian",
    "mnist",
    "idx",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["visionlab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
