"""Tensors, synthetic datasets, IDX readers and classic image-processing algorithms on NumPy."""

__version__ = "1.0.0"