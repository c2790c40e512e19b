"""
Fixed-topology feed-forward network evaluated with numpy.

The flat weight vector is laid out layer by layer: for each pair of
consecutive layers, an (in_size x out_size) kernel in row-major order,
followed by out_size biases. Hidden layers use ReLU, the output layer a
sigmoid, so every output is in [0, 1].
"""
from typing import List, Sequence, Tuple

import numpy as np


def weight_count(n_input: int, hidden: Sequence[int], n_output: int) -> int:
    sizes = [n_input, *hidden, n_output]
    return sum(a * b + b for a, b in zip(sizes[:-1], sizes[1:]))


def _relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(x, 0.0)


def _sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


class Brain:
    def __init__(self, weights: Sequence[float], n_input: int, hidden: Sequence[int], n_output: int):
        expected = weight_count(n_input, hidden, n_output)
        flat = np.asarray(weights, dtype=float)
        if flat.size != expected:
            raise ValueError(f"expected {expected} weights, got {flat.size}")
        self.sizes = (n_input, *hidden, n_output)
        self.layers: List[Tuple[np.ndarray, np.ndarray]] = []
        i = 0
        for a, b in zip(self.sizes[:-1], self.sizes[1:]):
            kernel = flat[i:i + a * b].reshape(a, b)
            i += a * b
            bias = flat[i:i + b]
            i += b
            self.layers.append((kernel, bias))

    def predict(self, inputs: Sequence[float]) -> np.ndarray:
        x = np.asarray(inputs, dtype=float)
        last = len(self.layers) - 1
        for n, (kernel, bias) in enumerate(self.layers):
            x = x @ kernel + bias
            x = _sigmoid(x) if n == last else _relu(x)
        return x

    def dispose(self) -> None:
        self.layers = []
