"""
neuron.py
~~~~~~~~~

A single neuron: weight, threshold, activation function name and output.
"""

import threading
from typing import Optional, Tuple

import numpy as np

from .activations import DEFAULT_ACTIVATION
from .config import load_settings
from .id_generator import IdGenerator, get_default_id_generator

RangeType = Tuple[float, float]

_default_rng: Optional[np.random.Generator] = None
_rng_lock = threading.Lock()


def default_range() -> RangeType:
    """Random range from FEEDFORWARD_WEIGHT_MIN / FEEDFORWARD_WEIGHT_MAX."""
    return load_settings().weight_range


def get_default_rng() -> np.random.Generator:
    """
    Get or create the shared random generator.

    Seeded from ``FEEDFORWARD_SEED`` when it is set.
    """
    global _default_rng
    with _rng_lock:
        if _default_rng is None:
            _default_rng = np.random.default_rng(load_settings().seed)
        return _default_rng


class Neuron:
    """
    A neuron in a fully connected layer.

    Weight and threshold start as uniform random draws from
    ``weight_range`` and ``threshold_range``, which default to the
    configured range, unless given explicitly. A neuron given both values
    draws nothing and leaves its ranges unresolved until a ``rand_*`` call.
    Output starts at the given value, or ``0.0``.
    """

    TYPE = 'Neuron'

    def __init__(
        self,
        output: Optional[float] = None,
        *,
        id_generator: Optional[IdGenerator] = None,
        rng: Optional[np.random.Generator] = None,
        weight_range: Optional[RangeType] = None,
        threshold_range: Optional[RangeType] = None,
        activation_function: str = DEFAULT_ACTIVATION,
        weight: Optional[float] = None,
        threshold: Optional[float] = None
    ):
        generator = id_generator or get_default_id_generator()
        self._id = generator.generate_id(self.TYPE)

        self.output = 0.0 if output is None else float(output)
        self.weight_range = tuple(weight_range) if weight_range else None
        self.threshold_range = tuple(threshold_range) if threshold_range else None
        self.activation_function = activation_function

        if weight is None:
            self.rand_weight(rng)
        else:
            self.weight = float(weight)
        if threshold is None:
            self.rand_threshold(rng)
        else:
            self.threshold = float(threshold)

    @property
    def id(self) -> str:
        return self._id

    def set_weight(self, value: float) -> None:
        self.weight = value

    def set_threshold(self, value: float) -> None:
        self.threshold = value

    def set_activation_function(self, name: str) -> None:
        self.activation_function = name

    def set_output(self, value: float) -> None:
        self.output = value

    def rand_weight(self, rng: Optional[np.random.Generator] = None) -> float:
        """Draw a new weight from ``weight_range`` and return it."""
        if self.weight_range is None:
            self.weight_range = default_range()
        rng = rng or get_default_rng()
        self.weight = float(rng.uniform(*self.weight_range))
        return self.weight

    def rand_threshold(self, rng: Optional[np.random.Generator] = None) -> float:
        """Draw a new threshold from ``threshold_range`` and return it."""
        if self.threshold_range is None:
            self.threshold_range = default_range()
        rng = rng or get_default_rng()
        self.threshold = float(rng.uniform(*self.threshold_range))
        return self.threshold

    def rand_all(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rand_weight(rng)
        self.rand_threshold(rng)

    def __repr__(self) -> str:
        return (
            f"Neuron(id={self._id!r}, weight={self.weight:.6f}, "
            f"threshold={self.threshold:.6f}, output={self.output!r}, "
            f"activation_function={self.activation_function!r})"
        )
