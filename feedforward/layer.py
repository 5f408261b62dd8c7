"""
layer.py
~~~~~~~~

An ordered, fixed-length group of neurons evaluated together.

Layers are built either from an explicit list of neurons::

    layer = Layer([Neuron(), Neuron()])

or from a neuron count::

    layer = Layer.from_count(3)
"""

import logging
import numbers
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .exceptions import InvalidArgumentError
from .id_generator import IdGenerator, get_default_id_generator
from .neuron import Neuron, RangeType

logger = logging.getLogger(__name__)


def _check_count(count) -> int:
    # bool is an int subclass but never a neuron count
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        raise InvalidArgumentError(
            f"Neuron count must be an integer, got {type(count).__name__}"
        )
    if count < 0:
        raise InvalidArgumentError(
            f"Neuron count must be non-negative, got {count}"
        )
    return int(count)


class Layer:
    """Ordered sequence of neurons with a unique id."""

    TYPE = 'Layer'

    def __init__(
        self,
        neurons: Sequence[Neuron],
        *,
        id_generator: Optional[IdGenerator] = None
    ):
        """
        Create a layer from existing neurons.

        Args:
            neurons: Neurons in evaluation order
            id_generator: Allocator for the layer id (process default if omitted)

        Raises:
            InvalidArgumentError: If ``neurons`` is not a sequence of Neuron
        """
        if isinstance(neurons, (str, bytes)) or not isinstance(neurons, Sequence):
            raise InvalidArgumentError(
                f"Layer requires a sequence of neurons, got {type(neurons).__name__}"
            )
        for neuron in neurons:
            if not isinstance(neuron, Neuron):
                raise InvalidArgumentError(
                    f"Layer members must be Neuron, got {type(neuron).__name__}"
                )

        generator = id_generator or get_default_id_generator()
        self._id = generator.generate_id(self.TYPE)
        self._neurons: List[Neuron] = list(neurons)

    @classmethod
    def from_count(
        cls,
        count: int,
        *,
        id_generator: Optional[IdGenerator] = None,
        rng: Optional[np.random.Generator] = None,
        weight_range: Optional[RangeType] = None,
        threshold_range: Optional[RangeType] = None
    ) -> 'Layer':
        """
        Build a layer of ``count`` default neurons.

        Raises:
            InvalidArgumentError: If ``count`` is not a non-negative integer
        """
        count = _check_count(count)
        generator = id_generator or get_default_id_generator()
        neurons = [
            Neuron(
                id_generator=generator,
                rng=rng,
                weight_range=weight_range,
                threshold_range=threshold_range
            )
            for _ in range(count)
        ]
        layer = cls(neurons, id_generator=generator)
        logger.debug(f"Built {layer.id} with {count} neurons")
        return layer

    @classmethod
    def from_values(
        cls,
        values: Sequence[float],
        *,
        id_generator: Optional[IdGenerator] = None
    ) -> 'Layer':
        """
        Build a layer with one neuron per value, outputs set in order.

        Weights and thresholds are fixed at 0.0, so no random values are
        drawn.

        Raises:
            InvalidArgumentError: If ``values`` is not a sequence of real numbers
        """
        if isinstance(values, np.ndarray):
            if values.ndim != 1:
                raise InvalidArgumentError(
                    f"Input array must be one-dimensional, got shape {values.shape}"
                )
            values = values.tolist()
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise InvalidArgumentError(
                f"Input must be a sequence of numbers, got {type(values).__name__}"
            )
        for value in values:
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidArgumentError(
                    f"Input values must be real numbers, got {type(value).__name__}"
                )

        generator = id_generator or get_default_id_generator()
        neurons = [
            Neuron(value, id_generator=generator, weight=0.0, threshold=0.0)
            for value in values
        ]
        return cls(neurons, id_generator=generator)

    @property
    def id(self) -> str:
        return self._id

    def neurons(self) -> List[Neuron]:
        """Return the neurons by reference."""
        return self._neurons

    def outputs(self) -> List[float]:
        """Return a new list of neuron outputs in order."""
        return [neuron.output for neuron in self._neurons]

    def __len__(self) -> int:
        return len(self._neurons)

    def __iter__(self) -> Iterator[Neuron]:
        return iter(self._neurons)

    def __repr__(self) -> str:
        return f"Layer(id={self._id!r}, neurons={len(self._neurons)})"
