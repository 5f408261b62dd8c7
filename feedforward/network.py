"""
network.py
~~~~~~~~~~

A feed-forward neural network assembled from layers.

Usage::

    net = Network("unique_name")
    net.push_input_layer(3)
    net.push_hidden_layer(5)
    net.push_output_layer(3)

    net.run()              # returns the output Layer
    net.return_vector = True
    net.run([0.2, 0.4, 0.9])  # returns a list of output values

The stack is always ordered input, hidden layers in push order, output.
There is no training: weights and thresholds keep whatever values they
were given.
"""

import logging
import numbers
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .activations import ActivationRegistry, default_registry
from .exceptions import (
    DuplicatePushError,
    EmptyNetworkError,
    InvalidArgumentError,
)
from .id_generator import IdGenerator, get_default_id_generator
from .inspection import format_network
from .layer import Layer
from .neuron import RangeType, default_range, get_default_rng

logger = logging.getLogger(__name__)

LayerOrCount = Union[Layer, int]
RunInput = Optional[Union[Layer, Sequence[float], np.ndarray]]

DEFAULT_MIN = 0.0
DEFAULT_MAX = 1.0


class Network:
    """
    Feed-forward network with one input layer, any number of hidden
    layers and one output layer.

    Attributes:
        return_vector: When true, ``run`` returns a list of output values
            instead of the output layer
        squash: When true, every computed value is replaced by ``min`` or
            ``max`` depending on the neuron's threshold
        min: Squashed output used when a value exceeds the threshold
        max: Squashed output used otherwise
        activations: Registry resolving neuron activation function names
    """

    def __init__(
        self,
        network_id: str,
        *,
        id_generator: Optional[IdGenerator] = None,
        rng: Optional[np.random.Generator] = None,
        activations: Optional[ActivationRegistry] = None,
        weight_range: Optional[RangeType] = None,
        threshold_range: Optional[RangeType] = None
    ):
        """
        Initialize an empty network.

        Args:
            network_id: Name used to track, save and load the network
            id_generator: Allocator for layers built from counts
            rng: Random generator for neurons built from counts
            activations: Activation registry (built-in functions if omitted)
            weight_range: Random range for weights of auto-built neurons
            threshold_range: Random range for thresholds of auto-built neurons

        Raises:
            InvalidArgumentError: If ``network_id`` is not a non-empty string
        """
        if not network_id or not isinstance(network_id, str):
            raise InvalidArgumentError("network_id must be a non-empty string")

        self._id = network_id
        self._layers: List[Layer] = []
        self._input_pushed = False
        self._output_pushed = False

        self.return_vector = False
        self.squash = False
        self.min = DEFAULT_MIN
        self.max = DEFAULT_MAX

        self.activations = activations if activations is not None else default_registry()
        configured = default_range()
        self.weight_range = tuple(weight_range or configured)
        self.threshold_range = tuple(threshold_range or configured)

        self._id_generator = id_generator or get_default_id_generator()
        self._rng = rng

    @property
    def id(self) -> str:
        return self._id

    @property
    def layers(self) -> List[Layer]:
        """Copy of the layer stack in evaluation order."""
        return list(self._layers)

    @property
    def input_pushed(self) -> bool:
        return self._input_pushed

    @property
    def output_pushed(self) -> bool:
        return self._output_pushed

    @property
    def layer_sizes(self) -> List[int]:
        """Neuron count of every layer, in stack order."""
        return [len(layer) for layer in self._layers]

    def set_min(self, value: float) -> None:
        self.min = value

    def set_max(self, value: float) -> None:
        self.max = value

    # ------------------------------------------------------------------
    # Layer stack
    # ------------------------------------------------------------------

    def _as_layer(self, layer: LayerOrCount, role: str) -> Layer:
        if isinstance(layer, Layer):
            return layer
        if isinstance(layer, numbers.Integral) and not isinstance(layer, bool):
            return Layer.from_count(
                layer,
                id_generator=self._id_generator,
                rng=self._rng or get_default_rng(),
                weight_range=self.weight_range,
                threshold_range=self.threshold_range
            )
        raise InvalidArgumentError(
            f"No valid {role} layer data pushed: expected Layer or int, "
            f"got {type(layer).__name__}"
        )

    def push_input_layer(self, layer: LayerOrCount) -> Layer:
        """
        Place the input layer at the front of the stack.

        Args:
            layer: A Layer, or a neuron count to build one from

        Returns:
            Layer: The pushed layer

        Raises:
            DuplicatePushError: If an input layer was already pushed
            InvalidArgumentError: If ``layer`` is neither a Layer nor an int
        """
        if self._input_pushed:
            raise DuplicatePushError(
                f"An input layer was already pushed onto network '{self._id}'"
            )
        pushed = self._as_layer(layer, 'input')
        self._layers.insert(0, pushed)
        self._input_pushed = True
        logger.debug(f"Network '{self._id}': pushed input {pushed.id}")
        return pushed

    def push_hidden_layer(self, layer: LayerOrCount) -> Layer:
        """
        Add a hidden layer, keeping the output layer last.

        Args:
            layer: A Layer, or a neuron count to build one from

        Returns:
            Layer: The pushed layer

        Raises:
            InvalidArgumentError: If ``layer`` is neither a Layer nor an int
        """
        pushed = self._as_layer(layer, 'hidden')
        if self._output_pushed:
            self._layers.insert(len(self._layers) - 1, pushed)
        else:
            self._layers.append(pushed)
        logger.debug(f"Network '{self._id}': pushed hidden {pushed.id}")
        return pushed

    def push_output_layer(self, layer: LayerOrCount) -> Layer:
        """
        Append the output layer to the end of the stack.

        Args:
            layer: A Layer, or a neuron count to build one from

        Returns:
            Layer: The pushed layer

        Raises:
            DuplicatePushError: If an output layer was already pushed
            InvalidArgumentError: If ``layer`` is neither a Layer nor an int
        """
        if self._output_pushed:
            raise DuplicatePushError(
                f"An output layer was already pushed onto network '{self._id}'"
            )
        pushed = self._as_layer(layer, 'output')
        self._layers.append(pushed)
        self._output_pushed = True
        logger.debug(f"Network '{self._id}': pushed output {pushed.id}")
        return pushed

    # ------------------------------------------------------------------
    # Forward pass
    # ------------------------------------------------------------------

    def _resolve_input(self, input: RunInput) -> Tuple[Layer, List[Layer]]:
        """Return the starting layer and the layers to evaluate against it."""
        if input is None:
            if not self._layers:
                raise EmptyNetworkError(
                    f"Network '{self._id}' has no layers and no input was given"
                )
            return self._layers[0], self._layers[1:]

        if isinstance(input, Layer):
            return input, list(self._layers)

        # Anything else must be a vector of input values
        return Layer.from_values(input, id_generator=self._id_generator), list(self._layers)

    def _resolve_activations(
        self,
        stack: Sequence[Layer]
    ) -> List[List[Callable[[float], float]]]:
        """Look up every activation function before any output is touched."""
        return [
            [self.activations.get(neuron.activation_function) for neuron in layer.neurons()]
            for layer in stack
        ]

    def run(self, input: RunInput = None) -> Union[Layer, List[float]]:
        """
        Run the network forward once.

        Input can be given in three forms:

        * Nothing: the first layer of the stack is taken as already
          computed and the remaining layers are evaluated against it.
        * A Layer: its outputs feed the first pushed layer; the whole stack
          is evaluated.
        * A sequence of numbers: wrapped in a new layer, then as above.

        Each neuron's output becomes ``f(sum(weight * previous.output))``
        where ``f`` is its activation function. With ``squash`` set the
        output is instead ``min`` when the threshold is below that value
        and ``max`` otherwise.

        Returns:
            The last evaluated Layer, or a list of its outputs when
            ``return_vector`` is set

        Raises:
            EmptyNetworkError: If there is no input and no layers
            InvalidArgumentError: If ``input`` is not a Layer or vector
            UnknownActivationFunctionError: If a neuron names an
                unregistered function; no output is modified in that case
        """
        previous, stack = self._resolve_input(input)
        functions = self._resolve_activations(stack)

        logger.debug(
            f"Network '{self._id}': running {len(stack)} layer(s) from {previous.id}"
        )

        for layer, layer_functions in zip(stack, functions):
            for neuron, activation in zip(layer.neurons(), layer_functions):
                total = 0.0
                for source in previous.neurons():
                    total = neuron.weight * source.output + total

                value = activation(total)
                if self.squash:
                    # Values above the threshold squash to min
                    neuron.output = self.min if neuron.threshold < value else self.max
                else:
                    neuron.output = value
            previous = layer

        if self.return_vector:
            return previous.outputs()
        return previous

    # ------------------------------------------------------------------
    # Inspection and persistence support
    # ------------------------------------------------------------------

    def identifiers(self) -> Iterator[str]:
        """Yield the id of every layer and neuron in the stack."""
        for layer in self._layers:
            yield layer.id
            for neuron in layer.neurons():
                yield neuron.id

    def reserve_ids(self) -> None:
        """Advance the id generator past every id held by this network."""
        self._id_generator.reserve_all(self.identifiers())

    def describe(self) -> str:
        return format_network(self)

    def print_network(self, file=None) -> None:
        """Write a human-readable dump of the network to ``file`` (stdout)."""
        print(self.describe(), file=file)

    def __getstate__(self):
        state = self.__dict__.copy()
        # Restored from the loading process's defaults
        del state['_id_generator']
        del state['_rng']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._id_generator = get_default_id_generator()
        self._rng = None

    def __repr__(self) -> str:
        return f"Network(id={self._id!r}, layer_sizes={self.layer_sizes})"
