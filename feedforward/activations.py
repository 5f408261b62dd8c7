"""
activations.py
~~~~~~~~~~~~~~

Named activation functions.

Neurons refer to their activation function by name. A network resolves
those names through its ``ActivationRegistry`` when it runs, so a function
can be replaced by registering a new one under the same name.

Functions must be defined at module level for a network holding them to
be persisted.
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Optional

from .exceptions import UnknownActivationFunctionError

logger = logging.getLogger(__name__)

ActivationFunction = Callable[[float], float]

DEFAULT_ACTIVATION = 'sigmoid'


def sigmoid(x: float) -> float:
    """Logistic sigmoid, ``1 / (1 + e^-x)``."""
    try:
        return 1.0 / (1.0 + math.exp(-x))
    except OverflowError:
        # e^-x is infinite for very negative x
        return 0.0


def tanh(x: float) -> float:
    """Hyperbolic tangent."""
    return math.tanh(x)


def relu(x: float) -> float:
    """Rectified linear unit."""
    return x if x > 0.0 else 0.0


def linear(x: float) -> float:
    """Identity."""
    return x


class ActivationRegistry:
    """Mapping from activation name to function."""

    def __init__(self, functions: Optional[Dict[str, ActivationFunction]] = None):
        self._functions: Dict[str, ActivationFunction] = dict(functions or {})

    def register(self, name: str, func: ActivationFunction) -> None:
        """
        Register ``func`` under ``name``, replacing any existing entry.

        Raises:
            TypeError: If ``func`` is not callable
        """
        if not callable(func):
            raise TypeError(f"Activation function '{name}' must be callable")
        if name in self._functions:
            logger.debug(f"Replacing activation function '{name}'")
        self._functions[name] = func

    def unregister(self, name: str) -> None:
        """Remove ``name`` from the registry."""
        try:
            del self._functions[name]
        except KeyError:
            raise UnknownActivationFunctionError(name) from None

    def get(self, name: str) -> ActivationFunction:
        """
        Look up an activation function.

        Raises:
            UnknownActivationFunctionError: If nothing is registered as ``name``
        """
        try:
            return self._functions[name]
        except KeyError:
            raise UnknownActivationFunctionError(name) from None

    def names(self) -> List[str]:
        return sorted(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __repr__(self) -> str:
        return f"ActivationRegistry({self.names()})"


def default_registry() -> ActivationRegistry:
    """
    Build a registry holding the built-in functions.

    Returns a new instance each call, so registering on one network never
    affects another.
    """
    return ActivationRegistry({
        'sigmoid': sigmoid,
        'tanh': tanh,
        'relu': relu,
        'linear': linear,
    })
