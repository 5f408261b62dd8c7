"""
feedforward
~~~~~~~~~~~

Minimal feed-forward neural network package.
Contains the neuron/layer data model, the network forward pass,
named activation functions, id generation and network persistence.
"""

from .activations import ActivationRegistry, default_registry, sigmoid
from .config import Settings, load_settings
from .exceptions import (
    DuplicatePushError,
    EmptyNetworkError,
    InvalidArgumentError,
    NetworkError,
    NetworkIOError,
    NetworkNotFoundError,
    PersistenceError,
    UnknownActivationFunctionError,
)
from .id_generator import IdGenerator, get_default_id_generator
from .layer import Layer
from .network import Network
from .neuron import Neuron
from .persistence import (
    NetworkDatabase,
    NetworkFileStore,
    NetworkStore,
    load_network,
    open_store,
    save_network,
)

__version__ = "1.0.0"

__all__ = [
    'ActivationRegistry',
    'DuplicatePushError',
    'EmptyNetworkError',
    'IdGenerator',
    'InvalidArgumentError',
    'Layer',
    'Network',
    'NetworkDatabase',
    'NetworkError',
    'NetworkFileStore',
    'NetworkIOError',
    'NetworkNotFoundError',
    'NetworkStore',
    'Neuron',
    'PersistenceError',
    'Settings',
    'UnknownActivationFunctionError',
    'default_registry',
    'get_default_id_generator',
    'load_network',
    'load_settings',
    'open_store',
    'save_network',
    'sigmoid',
]
