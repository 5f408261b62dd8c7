"""
exceptions.py
~~~~~~~~~~~~~

Error kinds raised by the feedforward package.
"""


class NetworkError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(NetworkError, TypeError):
    """A layer, count or input vector of the wrong type was supplied."""


class DuplicatePushError(NetworkError):
    """An input or output layer was pushed onto a network a second time."""


class UnknownActivationFunctionError(NetworkError, KeyError):
    """No activation function is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown activation function '{name}'")

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message
        return self.args[0]


class EmptyNetworkError(NetworkError):
    """run() was called without input on a network with no layers."""


class PersistenceError(NetworkError):
    """Base class for storage failures."""


class NetworkNotFoundError(PersistenceError):
    """No stored record exists for the requested network id."""

    def __init__(self, network_id: str):
        self.network_id = network_id
        super().__init__(f"Network '{network_id}' not found")


class NetworkIOError(PersistenceError):
    """The backing store could not be read from or written to."""
