"""
id_generator.py
~~~~~~~~~~~~~~~

Monotonic identifier allocation for layers and neurons.

Identifiers have the form ``"<type>-<n>"``. A single counter is shared by
every type tag, so ``Layer-101`` and ``Neuron-101`` can never both exist.
"""

import logging
import re
import threading
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_START = 100

_ID_PATTERN = re.compile(r'-(\d+)$')


class IdGenerator:
    """
    Issues ``"<type>-<n>"`` identifiers from a counter starting at 100.

    The counter is incremented before each id is built, so the first id of
    a fresh generator ends in ``101``. Increments are serialized with a
    lock, so layers and neurons may be built from several threads.
    """

    def __init__(self, start: int = DEFAULT_START):
        self._counter = start
        self._lock = threading.Lock()

    def generate_id(self, type_tag: str) -> str:
        """
        Allocate the next identifier.

        Args:
            type_tag: Prefix naming the kind of object, e.g. ``"Layer"``

        Returns:
            str: A new identifier such as ``"Layer-101"``
        """
        with self._lock:
            self._counter += 1
            return f"{type_tag}-{self._counter}"

    def current(self) -> int:
        """Return the counter without incrementing it."""
        return self._counter

    def reserve(self, identifier: str) -> None:
        """
        Advance the counter past the number carried by an existing id.

        Ids without a trailing number are ignored.
        """
        match = _ID_PATTERN.search(identifier)
        if match is None:
            return
        value = int(match.group(1))
        with self._lock:
            if value > self._counter:
                logger.debug(f"Advancing id counter from {self._counter} to {value}")
                self._counter = value

    def reserve_all(self, identifiers: Iterable[str]) -> None:
        """Reserve every id in ``identifiers``."""
        for identifier in identifiers:
            self.reserve(identifier)

    def __getstate__(self):
        # Locks cannot be pickled
        return {'_counter': self._counter}

    def __setstate__(self, state):
        self._counter = state['_counter']
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"IdGenerator(current={self._counter})"


# Process-wide default allocator
_default_generator: Optional[IdGenerator] = None
_default_lock = threading.Lock()


def get_default_id_generator() -> IdGenerator:
    """
    Get or create the process-wide id generator.

    Returns:
        IdGenerator: The shared default instance
    """
    global _default_generator
    with _default_lock:
        if _default_generator is None:
            _default_generator = IdGenerator()
        return _default_generator
