"""
persistence.py
~~~~~~~~~~~~~~

Saving and loading networks by id.

Two stores are provided:

- ``NetworkFileStore``: one pickle file per network, named
  ``<path>/<id>.<extension>``
- ``NetworkDatabase``: SQLite table holding the pickled network along with
  queryable metadata

Both raise ``NetworkNotFoundError`` for unknown ids and ``NetworkIOError``
when the backing store cannot be read or written.
"""

import json
import logging
import os
import pickle
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Generator, List, Optional

import numpy as np

from .config import Settings, load_settings
from .exceptions import (
    InvalidArgumentError,
    NetworkIOError,
    NetworkNotFoundError,
)
from .network import Network

# Configure module logger
logger = logging.getLogger(__name__)


class NetworkEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles numpy values."""

    def default(self, obj: Any) -> Any:
        """
        Convert numpy arrays and scalars to plain Python values.

        Args:
            obj: Object to serialize

        Returns:
            JSON-serializable representation
        """
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        return super().default(obj)


def _check_network_id(network_id: str) -> None:
    if not network_id or not isinstance(network_id, str):
        raise InvalidArgumentError("network_id must be a non-empty string")


def _serialize(network: Network) -> bytes:
    try:
        return pickle.dumps(network)
    except (pickle.PicklingError, AttributeError, TypeError) as e:
        logger.error(f"Serialization error saving network '{network.id}': {e}")
        raise NetworkIOError(
            f"Network '{network.id}' could not be serialized: {e}"
        ) from e


def _deserialize(data: bytes, network_id: str) -> Network:
    try:
        network = pickle.loads(data)
    except (pickle.UnpicklingError, EOFError, AttributeError, ImportError,
            IndexError, KeyError, TypeError, ValueError) as e:
        logger.error(f"Deserialization error loading network '{network_id}': {e}")
        raise NetworkIOError(
            f"Network '{network_id}' could not be deserialized: {e}"
        ) from e

    if not isinstance(network, Network):
        raise NetworkIOError(
            f"Record '{network_id}' holds {type(network).__name__}, not a Network"
        )

    # New ids must not collide with the ones just loaded
    network.reserve_ids()
    return network


def describe_settings(network: Network) -> Dict[str, Any]:
    """Run-time flags of a network, as stored alongside it."""
    return {
        'squash': network.squash,
        'return_vector': network.return_vector,
        'min': network.min,
        'max': network.max,
    }


class NetworkStore(ABC):
    """Save/load contract shared by every store."""

    @abstractmethod
    def save(self, network: Network) -> None:
        """Write ``network`` under its id, replacing any existing record."""

    @abstractmethod
    def load(self, network_id: str) -> Network:
        """Return the network stored under ``network_id``."""

    @abstractmethod
    def exists(self, network_id: str) -> bool:
        """Whether a record exists for ``network_id``."""

    @abstractmethod
    def delete(self, network_id: str) -> bool:
        """Remove a record. Returns False if there was nothing to remove."""

    @abstractmethod
    def list_networks(self) -> List[Dict[str, Any]]:
        """Metadata for every stored network."""

    @abstractmethod
    def get_metadata(self, network_id: str) -> Dict[str, Any]:
        """Metadata for one stored network."""


class NetworkFileStore(NetworkStore):
    """
    Stores each network as a pickle file in a directory.

    Files are named ``<id>.<extension>``.
    """

    def __init__(self, path: str = './data', extension: str = 'network'):
        """
        Args:
            path: Directory holding the network files
            extension: File extension, without the leading dot
        """
        self.path = path
        self.extension = extension.lstrip('.')

    def _file_for(self, network_id: str) -> str:
        _check_network_id(network_id)
        if (os.sep in network_id or '/' in network_id or '\x00' in network_id
                or network_id in ('.', '..')):
            raise InvalidArgumentError(
                f"network_id {network_id!r} cannot be used as a file name"
            )
        return os.path.join(self.path, f"{network_id}.{self.extension}")

    def save(self, network: Network) -> None:
        """
        Write a network to disk.

        Raises:
            NetworkIOError: If the directory or file cannot be written
        """
        target = self._file_for(network.id)
        data = _serialize(network)
        temp = f"{target}.tmp"
        try:
            os.makedirs(self.path, exist_ok=True)
            with open(temp, 'wb') as f:
                f.write(data)
            os.replace(temp, target)
        except OSError as e:
            logger.error(f"File error saving network '{network.id}': {e}")
            raise NetworkIOError(
                f"Could not write network '{network.id}' to {target}: {e}"
            ) from e

        logger.info(
            f"Saved network '{network.id}' with layer sizes "
            f"{network.layer_sizes} to {target}"
        )

    def load(self, network_id: str) -> Network:
        """
        Load a network from disk.

        Raises:
            NetworkNotFoundError: If no file exists for ``network_id``
            NetworkIOError: If the file cannot be read or decoded
        """
        source = self._file_for(network_id)
        try:
            with open(source, 'rb') as f:
                data = f.read()
        except FileNotFoundError:
            logger.warning(f"Network '{network_id}' not found")
            raise NetworkNotFoundError(network_id) from None
        except OSError as e:
            logger.error(f"File error loading network '{network_id}': {e}")
            raise NetworkIOError(
                f"Could not read network '{network_id}' from {source}: {e}"
            ) from e

        network = _deserialize(data, network_id)
        logger.info(f"Loaded network '{network_id}' from {source}")
        return network

    def exists(self, network_id: str) -> bool:
        return os.path.isfile(self._file_for(network_id))

    def delete(self, network_id: str) -> bool:
        target = self._file_for(network_id)
        try:
            os.remove(target)
        except FileNotFoundError:
            logger.warning(f"Could not delete network '{network_id}': not found")
            return False
        except OSError as e:
            logger.error(f"File error deleting network '{network_id}': {e}")
            raise NetworkIOError(
                f"Could not delete network '{network_id}': {e}"
            ) from e

        logger.info(f"Deleted network '{network_id}'")
        return True

    def get_metadata(self, network_id: str) -> Dict[str, Any]:
        network = self.load(network_id)
        modified = os.path.getmtime(self._file_for(network_id))
        metadata = {
            'network_id': network.id,
            'architecture': network.layer_sizes,
            'updated_at': datetime.fromtimestamp(modified).isoformat(
                sep=' ', timespec='seconds'
            ),
        }
        metadata.update(describe_settings(network))
        return metadata

    def list_networks(self) -> List[Dict[str, Any]]:
        if not os.path.isdir(self.path):
            return []

        suffix = f".{self.extension}"
        try:
            names = sorted(os.listdir(self.path))
        except OSError as e:
            logger.error(f"File error listing networks in {self.path}: {e}")
            raise NetworkIOError(f"Could not list {self.path}: {e}") from e

        networks = [
            self.get_metadata(name[:-len(suffix)])
            for name in names
            if name.endswith(suffix)
        ]
        logger.debug(f"Listed {len(networks)} networks")
        return networks


class NetworkDatabase(NetworkStore):
    """
    Manages a SQLite database of networks.

    The database stores:
    - Network metadata (layer sizes, run flags, timestamps)
    - Serialized network objects as binary blobs
    """

    def __init__(self, db_path: str = 'data/networks.db'):
        """
        Initialize the database.

        Args:
            db_path: Path to the SQLite database file

        Raises:
            NetworkIOError: If the database cannot be created
        """
        self.db_path = db_path
        try:
            self._ensure_directory()
            self._initialize_schema()
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Could not open database {db_path}: {e}")
            raise NetworkIOError(f"Could not open database {db_path}: {e}") from e

    def _ensure_directory(self) -> None:
        """Create the database directory if it doesn't exist."""
        db_dir = os.path.dirname(self.db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.

        Yields:
            sqlite3.Connection: Database connection
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row  # Enable column access by name
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _initialize_schema(self) -> None:
        """Create the database schema if it doesn't exist."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS networks (
                    network_id TEXT PRIMARY KEY,
                    architecture TEXT NOT NULL,
                    settings TEXT NOT NULL,
                    network_data BLOB NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            cursor.execute('''
                CREATE INDEX IF NOT EXISTS idx_created_at
                ON networks(created_at DESC)
            ''')

    @staticmethod
    def _row_to_metadata(row: sqlite3.Row) -> Dict[str, Any]:
        metadata = {
            'network_id': row['network_id'],
            'architecture': json.loads(row['architecture']),
            'created_at': row['created_at'],
            'updated_at': row['updated_at'],
        }
        metadata.update(json.loads(row['settings']))
        return metadata

    def save(self, network: Network) -> None:
        """
        Save a network, replacing any record with the same id.

        Raises:
            NetworkIOError: If the network cannot be serialized or written
        """
        network_data = _serialize(network)

        # Serialize architecture and flags as JSON for queryability
        architecture_json = json.dumps(network.layer_sizes, cls=NetworkEncoder)
        settings_json = json.dumps(describe_settings(network), cls=NetworkEncoder)

        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute('''
                    INSERT INTO networks
                    (network_id, architecture, settings, network_data)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(network_id) DO UPDATE SET
                        architecture = excluded.architecture,
                        settings = excluded.settings,
                        network_data = excluded.network_data,
                        updated_at = CURRENT_TIMESTAMP
                ''', (
                    network.id,
                    architecture_json,
                    settings_json,
                    network_data
                ))
        except sqlite3.Error as e:
            logger.error(f"Database error saving network '{network.id}': {e}")
            raise NetworkIOError(
                f"Could not save network '{network.id}': {e}"
            ) from e

        logger.info(
            f"Saved network '{network.id}' with layer sizes {network.layer_sizes}"
        )

    def load(self, network_id: str) -> Network:
        """
        Load a network from the database.

        Raises:
            NetworkNotFoundError: If no record exists for ``network_id``
            NetworkIOError: If the record cannot be read or decoded
        """
        _check_network_id(network_id)
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    'SELECT network_data FROM networks WHERE network_id = ?',
                    (network_id,)
                )
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Database error loading network '{network_id}': {e}")
            raise NetworkIOError(
                f"Could not load network '{network_id}': {e}"
            ) from e

        if row is None:
            logger.warning(f"Network '{network_id}' not found")
            raise NetworkNotFoundError(network_id)

        network = _deserialize(row['network_data'], network_id)
        logger.info(f"Loaded network '{network_id}'")
        return network

    def exists(self, network_id: str) -> bool:
        _check_network_id(network_id)
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    'SELECT 1 FROM networks WHERE network_id = ?',
                    (network_id,)
                )
                return cursor.fetchone() is not None
        except sqlite3.Error as e:
            logger.error(f"Database error querying network '{network_id}': {e}")
            raise NetworkIOError(f"Could not query network '{network_id}': {e}") from e

    def delete(self, network_id: str) -> bool:
        """
        Delete a network from the database.

        Returns:
            bool: True if deleted, False if not found
        """
        _check_network_id(network_id)
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    'DELETE FROM networks WHERE network_id = ?',
                    (network_id,)
                )
                deleted = cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Database error deleting network '{network_id}': {e}")
            raise NetworkIOError(
                f"Could not delete network '{network_id}': {e}"
            ) from e

        if deleted:
            logger.info(f"Deleted network '{network_id}'")
        else:
            logger.warning(f"Could not delete network '{network_id}': not found")
        return deleted

    def list_networks(self) -> List[Dict[str, Any]]:
        """
        List all networks with metadata, newest first.

        Returns:
            List of network metadata dictionaries
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute('''
                    SELECT
                        network_id,
                        architecture,
                        settings,
                        created_at,
                        updated_at
                    FROM networks
                    ORDER BY created_at DESC, network_id
                ''')
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Database error listing networks: {e}")
            raise NetworkIOError(f"Could not list networks: {e}") from e

        networks = [self._row_to_metadata(row) for row in rows]
        logger.debug(f"Listed {len(networks)} networks")
        return networks

    def get_metadata(self, network_id: str) -> Dict[str, Any]:
        """
        Get network metadata without loading the full object.

        Raises:
            NetworkNotFoundError: If no record exists for ``network_id``
        """
        _check_network_id(network_id)
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute('''
                    SELECT
                        network_id,
                        architecture,
                        settings,
                        created_at,
                        updated_at
                    FROM networks
                    WHERE network_id = ?
                ''', (network_id,))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Database error getting metadata for '{network_id}': {e}")
            raise NetworkIOError(
                f"Could not read metadata for '{network_id}': {e}"
            ) from e

        if row is None:
            logger.warning(f"Metadata for network '{network_id}' not found")
            raise NetworkNotFoundError(network_id)

        return self._row_to_metadata(row)


def open_store(settings: Optional[Settings] = None) -> NetworkStore:
    """
    Build the store selected by configuration.

    Args:
        settings: Resolved settings; read from the environment if omitted

    Returns:
        NetworkStore: A file store or SQLite database
    """
    if settings is None:
        settings = load_settings()
    if settings.backend == 'sqlite':
        return NetworkDatabase(db_path=settings.database_path)
    return NetworkFileStore(path=settings.data_dir, extension=settings.extension)


def save_network(network: Network, store: Optional[NetworkStore] = None) -> None:
    """
    Save a network to the configured store.

    Example:
        >>> net = Network("my_network")
        >>> net.push_input_layer(3)
        >>> save_network(net)
    """
    (store or open_store()).save(network)


def load_network(network_id: str, store: Optional[NetworkStore] = None) -> Network:
    """
    Load a network from the configured store.

    Raises:
        NetworkNotFoundError: If no network is stored under ``network_id``
        NetworkIOError: If the store cannot be read
    """
    return (store or open_store()).load(network_id)


def list_saved_networks(store: Optional[NetworkStore] = None) -> List[Dict[str, Any]]:
    """
    List all saved networks with their metadata.

    Example:
        >>> for net in list_saved_networks():
        ...     print(f"{net['network_id']}: {net['architecture']}")
    """
    return (store or open_store()).list_networks()


def delete_network(network_id: str, store: Optional[NetworkStore] = None) -> bool:
    """Delete a saved network. Returns False if it did not exist."""
    return (store or open_store()).delete(network_id)


def get_network_metadata(
    network_id: str,
    store: Optional[NetworkStore] = None
) -> Dict[str, Any]:
    """Get metadata for a saved network."""
    return (store or open_store()).get_metadata(network_id)
