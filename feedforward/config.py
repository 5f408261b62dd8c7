"""
config.py
~~~~~~~~~

Environment-driven settings.

Variables:
    FEEDFORWARD_DATA_DIR: Directory holding saved networks (``./data``)
    FEEDFORWARD_EXTENSION: File extension for the file store (``network``)
    FEEDFORWARD_BACKEND: ``file`` or ``sqlite``
    FEEDFORWARD_LOG_LEVEL: Logging level name (``INFO``)
    FEEDFORWARD_SEED: Seed for the weight/threshold generator (unset)
    FEEDFORWARD_WEIGHT_MIN / FEEDFORWARD_WEIGHT_MAX: Random range (0.0, 1.0)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

BACKENDS = ('file', 'sqlite')


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    data_dir: str = './data'
    extension: str = 'network'
    backend: str = 'file'
    log_level: str = 'INFO'
    seed: Optional[int] = None
    weight_min: float = 0.0
    weight_max: float = 1.0

    @property
    def weight_range(self) -> Tuple[float, float]:
        return (self.weight_min, self.weight_max)

    @property
    def database_path(self) -> str:
        return os.path.join(self.data_dir, 'networks.db')


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build ``Settings`` from environment variables.

    Args:
        env: Mapping to read instead of ``os.environ``

    Returns:
        Settings: The resolved configuration

    Raises:
        ValueError: If a variable holds an invalid value
    """
    if env is None:
        env = os.environ

    backend = env.get('FEEDFORWARD_BACKEND', 'file').lower()
    if backend not in BACKENDS:
        raise ValueError(
            f"FEEDFORWARD_BACKEND must be one of {BACKENDS}, got {backend!r}"
        )

    seed = None
    raw_seed = env.get('FEEDFORWARD_SEED')
    if raw_seed:
        try:
            seed = int(raw_seed)
        except ValueError:
            raise ValueError(
                f"FEEDFORWARD_SEED must be an integer, got {raw_seed!r}"
            ) from None

    weight_min = _get_float(env, 'FEEDFORWARD_WEIGHT_MIN', 0.0)
    weight_max = _get_float(env, 'FEEDFORWARD_WEIGHT_MAX', 1.0)
    if weight_min > weight_max:
        raise ValueError(
            f"FEEDFORWARD_WEIGHT_MIN ({weight_min}) exceeds "
            f"FEEDFORWARD_WEIGHT_MAX ({weight_max})"
        )

    return Settings(
        data_dir=env.get('FEEDFORWARD_DATA_DIR', './data'),
        extension=env.get('FEEDFORWARD_EXTENSION', 'network').lstrip('.'),
        backend=backend,
        log_level=env.get('FEEDFORWARD_LOG_LEVEL', 'INFO').upper(),
        seed=seed,
        weight_min=weight_min,
        weight_max=weight_max,
    )
