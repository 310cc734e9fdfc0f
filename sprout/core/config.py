"""
Configuration records for networks and training runs.

Network options arrive as an open mapping: the recognised keys are pulled
into typed fields and everything else is kept verbatim in ``extras`` so
callers can hang their own metadata on a network.
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigurationError


DEFAULT_LEARNING_RATE = 0.5
DEFAULT_GROWTH_RATE = 0.5
DEFAULT_ITERATIONS = 20000
DEFAULT_ERROR_THRESHOLD = 0.005

# camelCase spellings accepted for compatibility with serialized option sets
OPTION_ALIASES = {
    'learningRate': 'learning_rate',
    'growthRate': 'growth_rate',
}

RECOGNISED_OPTIONS = ('learning_rate', 'growth_rate', 'hidden', 'seed')


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass
class NetworkConfig:
    """Configuration for a neural network."""
    learning_rate: float = DEFAULT_LEARNING_RATE
    growth_rate: float = DEFAULT_GROWTH_RATE  # Fraction applied when auto-growing
    hidden: Optional[List[int]] = None  # Fixed hidden layer sizes; None = auto-grow
    seed: Optional[int] = None  # Seed for weight initialisation
    extras: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not _is_real(self.learning_rate):
            raise ConfigurationError(f"learning_rate must be a number, got {self.learning_rate!r}")
        if not _is_real(self.growth_rate):
            raise ConfigurationError(f"growth_rate must be a number, got {self.growth_rate!r}")

        if self.hidden is not None:
            sizes = list(self.hidden)
            if not sizes:
                raise ConfigurationError("hidden must list at least one hidden layer size")
            for size in sizes:
                if not isinstance(size, numbers.Integral) or isinstance(size, bool) or size <= 0:
                    raise ConfigurationError(
                        f"hidden layer sizes must be positive integers, got {size!r}"
                    )
            self.hidden = [int(size) for size in sizes]

    @property
    def auto_grow(self) -> bool:
        """Whether the hidden layer tracks the input layer size."""
        return self.hidden is None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None, **kwargs) -> 'NetworkConfig':
        """
        Build a config from an open options mapping.

        Keyword arguments override the mapping. Recognised keys become fields,
        unknown keys are stored untouched in ``extras``.
        """
        merged: Dict[str, Any] = {}
        if options:
            merged.update(options)
        merged.update(kwargs)

        values: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for key, value in merged.items():
            name = OPTION_ALIASES.get(key, key)
            if name in RECOGNISED_OPTIONS:
                values[name] = value
            else:
                extras[key] = value

        return cls(extras=extras, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten back into an options mapping."""
        data = {
            'learning_rate': self.learning_rate,
            'growth_rate': self.growth_rate,
            'hidden': list(self.hidden) if self.hidden is not None else None,
            'seed': self.seed,
        }
        data.update(self.extras)
        return data


@dataclass
class TrainingConfig:
    """Configuration for a training run."""
    iterations: int = DEFAULT_ITERATIONS
    error_threshold: float = DEFAULT_ERROR_THRESHOLD
    callback_resolution: int = 1  # Report progress every N epochs

    def __post_init__(self):
        # Unset or zero values fall back to the defaults
        if not self.iterations:
            self.iterations = DEFAULT_ITERATIONS
        if not self.error_threshold:
            self.error_threshold = DEFAULT_ERROR_THRESHOLD
        if not self.callback_resolution:
            self.callback_resolution = 1
