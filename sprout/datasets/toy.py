"""
Toy datasets for sprout networks.

Datasets are lists of records, ``{'input': {...}, 'output': {...}}``, the
form ``NeuralNetwork.train`` consumes. The truth tables use named inputs so
they also exercise lazy node creation; ``records_from_arrays`` bridges
numpy feature/label arrays into the same form.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

Record = Dict[str, Dict[str, float]]


def _truth_table(fn: Callable[[int, int], int], output_key: str) -> List[Record]:
    return [
        {'input': {'a': a, 'b': b}, 'output': {output_key: fn(a, b)}}
        for a in (0, 1)
        for b in (0, 1)
    ]


def xor_dataset() -> List[Record]:
    """
    Classic XOR problem - the simplest non-linearly separable dataset.

    Requires at least one hidden layer to solve.
    """
    return _truth_table(lambda a, b: a ^ b, 'xor')


def and_dataset() -> List[Record]:
    """Logical AND - linearly separable."""
    return _truth_table(lambda a, b: a & b, 'and')


def or_dataset() -> List[Record]:
    """Logical OR - linearly separable."""
    return _truth_table(lambda a, b: a | b, 'or')


def records_from_arrays(
    X: np.ndarray,
    y: np.ndarray,
    input_keys: Optional[Sequence[str]] = None,
    output_key: str = '0',
) -> List[Record]:
    """
    Convert feature/label arrays into training records.

    Args:
        X: Features of shape (n_samples, n_features)
        y: Labels of shape (n_samples,)
        input_keys: Names for the feature columns (default: column index)
        output_key: Name of the single output

    Returns:
        One record per sample
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float).reshape(-1)
    if X.ndim != 2 or X.shape[0] != y.shape[0]:
        raise ValueError(f"Expected X of shape (n, d) and y of shape (n,), got {X.shape} and {y.shape}")

    if input_keys is None:
        input_keys = [str(i) for i in range(X.shape[1])]
    if len(input_keys) != X.shape[1]:
        raise ValueError(f"Expected {X.shape[1]} input keys, got {len(input_keys)}")

    return [
        {
            'input': {key: float(value) for key, value in zip(input_keys, row)},
            'output': {output_key: float(label)},
        }
        for row, label in zip(X, y)
    ]


def noisy_xor_dataset(
    n_samples: int = 40,
    noise: float = 0.05,
    seed: Optional[int] = None
) -> List[Record]:
    """
    XOR with Gaussian jitter around the four corners of the unit square.

    Args:
        n_samples: Number of samples (rounded down to a multiple of 4)
        noise: Standard deviation of Gaussian noise
        seed: Random seed

    Returns:
        Records with inputs 'a', 'b' and output 'xor'
    """
    rng = np.random.default_rng(seed)
    n_per_corner = n_samples // 4

    corners = np.array([[0, 0], [0, 1], [1, 0], [1, 1]], dtype=float)
    labels = np.array([0, 1, 1, 0], dtype=float)

    X = np.repeat(corners, n_per_corner, axis=0)
    y = np.repeat(labels, n_per_corner)
    X = np.clip(X + rng.normal(0, noise, X.shape), 0, 1)

    # Shuffle
    indices = rng.permutation(len(y))
    return records_from_arrays(X[indices], y[indices], input_keys=['a', 'b'], output_key='xor')


# Dataset registry
DATASETS: Dict[str, Dict[str, Any]] = {
    'xor': {
        'function': xor_dataset,
        'name': 'XOR',
        'description': 'Classic XOR truth table - needs a hidden layer',
        'difficulty': 'easy',
        'default_params': {},
    },
    'and': {
        'function': and_dataset,
        'name': 'AND',
        'description': 'Logical AND truth table - linearly separable',
        'difficulty': 'trivial',
        'default_params': {},
    },
    'or': {
        'function': or_dataset,
        'name': 'OR',
        'description': 'Logical OR truth table - linearly separable',
        'difficulty': 'trivial',
        'default_params': {},
    },
    'noisy_xor': {
        'function': noisy_xor_dataset,
        'name': 'Noisy XOR',
        'description': 'XOR corners with Gaussian jitter',
        'difficulty': 'medium',
        'default_params': {'n_samples': 40, 'noise': 0.05},
    },
}


def get_dataset(name: str, **kwargs) -> List[Record]:
    """
    Get a dataset by name.

    Args:
        name: Dataset name
        **kwargs: Override default parameters

    Returns:
        Training records
    """
    if name not in DATASETS:
        available = ', '.join(DATASETS.keys())
        raise ValueError(f"Unknown dataset '{name}'. Available: {available}")

    info = DATASETS[name]
    params = {**info['default_params'], **kwargs}
    return info['function'](**params)


def list_datasets() -> Dict[str, Dict]:
    """List all available datasets with their metadata."""
    return {
        name: {k: v for k, v in info.items() if k != 'function'}
        for name, info in DATASETS.items()
    }
