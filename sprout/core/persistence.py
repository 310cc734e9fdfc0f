"""
Persistence for sprout networks.

A network is stored as its serialized tree, ``{"layers": [...]}``, in a
single JSON file. Reads and writes hold a file lock so a training process
can checkpoint while another process loads the latest weights.
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from filelock import FileLock

from .errors import MalformedStateError
from .network import NeuralNetwork

PathLike = Union[str, Path]


def _get_lock(path: Path) -> FileLock:
    """Get a file lock for atomic operations."""
    return FileLock(str(path) + '.lock')


def save_network(network: NeuralNetwork, path: PathLike, indent: Optional[int] = 2) -> Path:
    """
    Write a network's serialized tree to ``path``.

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with _get_lock(path):
        path.write_text(json.dumps(network.to_dict(), indent=indent))
    return path


def read_state(path: PathLike) -> Dict[str, Any]:
    """Read a serialized tree without building a network."""
    path = Path(path)
    with _get_lock(path):
        text = path.read_text()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedStateError(f"{path} is not valid JSON: {e}") from e


def load_network(
    path: PathLike,
    options: Optional[Mapping[str, Any]] = None,
    **kwargs
) -> NeuralNetwork:
    """
    Load a network saved with ``save_network``.

    Learning and growth rates are not stored; pass them as options.
    """
    return NeuralNetwork.from_dict(read_state(path), options, **kwargs)
