"""
Node - a single sigmoid unit.

A node knows nothing about the layers around it. It holds a bias and one
weight per incoming node key, and the owning layer hands it the values it
needs (preceding outputs, targets, downstream nodes) for each pass.
Input nodes have no weights and no bias; their output is set directly.
"""

from typing import Dict, Iterable, Mapping, Optional

import numpy as np

from .activations import sigmoid, sigmoid_derivative

INIT_RANGE = 0.2


def random_weight(rng: np.random.Generator) -> float:
    """Uniform random weight in [-0.2, 0.2]."""
    return float(rng.uniform(-INIT_RANGE, INIT_RANGE))


class Node:
    """
    A sigmoid unit keyed by an identifier unique within its layer.

    Attributes:
        key: Identifier of the node within its layer
        bias: Bias term (None for input nodes)
        weights: Incoming node key -> weight (None for input nodes)
        output: Activation from the last forward pass
        error: Signed error from the last backward pass
        delta: error scaled by the activation derivative
    """

    def __init__(
        self,
        key: str,
        incoming: Optional[Iterable[str]] = None,
        rng: Optional[np.random.Generator] = None,
        bias: Optional[float] = None,
        weights: Optional[Dict[str, float]] = None,
    ):
        """
        Create a node.

        Args:
            key: Node identifier
            incoming: Keys of the preceding layer's nodes. When given together
                with ``rng``, the node gets one random weight per key and a
                random bias.
            rng: Random generator used for initialisation
            bias: Restored bias (skips random initialisation)
            weights: Restored weights (skips random initialisation)
        """
        self.key = key
        self.output = 0.0
        self.error = 0.0
        self.delta = 0.0

        if weights is not None:
            self.weights: Optional[Dict[str, float]] = dict(weights)
            self.bias: Optional[float] = bias
        elif incoming is not None and rng is not None:
            self.weights = {}
            for incoming_key in incoming:
                self.add_incoming(incoming_key, rng)
            self.bias = random_weight(rng)  # instead of a separate bias node
        else:
            self.weights = None
            self.bias = None

    @property
    def is_input(self) -> bool:
        return self.weights is None

    def add_incoming(self, key: str, rng: np.random.Generator):
        """Add a randomly initialised edge from a new upstream node."""
        self.weights[key] = random_weight(rng)

    def compute_output(self, inputs: Mapping[str, float]) -> float:
        """
        Forward pass for a non-input node.

        Args:
            inputs: Outputs of the preceding layer, keyed by node key

        Returns:
            The new activation
        """
        total = self.bias
        for key, weight in self.weights.items():
            total += weight * inputs.get(key, 0.0)
        self.output = sigmoid(total)
        return self.output

    def compute_error(
        self,
        target: Optional[float] = None,
        downstream: Optional[Iterable['Node']] = None,
    ) -> float:
        """
        Backward pass.

        Output nodes pass ``target``; hidden nodes pass the nodes of the
        following layer and accumulate their deltas through the connecting
        weights.

        Returns:
            The new delta
        """
        if downstream is None:
            self.error = (target or 0.0) - self.output
        else:
            self.error = 0.0
            for node in downstream:
                self.error += node.delta * node.weights[self.key]
        self.delta = self.error * sigmoid_derivative(self.output)
        return self.delta

    def adjust_weights(self, inputs: Mapping[str, float], learning_rate: float):
        """Gradient step using the current delta and last forward inputs."""
        step = learning_rate * self.delta
        for key in self.weights:
            self.weights[key] += step * inputs.get(key, 0.0)
        self.bias += step

    def to_dict(self) -> Dict:
        """Serialize weights and bias; input nodes serialize as empty."""
        if self.is_input:
            return {}
        return {'weights': dict(self.weights), 'bias': self.bias}

    @classmethod
    def from_dict(cls, key: str, data: Mapping) -> 'Node':
        """Restore a node from its serialized form."""
        if data.get('weights') is None:
            return cls(key)
        return cls(
            key,
            bias=float(data['bias']),
            weights={str(k): float(w) for k, w in data['weights'].items()},
        )

    def __repr__(self):
        if self.is_input:
            return f"Node({self.key!r}, input, output={self.output:.3f})"
        return f"Node({self.key!r}, in={len(self.weights)}, bias={self.bias:.3f}, output={self.output:.3f})"
