"""
Layer - an insertion-ordered mapping of node key -> Node.

Layers own node lifecycle. Creating a node wires it on both sides: it gets
a weight for every node of the preceding layer, and every node of the
following layer gets a weight for it. That keeps the graph fully connected
as input/output vocabularies and the hidden layer grow.

Neighbouring layers are not stored; they are looked up by index in the
owning network's layer list.
"""

import logging
import math
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, TYPE_CHECKING, Union

from .errors import MalformedStateError
from .node import Node

if TYPE_CHECKING:
    from .network import NeuralNetwork

logger = logging.getLogger(__name__)

Values = Union[Mapping[Any, float], Sequence[float]]


def node_key(key: Any) -> str:
    """Normalise a node identifier (int index or name) to its string key."""
    return key if isinstance(key, str) else str(key)


def keyed(values: Optional[Values]) -> Dict[str, float]:
    """
    Normalise caller values to a key -> value dict.

    Mappings keep their keys (as strings); plain sequences are keyed by
    position, so ``[1, 0]`` becomes ``{'0': 1, '1': 0}``.
    """
    if values is None:
        return {}
    if isinstance(values, Mapping):
        return {node_key(k): v for k, v in values.items()}
    return {str(i): v for i, v in enumerate(values)}


class Layer:
    """
    One depth of the network: input (index 0), hidden, or output (last).
    """

    def __init__(
        self,
        network: 'NeuralNetwork',
        index: int,
        size: int = 0,
        state: Optional[Mapping] = None,
    ):
        """
        Args:
            network: Owning network
            index: Position of this layer in ``network.layers``
            size: Number of nodes to create up front (keys "0".."size-1")
            state: Serialized layer to restore instead
        """
        self.network = network
        self.index = index
        self.nodes: Dict[str, Node] = {}

        if state is not None:
            self.load_dict(state)
        else:
            for i in range(size):
                self.create_node(i)

    @property
    def prev_layer(self) -> Optional['Layer']:
        if self.index == 0:
            return None
        return self.network.layers[self.index - 1]

    @property
    def next_layer(self) -> Optional['Layer']:
        layers = self.network.layers
        if self.index + 1 < len(layers):
            return layers[self.index + 1]
        return None

    @property
    def size(self) -> int:
        return len(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, key):
        return node_key(key) in self.nodes

    def map(self, callback: Callable[[Node, str], Any]) -> Dict[str, Any]:
        """Apply ``callback(node, key)`` to every node, keyed by node key."""
        return {key: callback(node, key) for key, node in self.nodes.items()}

    def reduce(self, callback: Callable[[Any, Node], Any], value: Any) -> Any:
        """Fold ``callback(value, node)`` over the nodes."""
        for node in self.nodes.values():
            value = callback(value, node)
        return value

    # Outputs are kept as node state for backpropagation

    def get_outputs(self) -> Dict[str, float]:
        return self.map(lambda node, key: node.output)

    def set_outputs(self, values: Mapping[str, float]):
        """Set outputs directly (input layer). Missing keys read as 0."""
        for key, node in self.nodes.items():
            node.output = values.get(key) or 0

    def get_error(self) -> float:
        """Root of the summed squared node errors, divided by the node count."""
        if not self.nodes:
            return 0.0
        total = self.reduce(lambda acc, node: acc + node.error ** 2, 0.0)
        return math.sqrt(total) / self.size

    # Topology

    def create_node(self, key: Any) -> Node:
        """Create a node wired to both neighbouring layers."""
        key = node_key(key)
        rng = self.network.rng

        prev_layer = self.prev_layer
        if prev_layer is None:
            node = Node(key)
        else:
            node = Node(key, incoming=prev_layer.nodes.keys(), rng=rng)
        self.nodes[key] = node

        next_layer = self.next_layer
        if next_layer is not None:
            for outgoing in next_layer.nodes.values():
                outgoing.add_incoming(key, rng)

        return node

    def create_nodes(self, keys: Iterable[Any]) -> int:
        """
        Create nodes for any keys not yet present.

        Existing nodes keep their weights, so a network can pick up new input
        or output keys without losing what it has learned.

        Returns:
            Number of nodes created
        """
        created = 0
        for key in keys:
            if node_key(key) not in self.nodes:
                self.create_node(key)
                created += 1
        if created:
            logger.debug("Layer %d: created %d node(s), size now %d", self.index, created, self.size)
        return created

    def grow(self, reference_size: int) -> int:
        """
        Grow toward a size derived from ``reference_size``; never shrinks.

        Small references map 1:1. Above 5 the target is scaled by the
        network's growth rate. New nodes get sequential integer keys.

        Returns:
            Number of nodes created
        """
        target = reference_size
        if reference_size > 5:
            target *= self.network.config.growth_rate

        start = self.size
        for i in range(start, math.ceil(target)):
            self.create_node(i)

        created = self.size - start
        if created:
            logger.debug("Layer %d grew by %d to %d node(s)", self.index, created, self.size)
        return created

    # Passes

    def calc_outputs(self):
        inputs = self.prev_layer.get_outputs()
        for node in self.nodes.values():
            node.compute_output(inputs)

    def calc_errors(self, targets: Optional[Mapping[str, float]] = None):
        """
        Compute node errors and deltas.

        Args:
            targets: Expected outputs for the output layer. Hidden layers pass
                nothing and read deltas from the following layer instead.
        """
        if targets is not None:
            for key, node in self.nodes.items():
                node.compute_error(target=targets.get(key, 0))
        else:
            downstream = list(self.next_layer.nodes.values())
            for node in self.nodes.values():
                node.compute_error(downstream=downstream)

    def adjust_weights(self):
        inputs = self.prev_layer.get_outputs()
        learning_rate = self.network.config.learning_rate
        for node in self.nodes.values():
            node.adjust_weights(inputs, learning_rate)

    # Serialization

    def to_dict(self) -> Dict:
        return {'nodes': {key: node.to_dict() for key, node in self.nodes.items()}}

    def load_dict(self, state: Mapping):
        """
        Replace the nodes with a serialized layer.

        The preceding layer must already be restored: weight keys of every
        non-input node are checked against its node keys.
        """
        if not isinstance(state, Mapping) or not isinstance(state.get('nodes'), Mapping):
            raise MalformedStateError(f"Layer {self.index} is missing its 'nodes' mapping")

        prev_layer = self.prev_layer
        expected = set(prev_layer.nodes) if prev_layer is not None else None

        nodes: Dict[str, Node] = {}
        for raw_key, data in state['nodes'].items():
            key = node_key(raw_key)
            if prev_layer is None:
                nodes[key] = Node(key)
                continue

            if not isinstance(data, Mapping) or data.get('weights') is None or data.get('bias') is None:
                raise MalformedStateError(f"Node {key!r} in layer {self.index} has no weights/bias")
            try:
                node = Node.from_dict(key, data)
            except (AttributeError, TypeError, ValueError) as e:
                raise MalformedStateError(f"Node {key!r} in layer {self.index}: {e}") from e
            if set(node.weights) != expected:
                raise MalformedStateError(
                    f"Node {key!r} in layer {self.index} has weights for "
                    f"{sorted(node.weights)}, expected {sorted(expected)}"
                )
            nodes[key] = node

        self.nodes = nodes

    def __repr__(self):
        return f"Layer(index={self.index}, size={self.size})"
