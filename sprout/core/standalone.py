"""
Standalone forward-pass evaluator.

A compiled network is a frozen copy of a serialized weight tree plus one
fixed forward routine. It shares nothing with the network it came from, so
it keeps giving the same answers while that network goes on training, and
it can be persisted through ``to_dict`` like any serialized network.

It cannot grow: input keys that were not present at compile time are
ignored, and missing ones read as 0.
"""

import copy
from typing import Dict, List, Mapping, Tuple

from .activations import sigmoid
from .errors import MalformedStateError
from .layer import Values, keyed, node_key

# (key, bias, [(incoming key, weight), ...]) per node
CompiledLayer = List[Tuple[str, float, List[Tuple[str, float]]]]


class StandaloneNetwork:
    """Callable forward pass over baked-in weights."""

    def __init__(self, state: Mapping):
        if not isinstance(state, Mapping) or not isinstance(state.get('layers'), (list, tuple)):
            raise MalformedStateError("Serialized network is missing its 'layers' list")
        if len(state['layers']) < 2:
            raise MalformedStateError("Serialized network needs an input and an output layer")

        self._state = copy.deepcopy(dict(state))
        layers = self._state['layers']

        try:
            self.input_keys = [node_key(key) for key in layers[0]['nodes']]
            self._layers: List[CompiledLayer] = [
                [
                    (
                        node_key(key),
                        float(node['bias']),
                        [(node_key(k), float(w)) for k, w in node['weights'].items()],
                    )
                    for key, node in layer['nodes'].items()
                ]
                for layer in layers[1:]
            ]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise MalformedStateError(f"Cannot compile serialized network: {e}") from e

    @property
    def output_keys(self) -> List[str]:
        return [key for key, _, _ in self._layers[-1]]

    def __call__(self, inputs: Values) -> Dict[str, float]:
        """
        Evaluate the network.

        Args:
            inputs: Mapping of input key -> value, or a sequence of values

        Returns:
            Output key -> activation
        """
        given = keyed(inputs)
        values = {key: given.get(key) or 0 for key in self.input_keys}

        for layer in self._layers:
            outputs = {}
            for key, bias, weights in layer:
                total = bias
                for incoming, weight in weights:
                    total += weight * values.get(incoming, 0.0)
                outputs[key] = sigmoid(total)
            values = outputs

        return values

    def to_dict(self) -> Dict:
        return copy.deepcopy(self._state)

    def __repr__(self):
        return f"StandaloneNetwork(inputs={len(self.input_keys)}, outputs={len(self.output_keys)})"


def compile_standalone(state: Mapping) -> StandaloneNetwork:
    """Compile a serialized network into a standalone evaluator."""
    return StandaloneNetwork(state)
