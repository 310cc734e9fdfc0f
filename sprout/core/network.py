"""
NeuralNetwork - a feed-forward sigmoid network over dictionary-keyed layers.

The network starts with empty input and output layers. Input nodes are
created the first time a key is seen in ``run``, output nodes the first
time a key is seen as a training target. In the default topology the single
hidden layer grows to follow the input layer's size, so a network can keep
learning as its input vocabulary widens.

Example:
    net = NeuralNetwork()
    net.train([
        {'input': {'a': 0, 'b': 0}, 'output': {'xor': 0}},
        {'input': {'a': 0, 'b': 1}, 'output': {'xor': 1}},
        {'input': {'a': 1, 'b': 0}, 'output': {'xor': 1}},
        {'input': {'a': 1, 'b': 1}, 'output': {'xor': 0}},
    ])
    net.run({'a': 1, 'b': 0})  # {'xor': 0.93...}
"""

import json
import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np

from .config import NetworkConfig, TrainingConfig
from .errors import MalformedStateError
from .layer import Layer, Values, keyed
from .standalone import StandaloneNetwork, compile_standalone

logger = logging.getLogger(__name__)

Output = Union[Dict[str, float], List[float]]
ProgressCallback = Callable[[Dict[str, Any]], None]


class NeuralNetwork:
    """
    A growable feed-forward network trained by per-item backpropagation.

    Attributes:
        config: Learning rate, growth rate, hidden sizes, seed and extra options
        layers: Input layer, one or more hidden layers, output layer
        hidden_layer: The auto-growing hidden layer, or None when the topology
            was fixed by ``hidden`` sizes or restored from serialized state
        rng: Per-network random generator for weight initialisation
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None, **kwargs):
        """
        Args:
            options: Open options mapping. Recognised keys are
                ``learning_rate``/``learningRate`` (default 0.5),
                ``growth_rate``/``growthRate`` (default 0.5),
                ``hidden`` (list of hidden layer sizes) and ``seed``.
                Anything else is kept in ``config.extras``.
            **kwargs: Same keys as ``options``, taking precedence
        """
        self.config = NetworkConfig.from_options(options, **kwargs)
        self.rng = np.random.default_rng(self.config.seed)
        self.layers: List[Layer] = []
        self.hidden_layer: Optional[Layer] = None

        self.create_layers(self.config.hidden)

    @property
    def learning_rate(self) -> float:
        return self.config.learning_rate

    @property
    def growth_rate(self) -> float:
        return self.config.growth_rate

    @property
    def input_layer(self) -> Layer:
        return self.layers[0]

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    def create_layers(
        self,
        hidden: Optional[Sequence[int]] = None,
        state: Optional[Mapping] = None,
    ):
        """
        Build the layer stack.

        Three modes:
        - neither argument: input, one auto-growing hidden layer, output
        - ``hidden``: one fixed hidden layer per listed size
        - ``state``: layers and weights restored from a serialized network

        The input and output layers start empty unless restored.
        """
        if hidden is not None:
            hidden = NetworkConfig(hidden=hidden).hidden
            n_layers = len(hidden) + 2
        elif state is not None:
            if not isinstance(state, Mapping) or not isinstance(state.get('layers'), (list, tuple)):
                raise MalformedStateError("Serialized network is missing its 'layers' list")
            n_layers = len(state['layers'])
            if n_layers < 3:
                raise MalformedStateError(
                    f"Serialized network needs at least 3 layers, got {n_layers}"
                )
        else:
            n_layers = 3

        previous = self.layers
        self.layers = []
        try:
            for i in range(n_layers):
                if state is not None:
                    layer = Layer(self, i, state=state['layers'][i])
                else:
                    size = hidden[i - 1] if hidden and 0 < i < n_layers - 1 else 0
                    layer = Layer(self, i, size=size)
                self.layers.append(layer)
        except MalformedStateError:
            self.layers = previous
            raise

        if hidden is None and state is None:
            self.hidden_layer = self.layers[1]  # hold onto for growing
        else:
            self.hidden_layer = None

    def run(self, inputs: Values) -> Output:
        """
        Forward pass.

        Unseen input keys get new input nodes; missing keys read as 0. The
        auto-growing hidden layer is sized from the whole input layer, not
        from this particular record.

        Args:
            inputs: Mapping of input key -> value, or a sequence of values

        Returns:
            A list in index order when the output keys are exactly
            "0".."n-1", otherwise the output key -> value dict
        """
        inputs = keyed(inputs)
        self.input_layer.create_nodes(inputs)
        if self.hidden_layer is not None:
            self.hidden_layer.grow(self.input_layer.size)

        self.input_layer.set_outputs(inputs)
        for layer in self.layers[1:]:
            layer.calc_outputs()

        return self.format_output(self.output_layer.get_outputs())

    @staticmethod
    def format_output(outputs: Dict[str, float]) -> Output:
        """We use dicts internally; turn back into a list if the keys are indices."""
        indices = [str(i) for i in range(len(outputs))]
        if set(outputs) != set(indices):
            return outputs
        return [outputs[key] for key in indices]

    def train_item(self, inputs: Values, targets: Values) -> float:
        """
        One backpropagation step on a single example.

        Returns:
            The output layer error for this example
        """
        targets = keyed(targets)
        self.output_layer.create_nodes(targets)

        self.run(inputs)

        self.output_layer.calc_errors(targets)
        for layer in reversed(self.layers[1:-1]):
            layer.calc_errors()

        for layer in self.layers[1:]:
            layer.adjust_weights()

        return self.output_layer.get_error()

    def train(
        self,
        data: Iterable[Mapping[str, Values]],
        iterations: Optional[int] = None,
        error_threshold: Optional[float] = None,
        callback: Optional[ProgressCallback] = None,
        callback_resolution: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Train on a dataset until the error threshold or iteration budget.

        Args:
            data: Records of the form ``{'input': ..., 'output': ...}``
            iterations: Maximum number of epochs (default 20000)
            error_threshold: Stop once the epoch error is at or below this
                (default 0.005)
            callback: Called with ``{'error', 'iterations'}`` every
                ``callback_resolution`` epochs
            callback_resolution: Epochs between callback calls (default 1)

        Returns:
            ``{'error': final epoch error, 'iterations': epochs run}``
        """
        config = TrainingConfig(
            iterations=iterations,
            error_threshold=error_threshold,
            callback_resolution=callback_resolution,
        )
        data = list(data)
        if not data:
            logger.warning("Training called with an empty dataset, nothing to do")
            return {'error': 0.0, 'iterations': 0}

        logger.info(
            "Training on %d item(s): max %d iterations, error threshold %g",
            len(data), config.iterations, config.error_threshold,
        )

        error = 1.0
        i = 0
        while i < config.iterations and error > config.error_threshold:
            total = 0.0
            for item in data:
                item_error = self.train_item(item.get('input'), item.get('output'))
                total += item_error ** 2
            error = math.sqrt(total) / len(data)

            if i % config.callback_resolution == 0:
                if callback_resolution is not None:
                    logger.info("Iteration %d: error=%.6f", i, error)
                if callback:
                    callback({'error': error, 'iterations': i})
            i += 1

        logger.info("Training finished after %d iteration(s): error=%.6f", i, error)
        return {'error': error, 'iterations': i}

    # Serialization

    def to_dict(self) -> Dict:
        """Serialize topology and weights (not rates or training state)."""
        return {'layers': [layer.to_dict() for layer in self.layers]}

    def load_dict(self, state: Mapping) -> 'NeuralNetwork':
        """Replace this network's layers with a serialized network."""
        self.create_layers(state=state)
        return self

    @classmethod
    def from_dict(
        cls,
        state: Mapping,
        options: Optional[Mapping[str, Any]] = None,
        **kwargs
    ) -> 'NeuralNetwork':
        """
        Restore a network. Rates are not part of the serialized form and are
        taken from ``options``/``kwargs`` instead.
        """
        options = dict(options or {})
        options.update(kwargs)
        options.pop('hidden', None)
        return cls(options).load_dict(state)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> 'NeuralNetwork':
        try:
            state = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedStateError(f"Serialized network is not valid JSON: {e}") from e
        return cls.from_dict(state, options, **kwargs)

    def compile_standalone(self) -> StandaloneNetwork:
        """
        Snapshot the current weights into a standalone forward-pass function.

        The result does not reference this network. It only knows the input
        keys present at compile time; unseen keys are ignored.
        """
        return compile_standalone(self.to_dict())

    def __str__(self):
        return self.to_json()

    def __repr__(self):
        arch = "→".join(str(layer.size) for layer in self.layers)
        mode = "auto-grow" if self.hidden_layer is not None else "fixed"
        return (
            f"NeuralNetwork(arch={arch}, {mode}, learning_rate={self.learning_rate}, "
            f"growth_rate={self.growth_rate})"
        )
