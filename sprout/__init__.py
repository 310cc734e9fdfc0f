"""
sprout - a small feed-forward neural network that grows as it learns.

Networks are dictionaries of sigmoid nodes keyed by name. New input and
output keys get nodes the first time they are seen, and the hidden layer
grows with the input layer, so one network can be trained on a vocabulary
that widens over time.

Example usage:
    from sprout import NeuralNetwork
    from sprout.datasets import xor_dataset

    net = NeuralNetwork(hidden=[3])
    result = net.train(xor_dataset())
    print(f"error {result['error']:.4f} after {result['iterations']} iterations")
    print(net.run({'a': 1, 'b': 0}))
"""

from .core import (
    NetworkConfig,
    TrainingConfig,
    SproutError,
    ConfigurationError,
    MalformedStateError,
    Node,
    Layer,
    NeuralNetwork,
    StandaloneNetwork,
    compile_standalone,
    save_network,
    load_network,
)

__version__ = '0.1.0'

__all__ = [
    'NetworkConfig',
    'TrainingConfig',
    'SproutError',
    'ConfigurationError',
    'MalformedStateError',
    'Node',
    'Layer',
    'NeuralNetwork',
    'StandaloneNetwork',
    'compile_standalone',
    'save_network',
    'load_network',
]
