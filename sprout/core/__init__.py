"""Core network engine."""

from .config import NetworkConfig, TrainingConfig
from .errors import SproutError, ConfigurationError, MalformedStateError
from .node import Node
from .layer import Layer
from .network import NeuralNetwork
from .standalone import StandaloneNetwork, compile_standalone
from .persistence import save_network, load_network

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
