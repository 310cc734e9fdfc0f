"""
Activation function for sprout networks.

Every node in a sprout network is a sigmoid unit. The derivative is taken
"by value": it is computed from the activation itself (the node's stored
output), not from the pre-activation sum, which is what backpropagation
has at hand when it walks the layers in reverse.
"""

import math


def sigmoid(x: float) -> float:
    """Sigmoid - smooth, bounded (0, 1)."""
    # Clip to avoid overflow in math.exp
    x = max(-500.0, min(500.0, x))
    return 1.0 / (1.0 + math.exp(-x))


def sigmoid_derivative(output: float) -> float:
    """Derivative of the sigmoid, given its output."""
    return output * (1.0 - output)
