#!/usr/bin/env python3
"""
Quick Start - Minimal example to get started with sprout.

Run this script to see a network learn XOR, then pick up a new input key
without losing what it learned.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sprout import NeuralNetwork
from sprout.datasets import get_dataset

print("sprout - Quick Start")
print("="*40)

# Create a network; the hidden layer grows with the inputs it sees
net = NeuralNetwork(seed=7)
print(f"\nCreated: {net!r}")

# Load a toy dataset
data = get_dataset('xor')
print(f"Dataset: XOR ({len(data)} records)")

# Train
print("\nTraining...")
result = net.train(
    data,
    callback=lambda info: print(f"Iteration {info['iterations']}: error={info['error']:.4f}"),
    callback_resolution=1000,
)
print(f"\nFinal error: {result['error']:.4f} after {result['iterations']} iterations")
print(f"Network: {net!r}")

for record in data:
    print(f"  {record['input']} -> {net.run(record['input'])['xor']:.3f}")

# A new input key gets a node (and the hidden layer may grow) on first sight
net.run({'a': 1, 'b': 0, 'c': 1})
print(f"\nAfter seeing key 'c': {net!r}")

# Freeze the current weights into a standalone evaluator
evaluate = net.compile_standalone()
print(f"Standalone: {evaluate({'a': 0, 'b': 1})}")
