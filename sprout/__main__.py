"""
Command line interface for sprout.

Usage:
    python -m sprout train DATA --output NET   Train a network and save it
    python -m sprout run NET INPUT             Run a saved network on INPUT (JSON)
    python -m sprout compile NET INPUT         Same, through the standalone evaluator
    python -m sprout datasets                  List the built-in toy datasets

DATA is a JSON file of ``{"input": {...}, "output": {...}}`` records, or
``toy:<name>`` for a built-in dataset (e.g. ``toy:xor``).
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.errors import SproutError
from .core.network import NeuralNetwork
from .core.persistence import load_network, read_state, save_network
from .core.standalone import compile_standalone
from .datasets.toy import get_dataset, list_datasets


def load_records(source: str) -> List[dict]:
    """Load training records from a JSON file or a ``toy:<name>`` dataset."""
    if source.startswith('toy:'):
        return get_dataset(source[len('toy:'):])

    records = json.loads(Path(source).read_text())
    if not isinstance(records, list):
        raise ValueError(f"{source} must hold a list of records, got {type(records).__name__}")
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(
                f"{source}: record {i} must be an object with 'input' and 'output', "
                f"got {type(record).__name__}"
            )
    return records


def parse_inputs(text: str):
    """Parse an input record given inline as JSON or as ``@file.json``."""
    if text.startswith('@'):
        text = Path(text[1:]).read_text()
    return json.loads(text)


def cmd_train(args) -> int:
    data = load_records(args.data)
    net = NeuralNetwork(
        learning_rate=args.learning_rate,
        growth_rate=args.growth_rate,
        hidden=args.hidden,
        seed=args.seed,
    )

    def report(info):
        print(f"Iteration {info['iterations']}: error={info['error']:.6f}")

    result = net.train(
        data,
        iterations=args.iterations,
        error_threshold=args.error_threshold,
        callback=report if args.resolution else None,
        callback_resolution=args.resolution,
    )

    path = save_network(net, args.output)
    print(f"Trained {net!r}")
    print(f"Final error {result['error']:.6f} after {result['iterations']} iterations")
    print(f"Saved to {path}")
    return 0


def cmd_run(args) -> int:
    net = load_network(args.network)
    print(json.dumps(net.run(parse_inputs(args.inputs))))
    return 0


def cmd_compile(args) -> int:
    evaluate = compile_standalone(read_state(args.network))
    print(json.dumps(evaluate(parse_inputs(args.inputs))))
    return 0


def cmd_datasets(args) -> int:
    for name, info in list_datasets().items():
        print(f"{name:<12} {info['difficulty']:<8} {info['description']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sprout',
        description='Train and run growable feed-forward neural networks',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log training progress and topology growth')
    subparsers = parser.add_subparsers(dest='command', required=True)

    train = subparsers.add_parser('train', help='Train a network and save it as JSON')
    train.add_argument('data', help='JSON records file, or toy:<name>')
    train.add_argument('-o', '--output', required=True, help='Where to save the network')
    train.add_argument('--iterations', type=int, default=20000,
                       help='Maximum training epochs (default: 20000)')
    train.add_argument('--error-threshold', type=float, default=0.005,
                       help='Stop once the epoch error reaches this (default: 0.005)')
    train.add_argument('--learning-rate', type=float, default=0.5,
                       help='Learning rate (default: 0.5)')
    train.add_argument('--growth-rate', type=float, default=0.5,
                       help='Hidden layer growth rate (default: 0.5)')
    train.add_argument('--hidden', type=int, nargs='+', default=None,
                       help='Fixed hidden layer sizes (default: auto-grow)')
    train.add_argument('--resolution', type=int, default=None,
                       help='Print progress every N epochs')
    train.add_argument('--seed', type=int, default=None, help='Random seed')
    train.set_defaults(func=cmd_train)

    run = subparsers.add_parser('run', help='Run a saved network')
    run.add_argument('network', help='Saved network JSON')
    run.add_argument('inputs', help='Input record as JSON, or @file.json')
    run.set_defaults(func=cmd_run)

    compile_ = subparsers.add_parser('compile', help='Run a saved network through the standalone evaluator')
    compile_.add_argument('network', help='Saved network JSON')
    compile_.add_argument('inputs', help='Input record as JSON, or @file.json')
    compile_.set_defaults(func=cmd_compile)

    datasets = subparsers.add_parser('datasets', help='List built-in toy datasets')
    datasets.set_defaults(func=cmd_datasets)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='[%(asctime)s][%(levelname)s] %(name)s: %(message)s',
    )

    try:
        return args.func(args)
    except (SproutError, ValueError, OSError) as e:
        print(f"sprout: error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
