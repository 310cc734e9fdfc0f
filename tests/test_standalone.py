"""
Tests for the standalone forward-pass evaluator.

Run with: python -m pytest tests/test_standalone.py -v
"""

import json

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sprout.core.errors import MalformedStateError
from sprout.core.network import NeuralNetwork
from sprout.core.standalone import StandaloneNetwork, compile_standalone
from sprout.datasets.toy import xor_dataset


@pytest.fixture
def trained_net():
    net = NeuralNetwork(hidden=[3, 2], seed=11)
    net.train(xor_dataset(), iterations=300)
    return net


class TestStandalone:
    """Tests for compile_standalone."""

    def test_matches_run(self, trained_net):
        """Test compiled outputs match run within 1e-9."""
        evaluate = trained_net.compile_standalone()

        for record in xor_dataset():
            expected = trained_net.run(record['input'])
            actual = evaluate(record['input'])
            assert set(actual) == set(expected)
            for key in expected:
                assert actual[key] == pytest.approx(expected[key], abs=1e-9)

    def test_independent_of_network(self, trained_net):
        """Test further training does not change a compiled snapshot."""
        evaluate = trained_net.compile_standalone()
        before = evaluate({'a': 1, 'b': 0})

        trained_net.train(xor_dataset(), iterations=50)
        trained_net.run({'c': 1})

        assert evaluate({'a': 1, 'b': 0}) == before

    def test_unseen_keys_ignored(self, trained_net):
        """Test keys absent at compile time have no effect."""
        evaluate = trained_net.compile_standalone()
        assert evaluate({'a': 1, 'b': 0, 'zzz': 5}) == evaluate({'a': 1, 'b': 0})

    def test_missing_keys_read_as_zero(self, trained_net):
        """Test omitted inputs behave like zeros."""
        evaluate = trained_net.compile_standalone()
        assert evaluate({'a': 1}) == evaluate({'a': 1, 'b': 0})

    def test_returns_mapping_for_index_outputs(self):
        """Test index-keyed outputs come back as a mapping."""
        net = NeuralNetwork(seed=2)
        net.train_item([1, 0], [1, 0])

        outputs = net.compile_standalone()([1, 0])
        expected = net.run([1, 0])

        assert list(outputs) == ['0', '1']
        assert [outputs['0'], outputs['1']] == pytest.approx(expected, abs=1e-9)

    def test_from_serialized_json(self, trained_net):
        """Test a compiled network can be built from stored JSON alone."""
        state = json.loads(trained_net.to_json())
        evaluate = compile_standalone(state)

        assert isinstance(evaluate, StandaloneNetwork)
        assert evaluate.input_keys == ['a', 'b']
        assert evaluate.output_keys == ['xor']
        assert evaluate.to_dict() == state

    def test_to_dict_is_a_copy(self, trained_net):
        """Test the baked-in weights cannot be changed from outside."""
        state = trained_net.to_dict()
        evaluate = compile_standalone(state)
        before = evaluate({'a': 1, 'b': 1})

        state['layers'][1]['nodes']['0']['bias'] = 100.0
        evaluate.to_dict()['layers'][1]['nodes']['0']['bias'] = 100.0

        assert evaluate({'a': 1, 'b': 1}) == before

    @pytest.mark.parametrize("state", [
        {},
        {'layers': [{'nodes': {}}]},
        {'layers': [{'nodes': {'a': {}}}, {'nodes': {'x': {'bias': 0.0}}}]},
    ])
    def test_malformed_state(self, state):
        """Test invalid trees are rejected at compile time."""
        with pytest.raises(MalformedStateError):
            compile_standalone(state)
