"""
Tests for the toy datasets.

Run with: python -m pytest tests/test_datasets.py -v
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sprout.datasets.toy import (
    DATASETS,
    get_dataset,
    list_datasets,
    noisy_xor_dataset,
    records_from_arrays,
    xor_dataset,
)


class TestToyDatasets:
    """Tests for record-form datasets."""

    def test_xor_truth_table(self):
        """Test the XOR records."""
        data = xor_dataset()
        assert len(data) == 4
        table = {(r['input']['a'], r['input']['b']): r['output']['xor'] for r in data}
        assert table == {(0, 0): 0, (0, 1): 1, (1, 0): 1, (1, 1): 0}

    def test_get_dataset(self):
        """Test lookup by name."""
        assert get_dataset('and')[-1] == {'input': {'a': 1, 'b': 1}, 'output': {'and': 1}}
        assert len(get_dataset('noisy_xor', n_samples=8)) == 8

    def test_unknown_dataset(self):
        """Test unknown names raise with the available list."""
        with pytest.raises(ValueError, match='Available'):
            get_dataset('spirals')

    def test_list_datasets_hides_functions(self):
        """Test listing omits the generator functions."""
        listing = list_datasets()
        assert set(listing) == set(DATASETS)
        assert all('function' not in info for info in listing.values())

    def test_noisy_xor_seeded(self):
        """Test seeded generation is reproducible and bounded."""
        first = noisy_xor_dataset(n_samples=20, seed=42)
        second = noisy_xor_dataset(n_samples=20, seed=42)

        assert first == second
        assert len(first) == 20
        for record in first:
            assert 0.0 <= record['input']['a'] <= 1.0
            assert record['output']['xor'] in (0.0, 1.0)

    def test_records_from_arrays(self):
        """Test numpy arrays convert to keyed records."""
        X = np.array([[0.1, 0.2], [0.3, 0.4]])
        y = np.array([1, 0])

        records = records_from_arrays(X, y, input_keys=['x', 'y'], output_key='label')
        assert records[0] == {'input': {'x': 0.1, 'y': 0.2}, 'output': {'label': 1.0}}

        indexed = records_from_arrays(X, y)
        assert indexed[1] == {'input': {'0': 0.3, '1': 0.4}, 'output': {'0': 0.0}}

    def test_records_from_arrays_shape_mismatch(self):
        """Test mismatched shapes are rejected."""
        with pytest.raises(ValueError):
            records_from_arrays(np.zeros((3, 2)), np.zeros(2))
        with pytest.raises(ValueError):
            records_from_arrays(np.zeros((2, 2)), np.zeros(2), input_keys=['only_one'])
