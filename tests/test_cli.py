"""
Tests for the command line interface.

Run with: python -m pytest tests/test_cli.py -v
"""

import json

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sprout.__main__ import main


@pytest.fixture
def saved_net(tmp_path):
    path = tmp_path / 'xor.json'
    assert main(['train', 'toy:xor', '-o', str(path), '--iterations', '50', '--seed', '1']) == 0
    return path


class TestCli:
    """Tests for python -m sprout."""

    def test_datasets(self, capsys):
        """Test listing datasets."""
        assert main(['datasets']) == 0
        out = capsys.readouterr().out
        assert 'xor' in out
        assert 'noisy_xor' in out

    def test_train_saves_network(self, saved_net):
        """Test training writes a loadable network."""
        state = json.loads(saved_net.read_text())
        assert len(state['layers']) == 3
        assert set(state['layers'][0]['nodes']) == {'a', 'b'}

    def test_train_reports(self, tmp_path, capsys):
        """Test training prints a summary."""
        path = tmp_path / 'and.json'
        assert main(['train', 'toy:and', '-o', str(path), '--iterations', '5']) == 0
        out = capsys.readouterr().out
        assert 'Final error' in out
        assert 'Saved to' in out

    def test_train_from_file_with_progress(self, tmp_path, capsys):
        """Test training from a records file with fixed hidden layers."""
        data = tmp_path / 'data.json'
        data.write_text(json.dumps([
            {'input': {'x': 0}, 'output': {'y': 1}},
            {'input': {'x': 1}, 'output': {'y': 0}},
        ]))
        out_path = tmp_path / 'net.json'

        code = main([
            'train', str(data), '-o', str(out_path),
            '--iterations', '4', '--error-threshold', '1e-9',
            '--hidden', '2', '2', '--resolution', '2',
        ])

        assert code == 0
        assert len(json.loads(out_path.read_text())['layers']) == 4
        out = capsys.readouterr().out
        assert 'Iteration 0:' in out
        assert 'Iteration 2:' in out

    def test_run_and_compile_agree(self, saved_net, capsys):
        """Test run and compile print the same outputs."""
        capsys.readouterr()

        assert main(['run', str(saved_net), '{"a": 1, "b": 0}']) == 0
        run_out = json.loads(capsys.readouterr().out)

        assert main(['compile', str(saved_net), '{"a": 1, "b": 0}']) == 0
        compile_out = json.loads(capsys.readouterr().out)

        assert run_out['xor'] == pytest.approx(compile_out['xor'], abs=1e-9)

    def test_inputs_from_file(self, saved_net, tmp_path, capsys):
        """Test @file input records."""
        inputs = tmp_path / 'in.json'
        inputs.write_text('{"a": 0, "b": 1}')
        capsys.readouterr()

        assert main(['run', str(saved_net), f'@{inputs}']) == 0
        assert 'xor' in json.loads(capsys.readouterr().out)

    def test_missing_network(self, tmp_path, capsys):
        """Test errors exit with status 1 and a message."""
        assert main(['run', str(tmp_path / 'missing.json'), '{}']) == 1
        assert 'sprout: error' in capsys.readouterr().err

    @pytest.mark.parametrize("content", ['[[0, 1]]', '{"input": {"x": 1}}'])
    def test_malformed_records_file(self, tmp_path, capsys, content):
        """Test records that are not objects are reported, not raised."""
        data = tmp_path / 'data.json'
        data.write_text(content)

        code = main(['train', str(data), '-o', str(tmp_path / 'n.json')])

        assert code == 1
        assert 'sprout: error' in capsys.readouterr().err
        assert not (tmp_path / 'n.json').exists()

    def test_bad_hidden_sizes(self, tmp_path, capsys):
        """Test configuration errors are reported, not raised."""
        code = main(['train', 'toy:xor', '-o', str(tmp_path / 'n.json'), '--hidden', '0'])
        assert code == 1
        assert 'hidden' in capsys.readouterr().err
