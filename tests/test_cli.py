"""Tests for CLI interface."""

import json
import logging

import pytest
from omegaconf import OmegaConf

from statespace.cli.main import main_cli, create_parser
from statespace.cli.utils import (
    format_duration, logging_settings, parse_position, result_to_dict, save_results,
    verbosity_to_level
)
from statespace.config import reset_config
from statespace.graphs import WeightedGrid

CAVES = "start-A\nstart-b\nA-c\nA-b\nb-d\nA-end\nb-end\n"


@pytest.fixture(autouse=True)
def clean_global_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def grid_file(tmp_path):
    path = tmp_path / "grid.txt"
    path.write_text("116\n138\n213\n")
    return path


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "caves.txt"
    path.write_text(CAVES)
    return path


class TestCLIParser:
    """Test CLI argument parsing."""

    def test_create_parser(self):
        parser = create_parser()
        assert parser.prog == 'statespace'

    def test_grid_command_parsing(self):
        parser = create_parser()
        args = parser.parse_args(['grid', 'grid.txt'])
        assert args.command == 'grid'
        assert args.grid_file == 'grid.txt'
        assert args.discipline is None
        assert args.start == '0,0'
        assert args.goal is None

        args = parser.parse_args(['-c', 'search.tie_breaker=lifo', '-c', 'search.progress_interval=10',
                                  'grid', 'grid.txt', '-d', 'astar', '--goal', '1,1', '--stats'])
        assert args.config == ['search.tie_breaker=lifo', 'search.progress_interval=10']
        assert args.discipline == 'astar'
        assert args.goal == '1,1'
        assert args.stats is True

    def test_graph_command_parsing(self):
        parser = create_parser()
        args = parser.parse_args(['graph', 'edges.txt', '--start', 'a', '--goal', 'b', '--all-paths'])
        assert args.command == 'graph'
        assert args.all_paths is True
        assert args.directed is False

        with pytest.raises(SystemExit):
            parser.parse_args(['graph', 'edges.txt', '--start', 'a'])

    def test_invalid_discipline(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['grid', 'grid.txt', '-d', 'sideways'])

    def test_config_command_parsing(self):
        args = create_parser().parse_args(['config', 'validate'])
        assert args.command == 'config'
        assert args.config_action == 'validate'


class TestCLIUtils:
    """Test CLI utility functions."""

    def test_parse_position(self):
        assert parse_position('2,3') == (2, 3)
        with pytest.raises(ValueError):
            parse_position('2')
        with pytest.raises(ValueError):
            parse_position('a,b')

    def test_verbosity(self):
        assert verbosity_to_level(0) == logging.WARNING
        assert verbosity_to_level(1) == logging.INFO
        assert verbosity_to_level(3) == logging.DEBUG
        assert verbosity_to_level(2, quiet=True) == logging.ERROR

    def test_format_duration(self):
        assert format_duration(0.0005) == "500.0µs"
        assert format_duration(0.5) == "500.0ms"
        assert format_duration(5.5) == "5.50s"
        assert format_duration(125) == "2m 5.0s"

    def test_result_to_dict(self):
        result = WeightedGrid.from_digits(["12", "11"]).shortest_path()
        payload = result_to_dict(result, include_path=True)
        assert payload['found'] is True
        assert payload['cost'] == 2
        assert payload['path'] == [(0, 0), (1, 0), (1, 1)]
        assert payload['stats']['visited_states'] == len(result.ledger)
        assert 'path' not in result_to_dict(result)

    def test_save_results(self, tmp_path):
        output = tmp_path / "nested" / "result.json"
        save_results({'terminal': (1, 2), 'paths': [('a', 'b')]}, output)
        assert json.loads(output.read_text()) == {'terminal': [1, 2], 'paths': [['a', 'b']]}


class TestCLICommands:
    """Test end-to-end command execution."""

    def test_no_command(self, capsys):
        assert main_cli([]) == 1

    def test_grid_ucs(self, grid_file, capsys):
        assert main_cli(['grid', str(grid_file)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['found'] is True
        assert payload['cost'] == 7
        assert payload['terminal'] == [2, 2]
        assert 'path' not in payload

    def test_grid_bfs_counts_steps(self, grid_file, capsys):
        assert main_cli(['grid', str(grid_file), '-d', 'bfs', '--show-path']) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['cost'] == 4
        assert len(payload['path']) == 5

    def test_grid_astar_matches_ucs(self, grid_file, capsys):
        assert main_cli(['grid', str(grid_file), '-d', 'astar']) == 0
        assert json.loads(capsys.readouterr().out)['cost'] == 7

    def test_grid_stats(self, grid_file, capsys):
        assert main_cli(['-o', str(grid_file.parent / 'out.json'), 'grid', str(grid_file), '--stats']) == 0
        out = capsys.readouterr().out
        assert 'Enqueued:' in out
        assert 'Computation time:' in out

    def test_grid_output_file(self, grid_file, tmp_path, capsys):
        output = tmp_path / "result.json"
        assert main_cli(['-o', str(output), 'grid', str(grid_file), '--goal', '0,2']) == 0
        saved = json.loads(output.read_text())
        assert saved['terminal'] == [0, 2]
        assert saved['cost'] == 7
        assert capsys.readouterr().out == ''

    def test_grid_missing_file(self, tmp_path):
        assert main_cli(['grid', str(tmp_path / "missing.txt")]) == 1

    def test_grid_bad_override(self, grid_file):
        assert main_cli(['-c', 'search.tie_breaker=random', 'grid', str(grid_file)]) == 1

    def test_graph_shortest(self, graph_file, capsys):
        assert main_cli(['graph', str(graph_file), '--start', 'start', '--goal', 'end',
                         '--show-path']) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['cost'] == 2
        assert payload['path'][0] == 'start'
        assert payload['path'][-1] == 'end'

    def test_graph_all_paths(self, graph_file, capsys):
        assert main_cli(['graph', str(graph_file), '--start', 'start', '--goal', 'end',
                         '--all-paths']) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['count'] == 4
        assert ['start', 'b', 'A', 'end'] in payload['paths']

    def test_graph_unknown_label(self, graph_file):
        assert main_cli(['graph', str(graph_file), '--start', 'start', '--goal', 'zzz']) == 1

    def test_config_show(self, capsys):
        assert main_cli(['config', 'show']) == 0
        out = capsys.readouterr().out
        assert "Current Configuration:" in out
        assert "discipline: priority" in out

    def test_config_validate(self, capsys):
        assert main_cli(['config', 'validate']) == 0
        assert "Configuration is valid" in capsys.readouterr().out

    def test_config_validate_warnings(self, capsys):
        assert main_cli(['-c', 'search.discipline=fifo', '-c', 'search.tie_breaker=lifo',
                         'config', 'validate']) == 0
        out = capsys.readouterr().out
        assert "Warning: tie_breaker has no effect" in out

    def test_config_validate_failure(self, capsys):
        assert main_cli(['-c', 'search.progress_interval=-1', 'config', 'validate']) == 1
        assert "Configuration validation failed" in capsys.readouterr().out


class TestCLIConfiguration:
    """Test that configuration values reach the commands."""

    def test_configured_log_level(self, grid_file, capsys):
        assert main_cli(['-c', 'logging.level=DEBUG', 'grid', str(grid_file)]) == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_verbosity_flag_beats_configured_level(self, grid_file, capsys):
        assert main_cli(['-q', '-c', 'logging.level=DEBUG', 'grid', str(grid_file)]) == 0
        assert logging.getLogger().level == logging.ERROR

    def test_default_log_level(self, grid_file, capsys):
        assert main_cli(['grid', str(grid_file)]) == 0
        assert logging.getLogger().level == logging.WARNING

    def test_logging_settings(self):
        cfg = OmegaConf.create({'logging': {'level': 'info', 'format': '%(message)s'}})
        assert logging_settings(cfg) == (logging.INFO, '%(message)s')
        assert logging_settings(OmegaConf.create({}))[0] == logging.WARNING
        assert logging_settings(OmegaConf.create({'logging': {'level': 'LOUD'}}))[0] == logging.WARNING

    def test_configured_discipline(self, grid_file, capsys):
        """Without --discipline, search.discipline decides."""
        assert main_cli(['-c', 'search.discipline=fifo', 'grid', str(grid_file)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['cost'] == 4
        assert payload['discipline'] == 'fifo'

    def test_flag_beats_configured_discipline(self, grid_file, capsys):
        assert main_cli(['-c', 'search.discipline=fifo', 'grid', str(grid_file), '-d', 'ucs']) == 0
        assert json.loads(capsys.readouterr().out)['cost'] == 7

    def test_configured_astar(self, graph_file, capsys):
        assert main_cli(['-c', 'search.discipline=astar', 'graph', str(graph_file),
                         '--start', 'start', '--goal', 'end']) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['discipline'] == 'astar'
        assert payload['cost'] == 2

    def test_bad_override_syntax(self, grid_file):
        assert main_cli(['-c', 'search.no_such_key=1', 'grid', str(grid_file)]) == 1

    def test_configured_show_path(self, grid_file, capsys):
        assert main_cli(['-c', 'cli.show_path=true', 'grid', str(grid_file)]) == 0
        assert len(json.loads(capsys.readouterr().out)['path']) == 5
