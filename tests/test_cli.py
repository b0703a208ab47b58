#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Tests for CLI command interface.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

import pytest
import yaml
from click.testing import CliRunner
from bubblefinder.cli import main


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test that --help runs without error."""
        runner = CliRunner()
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'BubbleFinder' in result.output

    def test_cli_version(self):
        """Test that --version displays version."""
        runner = CliRunner()
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_write_config(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ['--write-config', 'bubbles.yaml'])

            assert result.exit_code == 0
            with open('bubbles.yaml') as f:
                assert yaml.safe_load(f)['bubbles']['max_restarts'] == 100


class TestFindBubbles:
    """Successful runs print the count, the header and one row per bubble."""

    def test_diamond(self, write_gfa, diamond_gfa_text):
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(diamond_gfa_text))])

        assert result.exit_code == 0
        assert result.output.splitlines() == ['1', 'start,end', '1,4']

    def test_chained_diamonds(self, write_gfa, chained_diamond_gfa_text):
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(chained_diamond_gfa_text))])

        assert result.exit_code == 0
        assert result.output.splitlines() == ['2', 'start,end', '1,4', '5,8']

    def test_start_node_argument(self, write_gfa, chained_diamond_gfa_text):
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(chained_diamond_gfa_text)), '5'])

        assert result.exit_code == 0
        assert result.output.splitlines() == ['1', 'start,end', '5,8']

    def test_no_bubbles(self, write_gfa):
        text = "S\t1\tA\nS\t2\tC\nS\t3\tG\nL\t1\t+\t2\t+\t0M\nL\t2\t+\t3\t+\t0M\n"
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(text))])

        assert result.exit_code == 0
        assert result.output.splitlines() == ['0', 'start,end']

    def test_output_csv(self, write_gfa, diamond_gfa_text, temp_output_dir):
        csv_path = temp_output_dir / "bubbles.csv"
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(diamond_gfa_text)), '-o', str(csv_path)])

        assert result.exit_code == 0
        assert csv_path.read_text() == "start,end\n1,4\n"

    def test_config_file(self, write_gfa, chained_diamond_gfa_text, temp_output_dir):
        config_path = temp_output_dir / "config.yaml"
        config_path.write_text("bubbles:\n  start_node: 4\n")
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(chained_diamond_gfa_text)), '-c', str(config_path)])

        assert result.exit_code == 0
        assert result.output.splitlines() == ['1', 'start,end', '5,8']

    def test_max_rounds_option(self, write_gfa):
        lines = [f"S\t{n}\tA" for n in range(1, 9)]
        lines += [f"L\t{a}\t+\t{b}\t+\t0M" for a, b in [(1, 2), (1, 3), (2, 4), (3, 4),
                                                       (5, 6), (5, 7), (6, 8), (7, 8)]]
        path = write_gfa("\n".join(lines) + "\n")
        runner = CliRunner()

        result = runner.invoke(main, [str(path)])
        assert result.output.splitlines()[0] == '2'

        result = runner.invoke(main, [str(path), '--max-rounds', '1'])
        assert result.output.splitlines() == ['1', 'start,end', '1,4']

    def test_log_file(self, write_gfa, diamond_gfa_text, temp_output_dir):
        log_path = temp_output_dir / "run.log"
        runner = CliRunner()
        result = runner.invoke(main, [
            str(write_gfa(diamond_gfa_text)), '--log-file', str(log_path), '--quiet',
        ])

        assert result.exit_code == 0
        assert log_path.exists()


class TestUsageErrors:
    """Bad input prints usage and exits with status 1, with no results."""

    def _assert_usage(self, result):
        assert result.exit_code == 1
        assert 'Usage' in result.output
        assert 'start,end' not in result.output

    def test_missing_path(self):
        runner = CliRunner()
        self._assert_usage(runner.invoke(main, []))

    def test_nonexistent_file(self, temp_output_dir):
        runner = CliRunner()
        self._assert_usage(runner.invoke(main, [str(temp_output_dir / 'missing.gfa')]))

    def test_directory_instead_of_file(self, temp_output_dir):
        runner = CliRunner()
        self._assert_usage(runner.invoke(main, [str(temp_output_dir)]))

    def test_unparseable_gfa(self, write_gfa):
        runner = CliRunner()
        self._assert_usage(runner.invoke(main, [str(write_gfa("S\tfoo\tACGT\n"))]))

    @pytest.mark.parametrize("start", ['abc', '-1', '1.5', '\u00b2'])
    def test_bad_start_node(self, write_gfa, diamond_gfa_text, start):
        runner = CliRunner()
        self._assert_usage(runner.invoke(main, [str(write_gfa(diamond_gfa_text)), start]))

    def test_invalid_config_value(self, write_gfa, diamond_gfa_text):
        runner = CliRunner()
        result = runner.invoke(main, [str(write_gfa(diamond_gfa_text)), '--probe-step', '0'])
        self._assert_usage(result)
        assert 'probe_step' in result.output

    def test_missing_config_file(self, write_gfa, diamond_gfa_text, temp_output_dir):
        runner = CliRunner()
        result = runner.invoke(main, [
            str(write_gfa(diamond_gfa_text)), '-c', str(temp_output_dir / 'none.yaml'),
        ])
        self._assert_usage(result)

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
