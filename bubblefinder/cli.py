#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for BubbleFinder.

    bubblefinder <path-to-gfa> [start-node-id]

Prints the number of bubbles, then a ``start,end`` table in discovery order.
"""

import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import (
    ConfigValidationError,
    load_config,
    save_config_template,
)
from .io_utils.assembly_export import format_bubbles_csv
from .io_utils.gfa_io import GFAParseError
from .utils.pipeline import BubblePipeline, setup_logging


def _usage(ctx, message=None):
    """Print an error and the usage line to stderr, then exit with status 1."""
    if message:
        click.echo(f"Error: {message}", err=True)
    click.echo(ctx.get_usage(), err=True)
    sys.exit(1)


class BubbleCommand(click.Command):
    """Command whose usage errors exit with status 1."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _parse_node_id(text):
    """Return ``text`` as an unsigned node id, or None."""
    text = text.strip()
    if not (text.isascii() and text.isdecimal()):
        return None
    return int(text)


@click.command(cls=BubbleCommand, context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(version=__version__)
@click.argument('gfa_path', required=False, metavar='<path-to-gfa>')
@click.argument('start_node', required=False, metavar='[start-node-id]')
@click.option('--config', '-c', 'config_file', type=click.Path(), default=None,
              help='YAML configuration file')
@click.option('--max-restarts', type=int, default=None,
              help='Probe budget after a stalled divergence (default: 100)')
@click.option('--max-rounds', type=int, default=None,
              help='Maximum scanning passes (default: 10)')
@click.option('--probe-step', type=int, default=None,
              help='Id distance between successive probes (default: 1)')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Also write the bubble table to this CSV file')
@click.option('--log-file', type=click.Path(), default=None,
              help='Write log records to this file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.option('--write-config', type=click.Path(), default=None,
              help='Write the default configuration template and exit')
@click.pass_context
def main(ctx, gfa_path, start_node, config_file, max_restarts, max_rounds,
         probe_step, output, log_file, verbose, quiet, write_config):
    """
    BubbleFinder: detect bubbles in GFA assembly graphs.

    Scans the graph from START_NODE (default 1) and reports every divergence
    node whose branches reconverge at a common node.
    """
    if write_config:
        save_config_template(Path(write_config))
        click.echo(f"Configuration template written: {write_config}")
        return

    if not gfa_path:
        _usage(ctx, "missing path to graph file")

    try:
        config = load_config(Path(config_file) if config_file else None)
    except (OSError, ConfigValidationError) as e:
        _usage(ctx, f"cannot load configuration: {e}")
    except yaml.YAMLError as e:
        _usage(ctx, f"cannot parse configuration: {e}")

    settings = config['bubbles']
    if start_node is not None:
        node_id = _parse_node_id(start_node)
        if node_id is None:
            _usage(ctx, f"start node must be an unsigned integer, got '{start_node}'")
        settings['start_node'] = node_id
    if max_restarts is not None:
        settings['max_restarts'] = max_restarts
    if max_rounds is not None:
        settings['max_rounds'] = max_rounds
    if probe_step is not None:
        settings['probe_step'] = probe_step
    if output:
        config['output']['csv_path'] = output

    logging_config = config['output']['logging']
    if verbose:
        logging_config['level'] = 'DEBUG'
    elif quiet:
        logging_config['level'] = 'ERROR'
    if log_file:
        logging_config['log_file'] = log_file

    try:
        pipeline = BubblePipeline(config)
    except ConfigValidationError as e:
        _usage(ctx, f"invalid configuration: {e}")

    setup_logging(logging_config['level'], logging_config['log_file'])

    try:
        bubbles = pipeline.run(gfa_path)
    except (OSError, GFAParseError, UnicodeDecodeError) as e:
        _usage(ctx, f"cannot process graph: {e}")

    click.echo(len(bubbles))
    for line in format_bubbles_csv(bubbles):
        click.echo(line)


if __name__ == '__main__':
    main()
