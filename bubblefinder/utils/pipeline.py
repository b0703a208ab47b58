#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Pipeline orchestration: configuration, logging setup, graph loading,
bubble search and optional CSV export in one call.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..assembly_core.bubble_finder_module import Bubble, find_all_bubbles
from ..config.schema import ConfigValidationError, validate_config
from ..io_utils.assembly_export import export_bubbles_csv
from ..io_utils.gfa_io import load_graph_from_gfa

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'WARNING', log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Configure root logging.

    Log records go to stderr so that stdout carries only results.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


class BubblePipeline:
    """
    Runs a configured bubble search over one GFA file.

    Configuration layout follows ``DEFAULT_CONFIG`` in
    :mod:`bubblefinder.config.schema`.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Args:
            config: Merged configuration dictionary

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        errors = validate_config(config)
        if errors:
            raise ConfigValidationError(errors)

        self.config = config
        self.logger = logging.getLogger(f"{__name__}.BubblePipeline")

    def run(self, gfa_path: Union[str, Path]) -> List[Bubble]:
        """
        Load ``gfa_path`` and return all bubbles in discovery order.

        Raises:
            FileNotFoundError: If gfa_path does not exist
            GFAParseError: If gfa_path is not valid GFA
        """
        settings = self.config['bubbles']
        graph = load_graph_from_gfa(gfa_path)

        self.logger.info(
            f"Searching bubbles from node {settings['start_node']} "
            f"(rounds={settings['max_rounds']}, restarts={settings['max_restarts']})"
        )
        bubbles = find_all_bubbles(
            graph,
            start_node=settings['start_node'],
            max_rounds=settings['max_rounds'],
            max_restarts=settings['max_restarts'],
            probe_step=settings['probe_step'],
        )

        csv_path = self.config['output'].get('csv_path')
        if csv_path:
            export_bubbles_csv(bubbles, csv_path)

        return bubbles

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
