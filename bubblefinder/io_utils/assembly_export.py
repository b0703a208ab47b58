#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Assembly Export: bubble tables as CSV.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable

from ..assembly_core.bubble_finder_module import Bubble

logger = logging.getLogger(__name__)

BUBBLE_CSV_HEADER = "start,end"


def format_bubbles_csv(bubbles: Iterable[Bubble]) -> list[str]:
    """
    Render bubbles as CSV lines, header first, in the given order.

    Example:
        >>> format_bubbles_csv([Bubble(1, 4)])
        ['start,end', '1,4']
    """
    lines = [BUBBLE_CSV_HEADER]
    lines.extend(f"{bubble.start},{bubble.end}" for bubble in bubbles)
    return lines


def export_bubbles_csv(bubbles: Iterable[Bubble], output_path: str | Path) -> Path:
    """
    Write the bubble table to ``output_path``.

    Returns:
        The path written
    """
    output_path = Path(output_path)
    lines = format_bubbles_csv(bubbles)
    logger.info(f"Writing {len(lines) - 1} bubbles to {output_path}")

    with open(output_path, 'w') as f:
        for line in lines:
            f.write(line + "\n")

    return output_path

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
