"""
BubbleFinder v0.1.0

Assembly core: handle graph and bubble detection.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from .handle_graph import (
    NodeId,
    Direction,
    Handle,
    HandleGraph,
    HashGraph,
)
from .bubble_finder_module import (
    Bubble,
    BubbleState,
    BubbleFinder,
    find_bubbles,
    find_all_bubbles,
)

__all__ = [
    # Graph
    "NodeId",
    "Direction",
    "Handle",
    "HandleGraph",
    "HashGraph",
    # Bubbles
    "Bubble",
    "BubbleState",
    "BubbleFinder",
    "find_bubbles",
    "find_all_bubbles",
]
