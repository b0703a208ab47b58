#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Handle graph: oriented node references and a bidirected, in-memory
sequence graph.

A handle is one strand of a segment. Every edge joins the right end of one
handle to the left end of another, so the edge ``a+ -> b-`` is the same edge
as ``b+ -> a-`` read from the other strand.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Protocol, Tuple

logger = logging.getLogger(__name__)

NodeId = int


# ============================================================================
# Handles
# ============================================================================

class Direction(Enum):
    """Side of a handle, relative to the handle's own orientation."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, order=True)
class Handle:
    """
    Oriented reference to a node.

    Attributes:
        node_id: Segment identifier
        is_reverse: True for the reverse-complement strand
    """
    node_id: NodeId
    is_reverse: bool = False

    @classmethod
    def forward(cls, node_id: NodeId) -> "Handle":
        return cls(node_id, False)

    def flip(self) -> "Handle":
        """Return the handle for the opposite strand of the same node."""
        return Handle(self.node_id, not self.is_reverse)

    @property
    def orientation(self) -> str:
        return '-' if self.is_reverse else '+'

    def __str__(self) -> str:
        return f"{self.node_id}{self.orientation}"


# ============================================================================
# Graph protocol
# ============================================================================

class HandleGraph(Protocol):
    """
    Read-only queries the bubble search needs from a graph.

    ``neighbors`` must return a fresh iterator on every call.
    """

    def has_node(self, node_id: NodeId) -> bool:
        ...

    def degree(self, handle: Handle, direction: Direction) -> int:
        ...

    def neighbors(self, handle: Handle, direction: Direction) -> Iterator[Handle]:
        ...


# ============================================================================
# In-memory implementation
# ============================================================================

@dataclass
class HashGraph:
    """
    Bidirected sequence graph keyed by integer node ids.

    Only right-side adjacency is stored; left-side queries are answered
    through the opposite strand.
    """
    sequences: Dict[NodeId, str] = field(default_factory=dict)
    right_edges: Dict[Handle, List[Handle]] = field(default_factory=lambda: defaultdict(list))
    _edge_count: int = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def create_handle(self, node_id: NodeId, sequence: str = '') -> Handle:
        """Add a node and return its forward handle."""
        if node_id < 0:
            raise ValueError(f"Node id must be unsigned, got {node_id}")
        if node_id in self.sequences:
            logger.debug(f"Node {node_id} already present, replacing sequence")
        self.sequences[node_id] = sequence
        return Handle.forward(node_id)

    def add_node(self, node_id: NodeId, sequence: str = '') -> None:
        self.create_handle(node_id, sequence)

    def create_edge(self, left: Handle, right: Handle) -> bool:
        """
        Join the right end of ``left`` to the left end of ``right``.

        The reverse-strand twin of the edge is registered at the same time.
        Returns False if the edge already existed.
        """
        for handle in (left, right):
            if handle.node_id not in self.sequences:
                raise ValueError(f"Cannot create edge to unknown node {handle.node_id}")

        targets = self.right_edges.setdefault(left, [])
        if right in targets:
            return False

        targets.append(right)
        twin_left, twin_right = right.flip(), left.flip()
        if (twin_left, twin_right) != (left, right):
            self.right_edges.setdefault(twin_left, []).append(twin_right)

        self._edge_count += 1
        return True

    @classmethod
    def from_gfa(cls, gfa: Any) -> "HashGraph":
        """
        Build a graph from parsed GFA records.

        ``gfa`` needs ``segments`` (with ``node_id`` and ``sequence``) and
        ``links`` (with ``from_id``/``from_orient``/``to_id``/``to_orient``).
        """
        graph = cls()
        for segment in gfa.segments:
            graph.create_handle(segment.node_id, segment.sequence)
        for link in gfa.links:
            graph.create_edge(
                Handle(link.from_id, link.from_orient == '-'),
                Handle(link.to_id, link.to_orient == '-'),
            )
        logger.info(f"Built handle graph: {graph.node_count} nodes, {graph.edge_count} edges")
        return graph

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self.sequences)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self.sequences

    def node_ids(self) -> List[NodeId]:
        """All node ids in ascending order."""
        return sorted(self.sequences)

    def sequence(self, node_id: NodeId) -> str:
        return self.sequences[node_id]

    def degree(self, handle: Handle, direction: Direction) -> int:
        if direction is Direction.RIGHT:
            return len(self.right_edges.get(handle, ()))
        return len(self.right_edges.get(handle.flip(), ()))

    def neighbors(self, handle: Handle, direction: Direction) -> Iterator[Handle]:
        if direction is Direction.RIGHT:
            return iter(list(self.right_edges.get(handle, ())))
        return (h.flip() for h in list(self.right_edges.get(handle.flip(), ())))

    def edges(self) -> Iterator[Tuple[Handle, Handle]]:
        """Yield every edge once, in its canonical strand."""
        for left, targets in sorted(self.right_edges.items()):
            for right in targets:
                if (left, right) <= (right.flip(), left.flip()):
                    yield left, right

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
