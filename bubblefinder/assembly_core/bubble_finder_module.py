#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Bubble detection: lock-step multi-branch search from every divergence
node, whole-graph scanning with bounded loop recovery, and multi-round
orchestration.

A bubble is reported when every branch leaving a divergence node has
independently flagged the same node as its convergence point. A branch
flags the successor of any node it reaches that has exactly one right-hand
neighbor. This is a structural heuristic, not a superbubble proof.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List, Optional, Set

from .handle_graph import Direction, Handle, HandleGraph, NodeId

logger = logging.getLogger(__name__)

DEFAULT_START_NODE = 1
DEFAULT_MAX_RESTARTS = 100
DEFAULT_PROBE_STEP = 1
DEFAULT_MAX_ROUNDS = 10


@dataclass(frozen=True)
class Bubble:
    """
    A divergence node and the node where all of its branches reconverge.

    Attributes:
        start: Divergence node
        end: Convergence node
    """
    start: NodeId
    end: NodeId


# ============================================================================
# Per-divergence search state
# ============================================================================

class BubbleState:
    """
    Frontier search across all branches of one divergence node.

    Each branch is keyed by its root (an immediate right-hand neighbor of
    ``start``) and owns a visited set, a pending queue and a set of
    convergence candidates. The three maps always share the same keys.
    """

    def __init__(self, degree: int, start: NodeId, branch_roots: Iterable[NodeId]):
        self.degree = degree
        self.start = start
        self.branch_visits: Dict[NodeId, Set[NodeId]] = {}
        self.branch_deque: Dict[NodeId, Deque[NodeId]] = {}
        self.branch_ends: Dict[NodeId, Set[NodeId]] = {}

        for root in sorted(set(branch_roots)):
            self.branch_visits[root] = set()
            self.branch_deque[root] = deque([root])
            self.branch_ends[root] = set()

    @property
    def branches(self) -> List[NodeId]:
        """Branch keys in ascending order."""
        return sorted(self.branch_deque)

    def pending(self) -> int:
        """Total number of queued nodes across all branches."""
        return sum(len(queue) for queue in self.branch_deque.values())

    def can_continue(self) -> bool:
        return any(self.branch_deque.values())

    def propagate(self, graph: HandleGraph) -> Optional[Set[NodeId]]:
        """
        Advance every branch by one node.

        Returns the convergence candidates flagged during this step, or
        None if no branch flagged any.
        """
        candidates: Set[NodeId] = set()

        for branch in self.branches:
            queue = self.branch_deque[branch]
            if not queue:
                continue

            node_id = queue.popleft()
            visits = self.branch_visits[branch]
            if node_id in visits:
                continue
            visits.add(node_id)

            handle = Handle.forward(node_id)
            successors = [h.node_id for h in graph.neighbors(handle, Direction.RIGHT)]

            if graph.degree(handle, Direction.RIGHT) == 1:
                end = successors[0]
                self.branch_ends[branch].add(end)
                candidates.add(end)

            queue.extend(successors)

        return candidates or None

    def check_finished(self, candidate: NodeId) -> Optional[Bubble]:
        """Return the bubble ending at ``candidate`` if every branch flagged it."""
        count = sum(1 for ends in self.branch_ends.values() if candidate in ends)
        if count == self.degree:
            return Bubble(start=self.start, end=candidate)
        return None


# ============================================================================
# Whole-graph driver
# ============================================================================

class BubbleFinder:
    """
    Single scanning pass over a graph, starting from one node.

    Nodes are visited breadth-first along right-hand edges of their forward
    strand. Each node with more than one right-hand neighbor spawns a
    :class:`BubbleState`. When a search stalls without a bubble, the finder
    enqueues probe ids after the stalled node (``loop_end + probe_step``)
    until ``max_restarts`` probes have been issued, then abandons the
    divergence. A successful search resets the probe cursor.
    """

    def __init__(
        self,
        graph: HandleGraph,
        start_node: NodeId = DEFAULT_START_NODE,
        max_restarts: int = DEFAULT_MAX_RESTARTS,
        probe_step: int = DEFAULT_PROBE_STEP,
    ):
        self.graph = graph
        self.start_node = start_node
        self.max_restarts = max_restarts
        self.probe_step = probe_step
        self.logger = logging.getLogger(f"{__name__}.BubbleFinder")

        self.loop_end: Optional[NodeId] = None
        self.restarts = 0

    def run(self) -> List[Bubble]:
        """Scan the graph and return bubbles in discovery order."""
        bubbles: List[Bubble] = []
        visited: Set[NodeId] = set()
        queue: Deque[NodeId] = deque([self.start_node])
        self.loop_end = None
        self.restarts = 0

        while queue:
            node_id = queue.popleft()
            if node_id in visited:
                continue
            if not self.graph.has_node(node_id):
                self.logger.debug(f"Skipping unknown node {node_id}")
                visited.add(node_id)
                continue

            handle = Handle.forward(node_id)
            out_degree = self.graph.degree(handle, Direction.RIGHT)

            bubble = None
            if out_degree > 1:
                bubble = self._search_divergence(node_id, out_degree, queue)

            if bubble is not None:
                bubbles.append(bubble)
                queue.append(bubble.end)
                self.loop_end = None
                self.restarts = 0
            else:
                queue.extend(h.node_id for h in self.graph.neighbors(handle, Direction.RIGHT))

            visited.add(node_id)

        self.logger.info(f"Scan from node {self.start_node} found {len(bubbles)} bubbles")
        return bubbles

    def _search_divergence(
        self,
        node_id: NodeId,
        out_degree: int,
        queue: Deque[NodeId],
    ) -> Optional[Bubble]:
        handle = Handle.forward(node_id)
        roots = [h.node_id for h in self.graph.neighbors(handle, Direction.RIGHT)]
        state = BubbleState(out_degree, node_id, roots)
        self.logger.debug(f"Divergence at {node_id}: branches {state.branches}")

        while True:
            candidates = state.propagate(self.graph)
            if candidates:
                for candidate in sorted(candidates):
                    bubble = state.check_finished(candidate)
                    if bubble is not None:
                        self.logger.debug(f"Bubble {bubble.start} -> {bubble.end}")
                        return bubble

            if state.can_continue():
                continue

            if self.restarts >= self.max_restarts:
                self.logger.debug(
                    f"Abandoning divergence at {node_id} after {self.restarts} restarts"
                )
                return None

            if self.loop_end is None:
                self.loop_end = node_id
            else:
                self.loop_end += self.probe_step
                queue.append(self.loop_end)
                self.restarts += 1


def find_bubbles(
    graph: HandleGraph,
    start_node: NodeId = DEFAULT_START_NODE,
    max_restarts: int = DEFAULT_MAX_RESTARTS,
    probe_step: int = DEFAULT_PROBE_STEP,
) -> List[Bubble]:
    """Run one scanning pass from ``start_node``."""
    return BubbleFinder(graph, start_node, max_restarts, probe_step).run()


def find_all_bubbles(
    graph: HandleGraph,
    start_node: NodeId = DEFAULT_START_NODE,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    max_restarts: int = DEFAULT_MAX_RESTARTS,
    probe_step: int = DEFAULT_PROBE_STEP,
) -> List[Bubble]:
    """
    Repeat scanning passes, each resuming one past the previous pass's last
    bubble end.

    Stops after ``max_rounds`` passes or as soon as a pass finds nothing.
    Results are concatenated in discovery order.

    Args:
        graph: Graph to scan
        start_node: Node the first pass starts from
        max_rounds: Upper bound on the number of passes
        max_restarts: Probe budget per pass (see :class:`BubbleFinder`)
        probe_step: Distance between successive probe ids

    Returns:
        All bubbles from all passes
    """
    found: List[Bubble] = []
    next_start = start_node

    for round_no in range(1, max_rounds + 1):
        bubbles = find_bubbles(graph, next_start, max_restarts, probe_step)
        logger.debug(f"Round {round_no} from node {next_start}: {len(bubbles)} bubbles")
        if not bubbles:
            break
        found.extend(bubbles)
        next_start = bubbles[-1].end + 1

    logger.info(f"Found {len(found)} bubbles")
    return found

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
