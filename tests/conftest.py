#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Pytest configuration and shared fixtures.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from bubblefinder.assembly_core.handle_graph import Handle, HashGraph


def build_graph(edges, extra_nodes=()):
    """Build a forward-strand graph from (from_id, to_id) pairs."""
    graph = HashGraph()
    node_ids = {n for edge in edges for n in edge} | set(extra_nodes)
    for node_id in sorted(node_ids):
        graph.create_handle(node_id, "ACGT")
    for from_id, to_id in edges:
        graph.create_edge(Handle.forward(from_id), Handle.forward(to_id))
    return graph


DIAMOND_EDGES = [(1, 2), (1, 3), (2, 4), (3, 4)]

CHAINED_DIAMOND_EDGES = DIAMOND_EDGES + [
    (4, 5), (5, 6), (5, 7), (6, 8), (7, 8),
]

# Each branch of node 1 ends in its own two-node cycle and never meets the other
CYCLE_EDGES = [(1, 2), (1, 3), (2, 4), (4, 2), (3, 5), (5, 3)]


@pytest.fixture
def make_graph():
    return build_graph


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="bubblefinder_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def diamond_graph():
    return build_graph(DIAMOND_EDGES)


@pytest.fixture
def chained_diamond_graph():
    return build_graph(CHAINED_DIAMOND_EDGES)


@pytest.fixture
def cycle_edges():
    return list(CYCLE_EDGES)


@pytest.fixture
def cycle_graph():
    return build_graph(CYCLE_EDGES)


@pytest.fixture
def diamond_gfa_text():
    """Diamond 1 -> {2, 3} -> 4 as GFA v1."""
    return (
        "H\tVN:Z:1.0\n"
        "S\t1\tACGT\n"
        "S\t2\tA\n"
        "S\t3\tC\n"
        "S\t4\tGGTT\n"
        "L\t1\t+\t2\t+\t0M\n"
        "L\t1\t+\t3\t+\t0M\n"
        "L\t2\t+\t4\t+\t0M\n"
        "L\t3\t+\t4\t+\t0M\n"
    )


@pytest.fixture
def chained_diamond_gfa_text():
    lines = ["H\tVN:Z:1.0"]
    lines += [f"S\t{n}\tACGT" for n in range(1, 9)]
    lines += [f"L\t{a}\t+\t{b}\t+\t0M" for a, b in CHAINED_DIAMOND_EDGES]
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_gfa(temp_output_dir):
    """Write GFA text to a file in the temp directory and return its path."""
    def _write(text, name="graph.gfa"):
        path = temp_output_dir / name
        path.write_text(text)
        return path
    return _write

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
