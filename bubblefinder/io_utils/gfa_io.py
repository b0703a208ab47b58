#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

GFA I/O: GFA v1 segment/link parsing, graph loading, and graph export.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..assembly_core.handle_graph import HashGraph

logger = logging.getLogger(__name__)

ORIENTATIONS = ('+', '-')

# Record types that carry no adjacency information for the bubble search
IGNORED_RECORDS = {'P', 'W', 'C', 'E', 'G', 'O', 'U', 'F'}


class GFAParseError(ValueError):
    """Raised when a GFA file cannot be parsed."""

    def __init__(self, message: str, line_no: int | None = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"GFA line {line_no}: {message}"
        super().__init__(message)


# ============================================================================
#                           GFA RECORDS
# ============================================================================

@dataclass
class GFASegment:
    """Represents a GFA S-line (segment)."""
    node_id: int
    name: str
    sequence: str
    length: int

    def to_gfa_line(self) -> str:
        """
        Convert to GFA S-line format.

        Format: S <name> <sequence> LN:i:<length>
        """
        seq_str = self.sequence or '*'
        return f"S\t{self.name}\t{seq_str}\tLN:i:{self.length}"


@dataclass
class GFALink:
    """Represents a GFA L-line (link/edge)."""
    from_name: str
    from_orient: str  # '+' or '-'
    to_name: str
    to_orient: str    # '+' or '-'
    overlap: str = '0M'
    from_id: int = -1
    to_id: int = -1

    def to_gfa_line(self) -> str:
        """
        Convert to GFA L-line format.

        Format: L <from> <from_orient> <to> <to_orient> <overlap>
        """
        return f"L\t{self.from_name}\t{self.from_orient}\t{self.to_name}\t{self.to_orient}\t{self.overlap}"


@dataclass
class GFA:
    """Segments and links read from one GFA file."""
    version: str | None = None
    segments: list[GFASegment] = field(default_factory=list)
    links: list[GFALink] = field(default_factory=list)


# ============================================================================
#                           GFA READER
# ============================================================================

def parse_gfa(gfa_path: str | Path) -> GFA:
    """
    Parse a GFA v1 file into segment and link records.

    Only H, S and L lines are interpreted. Segment names must be unsigned
    integers or ``unitig-N`` names.

    Args:
        gfa_path: Path to a GFA v1 file

    Returns:
        Parsed GFA records

    Raises:
        FileNotFoundError: If gfa_path does not exist.
        GFAParseError: On malformed lines or links to undeclared segments.
    """
    gfa_path = Path(gfa_path)
    if not gfa_path.is_file():
        raise FileNotFoundError(f"GFA file not found: {gfa_path}")

    gfa = GFA()
    link_lines: list[int] = []

    logger.info(f"Parsing GFA: {gfa_path}")

    with open(gfa_path, 'r') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\r\n')
            if not line.strip() or line.startswith('#'):
                continue

            parts = line.split('\t')
            record_type = parts[0]

            if record_type == 'H':
                for tag in parts[1:]:
                    if tag.startswith('VN:Z:'):
                        gfa.version = tag[5:]

            elif record_type == 'S':
                gfa.segments.append(_parse_segment(parts, line_no))

            elif record_type == 'L':
                gfa.links.append(_parse_link(parts, line_no))
                link_lines.append(line_no)

            elif record_type not in IGNORED_RECORDS:
                raise GFAParseError(f"unknown record type '{record_type}'", line_no)

    declared = {segment.node_id for segment in gfa.segments}
    for link, line_no in zip(gfa.links, link_lines):
        for name, node_id in ((link.from_name, link.from_id), (link.to_name, link.to_id)):
            if node_id not in declared:
                raise GFAParseError(f"link references undeclared segment '{name}'", line_no)

    logger.info(f"Parsed {len(gfa.segments)} segments and {len(gfa.links)} links")
    return gfa


def _parse_segment(parts: list[str], line_no: int) -> GFASegment:
    # S <name> <sequence> [LN:i:<length>] ...
    if len(parts) < 3:
        raise GFAParseError("malformed S-line", line_no)

    name = parts[1]
    sequence = parts[2] if parts[2] != '*' else ''
    length = len(sequence)
    for tag in parts[3:]:
        if tag.startswith('LN:i:'):
            try:
                length = int(tag[5:])
            except ValueError as e:
                raise GFAParseError(f"bad LN tag '{tag}'", line_no) from e
            break

    return GFASegment(
        node_id=_segment_id(name, line_no),
        name=name,
        sequence=sequence,
        length=length,
    )


def _parse_link(parts: list[str], line_no: int) -> GFALink:
    # L <from> <from_orient> <to> <to_orient> <overlap>
    if len(parts) < 6:
        raise GFAParseError("malformed L-line", line_no)

    from_name, from_orient, to_name, to_orient, overlap = parts[1:6]
    for orient in (from_orient, to_orient):
        if orient not in ORIENTATIONS:
            raise GFAParseError(f"bad orientation '{orient}'", line_no)

    return GFALink(
        from_name=from_name,
        from_orient=from_orient,
        to_name=to_name,
        to_orient=to_orient,
        overlap=overlap,
        from_id=_segment_id(from_name, line_no),
        to_id=_segment_id(to_name, line_no),
    )


def _segment_id(name: str, line_no: int) -> int:
    try:
        return parse_segment_name(name)
    except ValueError as e:
        raise GFAParseError(str(e), line_no) from e


def load_graph_from_gfa(gfa_path: str | Path) -> HashGraph:
    """
    Load a handle graph from a GFA v1 file.

    Raises:
        FileNotFoundError: If gfa_path does not exist.
        GFAParseError: On malformed GFA content.
    """
    return HashGraph.from_gfa(parse_gfa(gfa_path))


# ============================================================================
#                           GFA EXPORT
# ============================================================================

def export_graph_to_gfa(graph: HashGraph, output_path: str | Path) -> None:
    """
    Write a handle graph as GFA v1.

    Segments are named by their numeric id. Each edge is written once.
    """
    output_path = Path(output_path)
    logger.info(f"Exporting graph to GFA: {output_path}")

    with open(output_path, 'w') as f:
        f.write("H\tVN:Z:1.0\n")
        for node_id in graph.node_ids():
            sequence = graph.sequence(node_id)
            segment = GFASegment(node_id, str(node_id), sequence, len(sequence))
            f.write(segment.to_gfa_line() + "\n")
        for left, right in graph.edges():
            link = GFALink(
                from_name=str(left.node_id),
                from_orient=left.orientation,
                to_name=str(right.node_id),
                to_orient=right.orientation,
            )
            f.write(link.to_gfa_line() + "\n")

    logger.info(f"GFA export complete: {graph.node_count} segments, {graph.edge_count} links")


# ============================================================================
#                           UTILITY FUNCTIONS
# ============================================================================

def parse_unitig_name(name: str) -> int:
    """
    Parse a unitig name to extract internal node ID.

    Example:
        >>> parse_unitig_name('unitig-42')
        42
    """
    if not name.startswith('unitig-'):
        raise ValueError(f"Invalid unitig name format: {name} (expected 'unitig-N')")

    suffix = name[len('unitig-'):]
    if not suffix.isdigit():
        raise ValueError(f"Failed to parse unitig name: {name}")
    return int(suffix)


def parse_segment_name(name: str) -> int:
    """
    Map a segment name to a node id.

    Accepts unsigned integers ('12') and unitig names ('unitig-12').
    """
    if name.startswith('unitig-'):
        return parse_unitig_name(name)
    if not name.isdigit():
        raise ValueError(f"Segment name is not an unsigned integer: {name}")
    return int(name)


def validate_gfa_file(gfa_path: str | Path) -> dict[str, int | str | None]:
    """
    Tally S and L records and the header version without building a graph.

    Records are recognised by their first tab-separated field, the same way
    :func:`parse_gfa` reads them. Nothing else is checked.

    Returns:
        Dict with keys: 'segments', 'links', 'version'
    """
    stats: dict[str, int | str | None] = {'segments': 0, 'links': 0, 'version': None}

    with open(Path(gfa_path), 'r') as f:
        for raw_line in f:
            parts = raw_line.rstrip('\r\n').split('\t')
            record_type = parts[0]
            if record_type == 'S':
                stats['segments'] += 1
            elif record_type == 'L':
                stats['links'] += 1
            elif record_type == 'H':
                versions = [tag[5:] for tag in parts[1:] if tag.startswith('VN:Z:')]
                if versions:
                    stats['version'] = versions[-1]

    return stats

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
