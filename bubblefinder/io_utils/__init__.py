"""
BubbleFinder v0.1.0

I/O Module for BubbleFinder.

1. gfa_io.py - GFA v1 parsing, graph loading and export
2. assembly_export.py - Bubble table export (CSV)
"""

from .gfa_io import (
    GFA,
    GFASegment,
    GFALink,
    GFAParseError,
    parse_gfa,
    load_graph_from_gfa,
    export_graph_to_gfa,
    parse_segment_name,
    parse_unitig_name,
    validate_gfa_file,
)
from .assembly_export import (
    BUBBLE_CSV_HEADER,
    format_bubbles_csv,
    export_bubbles_csv,
)

__all__ = [
    # GFA
    "GFA",
    "GFASegment",
    "GFALink",
    "GFAParseError",
    "parse_gfa",
    "load_graph_from_gfa",
    "export_graph_to_gfa",
    "parse_segment_name",
    "parse_unitig_name",
    "validate_gfa_file",
    # Bubble export
    "BUBBLE_CSV_HEADER",
    "format_bubbles_csv",
    "export_bubbles_csv",
]
