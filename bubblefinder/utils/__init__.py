"""
Utilities module for BubbleFinder.

- Pipeline orchestration (config -> graph -> bubbles -> export)
- Logging setup
"""

from .pipeline import BubblePipeline, setup_logging

__all__ = [
    "BubblePipeline",
    "setup_logging",
]
