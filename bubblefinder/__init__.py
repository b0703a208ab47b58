#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Package initialization and version metadata.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from .version import __version__

__all__ = ["__version__"]

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
