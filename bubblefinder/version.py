#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BubbleFinder v0.1.0

Version information.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

__version__ = "0.1.0"

# BubbleFinder v0.1.0
# Any usage is subject to this software's license.
