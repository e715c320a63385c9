# -*- coding: utf-8 -*-
"""
Front-end helpers, such as the `WindowBoard` class drawing a game session with Matplotlib.
"""

from .windows import WindowBoard

__all__ = ["WindowBoard"]
