# -*- coding: utf-8 -*-
"""
Game session of the sliding-tile merge puzzle.

This module provides the `GameSession` class, which owns a game and exposes the commands a front end drives.
"""

from .session import GameSession

__all__ = ["GameSession"]
