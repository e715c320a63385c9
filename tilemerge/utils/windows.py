# -*- coding: utf-8 -*-
"""
Graphical window for the sliding-tile merge puzzle.

This module draws a game session with Matplotlib: the grid, the score, the best score, a game-over banner
and the leaderboard. Keyboard events of the window are forwarded to a handler so a front end can drive
the session.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event

if TYPE_CHECKING:
    from tilemerge.envs.session import GameSession


class WindowBoard:
    """
    Matplotlib window rendering a game session.

    An instance is callable with a session, so it can be passed directly as the
    session renderer.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        0: "#CCC0B3",
        2: "#FF6B6B",
        4: "#4ECDC4",
        8: "#FFD166",
        16: "#06D6A0",
        32: "#118AB2",
        64: "#EF476F",
        128: "#9B5DE5",
        256: "#F15BB5",
        512: "#00BBF9",
        1024: "#00F5D4",
        2048: "#FF9E00",
    }
    DEFAULT_COLOR = "#3D348B"

    def __init__(self, title: str, size: int):
        """
        Initialize the window.

        Parameters
        ----------
        title : str
            The title of the window.
        size : int
            Side of the grid.
        """
        self.size = size
        self.fig = plt.figure(figsize=(6, 7))
        self.fig.canvas.manager.set_window_title(title)
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

        # ##>: Header line for scores, one axe per cell, footer for the leaderboard.
        self.header = self.fig.text(0.5, 0.96, "", ha="center", va="center", fontsize="large", fontweight="bold")
        self.footer = self.fig.text(0.02, 0.01, "", ha="left", va="bottom", fontsize="small", family="monospace")
        grid_spec = self.fig.add_gridspec(
            size, size, left=0.05, right=0.95, bottom=0.25, top=0.92, wspace=0.05, hspace=0.05
        )
        self.axes = [self.fig.add_subplot(grid_spec[r, c]) for r in range(size) for c in range(size)]
        self.texts = []
        for ax in self.axes:
            self.texts.append(ax.text(0.5, 0.5, "", ha="center", va="center", fontweight="demibold"))
            ax.set_xticks([])
            ax.set_yticks([])

    def _close_handler(self, event: Optional[Event] = None):
        self.closed = True

    @staticmethod
    def font_size(value: int) -> str:
        """Smaller text for tiles with more digits."""
        if value >= 1000:
            return "large"
        if value >= 100:
            return "x-large"
        return "xx-large"

    def __call__(self, session: GameSession):
        self.show_session(session)

    def show_session(self, session: GameSession):
        """
        Show or update the game.

        Parameters
        ----------
        session : GameSession
            The session to draw.
        """
        for ax, text, value in zip(self.axes, self.texts, session.grid.flat):
            value = int(value)
            text.set_text(str(value) if value != 0 else "")
            text.set_fontsize(self.font_size(value))
            text.set_color("#333333" if value <= 4 else "#FFFFFF")
            ax.set_facecolor(self.COLORS.get(value, self.DEFAULT_COLOR))

        header = f"Score: {session.score}    Best: {session.best_score}"
        if session.game_over:
            header += "    GAME OVER"
        self.header.set_text(header)

        lines = [
            f"{rank:>2}. {entry.name[:16]:<16} {entry.score:>7}  {entry.date}"
            for rank, entry in enumerate(session.leaderboard, 1)
        ]
        self.footer.set_text("\n".join(lines) if lines else "No saved scores")

        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()
        plt.pause(0.001)

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler, called whenever a key is pressed in the window.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """Close the window."""
        plt.close(self.fig)
        self.closed = True
