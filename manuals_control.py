# -*- coding: utf-8 -*-
"""
Play the sliding-tile merge puzzle in a Matplotlib window.

Keys: arrows move, ctrl+z / cmd+z / u undo, backspace starts a new game, s saves the score,
c clears the leaderboard, escape quits.
"""
import logging
from argparse import ArgumentParser
from pathlib import Path
from typing import Any

from tilemerge.addons import GameConfig
from tilemerge.envs import GameSession
from tilemerge.storage import JsonFileStore
from tilemerge.utils import WindowBoard

logger = logging.getLogger(__name__)

UNDO_KEYS = {"ctrl+z", "cmd+z", "super+z", "u"}


def key_handler(session: GameSession, window: WindowBoard, name: str, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    session: GameSession
        The game session

    window: WindowBoard
        Window drawing the session

    name: str
        Player name used when saving the score

    event: Any
        event to handle
    """
    logger.debug("pressed %s", event.key)

    if event.key == "escape":
        window.close()
        return None

    if event.key == "backspace":
        session.new_game()
        return None

    if event.key in UNDO_KEYS:
        if not session.undo():
            logger.info("Nothing to undo")
        return None

    if event.key == "s":
        recorded = session.record_score(name)
        logger.info("Saved score %d for %s", session.score, recorded)
        return None

    if event.key == "c":
        session.clear_leaderboard()
        return None

    if event.key in session.ACTIONS:
        direction = session.ACTIONS[event.key]
        if direction not in session.legal_moves:
            logger.debug("%s would not move any tile", direction.name)
            return None

        result = session.move(direction)
        if result.changed:
            logger.info("points=%d score=%d", result.points, session.score)
        if session.game_over:
            logger.info("terminated!")
        return None


if __name__ == "__main__":
    parser = ArgumentParser(description="Play the sliding-tile merge puzzle")
    parser.add_argument("--state", type=Path, default=Path.home() / ".tilemerge" / "state.json", help="Save file")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the tile spawner")
    parser.add_argument("--name", default="", help="Name recorded with saved scores")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(name)s: %(message)s")

    config = GameConfig()
    window_board = WindowBoard(title="Tile Merge", size=config.size)
    game = GameSession(config=config, store=JsonFileStore(args.state), renderer=window_board, seed=args.seed)
    window_board.register_key_handler(lambda event: key_handler(game, window_board, args.name, event))

    # Blocking event loop
    window_board.show(block=True)
