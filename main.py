"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame

Environment:
    SNAKE_HIGHSCORE_FILE  where the best score is kept
    SNAKE_LOG_LEVEL       DEBUG / INFO / WARNING (default)
"""

import logging

from solosnake.config import LOG_LEVEL
from solosnake.controller import GameController


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GameController().run()


if __name__ == "__main__":
    main()
