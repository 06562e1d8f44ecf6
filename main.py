"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame
"""

import logging

from snake_chase.controller import GameController


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    GameController().run()


if __name__ == "__main__":
    main()
