"""Armada: fleet placement and shot resolution for a console Battleship variant."""

__version__ = "0.1.0"
